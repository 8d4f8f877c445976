"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def rotate_points(
    points: NDArray[np.float64],
    center: tuple[float, float],
    angle: float,
) -> NDArray[np.float64]:
    """Rotate an Nx2 point set about ``center``.

    A quarter circle whose corner sits bottom-left moves to bottom-right at
    ``pi / 2`` (y-down canvas).
    """
    cos = np.cos(angle)
    sin = np.sin(angle)
    cx, cy = center
    dx = points[:, 0] - cx
    dy = points[:, 1] - cy
    x = cos * dx + sin * dy + cx
    y = cos * dy - sin * dx + cy
    return np.column_stack([x, y])


def edge_vector(start: NDArray[np.float64], end: NDArray[np.float64]) -> tuple[NDArray[np.float64], float]:
    """Return (unit vector, length) from ``start`` to ``end``. Zero-length edges give a zero vector."""
    delta = end - start
    length = float(np.hypot(delta[0], delta[1]))
    if length == 0.0:
        return np.zeros(2), 0.0
    return delta / length, length


def turn_angle(v1: NDArray[np.float64], v2: NDArray[np.float64]) -> float:
    """Unsigned angle between two vectors, in [0, pi]."""
    cross = v1[0] * v2[1] - v1[1] * v2[0]
    dot = v1[0] * v2[0] + v1[1] * v2[1]
    return float(abs(np.arctan2(cross, dot)))

