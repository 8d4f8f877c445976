"""Corner rounding for closed polygons.

Each vertex is replaced by a line to the tangent point on the incoming edge
and a cubic Bézier to the tangent point on the outgoing edge. The requested
radius is clamped to half of the shorter adjacent edge. Three control-length
styles are supported:

* ``circle``: ``segments = ceil(2*pi / (pi - turn))``,
  ``k = 4/3 * tan(pi / (2*segments)) * r_eff`` with ``r_eff = r * tan(turn/2)``
  (circular-arc approximation);
* ``approx``: ``k = 4/3 * tan(turn/4) * r * (1 + cos turn | 2 - sin turn)``
  (polygonal approximation, branch on ``turn < pi/2``);
* ``hand``: ``k = 4/3 * tan(turn/4) * r * (2 + sin turn)``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from mindentity.engine.constants import CORNER_PRECISION
from mindentity.errors import GeometryConstructionError
from mindentity.svg.path_data import format_command, polygon_vertices
from mindentity.utils.geometry import edge_vector, turn_angle
from mindentity.utils.math_helpers import format_number, round_to

CornerStyle = Literal["circle", "approx", "hand"]

CORNER_STYLES: tuple[str, ...] = ("circle", "approx", "hand")


def _control_length(style: str, turn: float, radius: float) -> float:
    if style == "circle":
        half_angle = math.cos(turn / 2) * radius
        offset = math.sin(turn / 2) * half_angle
        control_distance = math.cos(turn / 2) * half_angle
        bezier_radius = offset / (control_distance / radius) if control_distance else 0.0
        gap = math.pi - turn
        segments = math.ceil(2 * math.pi / gap) if gap > 0 else math.inf
        return (4 / 3) * math.tan(math.pi / (2 * segments)) * bezier_radius
    if style == "approx":
        shape = 1 + math.cos(turn) if turn < math.pi / 2 else 2 - math.sin(turn)
        return (4 / 3) * math.tan(turn / 4) * radius * shape
    if style == "hand":
        return (4 / 3) * math.tan(turn / 4) * radius * (2 + math.sin(turn))
    raise ValueError(f"unknown corner style: {style!r}")


def _rounded(point: NDArray[np.float64]) -> tuple[float, float]:
    return (round_to(float(point[0]), CORNER_PRECISION), round_to(float(point[1]), CORNER_PRECISION))


def _pair(point: tuple[float, float]) -> str:
    return f"{format_number(point[0])} {format_number(point[1])}"


def round_polygon_corners(
    vertices: NDArray[np.float64] | Sequence[Sequence[float]],
    radius: float | Sequence[float],
    style: str = "circle",
) -> str:
    """Rounded closed path through ``vertices``.

    ``radius`` is either one value for every corner or one value per vertex;
    entry ``i`` applies to the corner at vertex ``i + 1`` (the corner at
    vertex 0 is governed by the last entry).
    """
    if style not in CORNER_STYLES:
        raise ValueError(f"unknown corner style: {style!r}")
    points = np.asarray(vertices, dtype=np.float64)
    count = len(points)
    if isinstance(radius, (int, float)):
        radii = [float(radius)] * count
    else:
        radii = [float(r) for r in radius]
        if len(radii) != count:
            raise GeometryConstructionError(f"expected {count} corner radii, got {len(radii)}")

    commands: list[str] = []
    for i in range(count):
        p1 = points[i]
        p2 = points[(i + 1) % count]
        p3 = points[(i + 2) % count]

        u1, len1 = edge_vector(p2, p1)
        u2, len2 = edge_vector(p2, p3)
        turn = turn_angle(u1, u2)

        requested = radii[i]
        r = min(requested, len1 / 2, len2 / 2)
        if requested == 0 or r <= 0:
            commands.append(format_command("L", *p1))
            commands.append(format_command("L", *p2))
            continue

        control_offset = r - _control_length(style, turn, r)
        start = _rounded(p2 + u1 * r)
        start_control = _rounded(p2 + u1 * control_offset)
        end = _rounded(p2 + u2 * r)
        end_control = _rounded(p2 + u2 * control_offset)

        if i == count - 1:
            commands.insert(0, format_command("M", *end))
        commands.append(format_command("L", *start))
        commands.append(f"C {_pair(start_control)}, {_pair(end_control)}, {_pair(end)}")

    if commands and not commands[0].startswith("M"):
        commands[0] = "M" + commands[0][1:]
    commands.append("Z")
    return " ".join(commands)


def round_path_corners(path: str, radius: float | Sequence[float], style: str = "circle") -> str:
    """Round the corners of a straight-edged polygon given as path text."""
    if not path:
        return path
    if isinstance(radius, (int, float)):
        if radius == 0:
            return path
    elif all(r == 0 for r in radius):
        return path

    vertices = polygon_vertices(path)
    if len(vertices) < 3:
        raise GeometryConstructionError(f"corner rounding needs at least 3 vertices, got {len(vertices)}")
    return round_polygon_corners(vertices, radius, style)
