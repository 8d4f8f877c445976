"""Exclusion masks for letter and string modes.

Glyph tables are supplied by the caller as a ``GlyphLookup``: any callable
mapping the input text to a column-major boolean grid (``grid[column][row]``;
true drops the cell). A malformed grid is not fatal: it is reported with a
:class:`~mindentity.errors.MaskParseWarning` and replaced by the empty mask.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from mindentity.errors import MaskParseWarning

logger = logging.getLogger(__name__)

GlyphLookup = Callable[[str], Any]
Mask = NDArray[np.bool_]


def empty_glyph_lookup(text: str) -> Sequence[Sequence[bool]]:
    """Default lookup: nothing is excluded."""
    return []


def _reject(reason: str) -> None:
    logger.warning("Ignoring exclusion mask: %s", reason)
    warnings.warn(f"exclusion mask ignored: {reason}", MaskParseWarning, stacklevel=3)


def normalize_mask(raw: Any, size: int) -> Mask | None:
    """Validate ``raw`` as a ``size`` x ``size`` column-major grid.

    Returns ``None`` (the empty mask) for empty input, and for malformed
    input after warning.
    """
    if raw is None:
        return None
    try:
        mask = np.asarray(raw)
    except (TypeError, ValueError) as exc:
        _reject(f"not a grid ({exc})")
        return None

    if mask.size == 0:
        return None
    if mask.ndim != 2 or mask.shape != (size, size):
        _reject(f"expected a {size}x{size} grid, got shape {mask.shape}")
        return None
    if mask.dtype != np.bool_:
        if mask.dtype.kind not in "biu":
            _reject(f"expected boolean entries, got {mask.dtype}")
            return None
        mask = mask.astype(bool)
    return mask


def resolve_mask(
    text: str | None,
    size: int,
    lookup: GlyphLookup | None = None,
    override: Any = None,
) -> Mask | None:
    """Mask for ``text``: an explicit ``override`` wins over the lookup."""
    if override is not None:
        return normalize_mask(override, size)
    if not text:
        return None
    raw = (lookup or empty_glyph_lookup)(text)
    return normalize_mask(raw, size)
