"""Path data: building, parsing and measuring SVG path strings.

Parsing delegates to svgpathtools; text it cannot read raises
:class:`~mindentity.errors.GeometryConstructionError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from svgpathtools import Line, Path, parse_path

from mindentity.errors import GeometryConstructionError
from mindentity.utils.math_helpers import format_number

logger = logging.getLogger(__name__)


def format_command(letter: str, *args: float) -> str:
    if not args:
        return letter
    return f"{letter} " + " ".join(format_number(a) for a in args)


def polygon_path(points: Iterable[Iterable[float]]) -> str:
    """Closed ``M ... L ... Z`` path through ``points``."""
    parts = [
        format_command("M" if i == 0 else "L", *point)
        for i, point in enumerate(points)
    ]
    parts.append("Z")
    return " ".join(parts)


def path_segments(d: str) -> Path:
    """Parse ``d`` into absolute svgpathtools segments."""
    try:
        return parse_path(d)
    except (IndexError, ValueError) as exc:
        raise GeometryConstructionError(f"malformed path data {d!r}: {exc}") from exc


def polygon_vertices(d: str) -> list[tuple[float, float]]:
    """Vertices of a single straight-edged subpath, closing point excluded.

    Relative and ``H``/``V`` commands are resolved by the parser; curves,
    arcs and a second subpath raise :class:`GeometryConstructionError`.
    """
    segments = [seg for seg in path_segments(d) if seg.start != seg.end]
    for seg in segments:
        if not isinstance(seg, Line):
            raise GeometryConstructionError(f"expected straight edges only, found {type(seg).__name__}")
    if not Path(*segments).iscontinuous():
        raise GeometryConstructionError(f"expected a single subpath: {d!r}")

    points = [seg.start for seg in segments]
    if segments and segments[-1].end != segments[0].start:
        points.append(segments[-1].end)
    logger.debug("Read %d polygon vertices from path data", len(points))
    return [(float(p.real), float(p.imag)) for p in points]


def path_bounds(d: str) -> tuple[float, float, float, float]:
    """Geometric (xmin, ymin, xmax, ymax) of a path, arcs included."""
    xmin, xmax, ymin, ymax = path_segments(d).bbox()
    return (float(xmin), float(ymin), float(xmax), float(ymax))
