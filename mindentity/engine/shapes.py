"""ShapeFactory: turns a positioned primitive into a drawable Shape.

Every shape carries its originating grid box as ``data-x``/``data-y``/
``data-width``/``data-height`` so gradient mapping can recover it without
re-deriving geometry.

Geometry notes:

* quarter circle: corner radius ``r = circle% * width`` (clamped to half the
  side), chord ``hyp = sqrt((size - r)^2 - r^2)``; drawn with its corner at
  the bottom-left and rotated about the box centre;
* half circle: ``r = circle% / 2 * max(w, h)``, flat side at the bottom of a
  horizontal box and at the right of a vertical one;
* cross and diagonal: closed polygons rounded by
  :func:`~mindentity.svg.corners.round_polygon_corners`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from mindentity.engine.palette import Palette
from mindentity.engine.primitives import ShapeType
from mindentity.engine.registry import get_registry, shape_builder
from mindentity.models.artwork import Shape
from mindentity.svg.corners import round_polygon_corners
from mindentity.svg.path_data import format_command, polygon_path
from mindentity.utils.geometry import rotate_points

logger = logging.getLogger(__name__)

Box = tuple[float, float, float, float]


@dataclass(frozen=True)
class CornerRadii:
    """Corner-radius percentages per shape family."""

    square: float = 12.0
    cross: float = 6.0
    circle: float = 4.0


@dataclass(frozen=True)
class ShapeRequest:
    type: ShapeType
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    fill: str = ""
    radii: CornerRadii = CornerRadii()
    gap: float = 10.0
    palette: Palette | None = None
    corner_style: str = "circle"

    @property
    def provenance(self) -> dict[str, float | str]:
        return {
            "data-x": self.x,
            "data-y": self.y,
            "data-width": self.width,
            "data-height": self.height,
        }


def _arc(radius_x: float, radius_y: float, point: np.ndarray) -> str:
    return format_command("A", radius_x, radius_y, 0, 0, 0, point[0], point[1])


def _path(request: ShapeRequest, d: str, fill: str | None = None) -> Shape:
    attributes = request.provenance
    attributes["d"] = d
    attributes["fill"] = request.fill if fill is None else fill
    return Shape(type="path", attributes=attributes)


def _rect(request: ShapeRequest, radius: float | None = None) -> Shape:
    attributes = request.provenance
    attributes.update(x=request.x, y=request.y, width=request.width, height=request.height, fill=request.fill)
    if radius is not None:
        attributes["rx"] = radius
    return Shape(type="rect", attributes=attributes)


@shape_builder(type=ShapeType.SQUARE, description="Rounded rectangle")
def build_square(request: ShapeRequest) -> Shape:
    return _rect(request, radius=request.radii.square / 100 * request.width)


@shape_builder(type=ShapeType.CIRCLE_FULL, description="Circle inscribed in the box")
def build_circle(request: ShapeRequest) -> Shape:
    attributes = request.provenance
    attributes.update(
        cx=request.x + request.width * 0.5,
        cy=request.y + request.height * 0.5,
        r=min(request.width, request.height) * 0.5,
        fill=request.fill,
    )
    return Shape(type="circle", attributes=attributes)


@shape_builder(type=ShapeType.CIRCLE_QUARTER, description="Quarter disc with rounded corners")
def build_quarter_circle(request: ShapeRequest) -> Shape:
    width, height = request.width, request.height
    size = min(width, height)
    r = min(request.radii.circle / 100 * width, size * 0.5)
    inner = size - r
    hypotenuse = math.sqrt(max(0.0, inner * inner - r * r))
    angle = math.atan2(r, hypotenuse)
    # Tangent point on the outer arc, measured from the corner.
    along = math.cos(angle) * size
    across = math.sin(angle) * size

    points = np.array(
        [
            [r, height],
            [hypotenuse, height],
            [along, height - across],
            [across, height - along],
            [0, height - hypotenuse],
            [0, height - r],
            [r, height],
        ],
        dtype=np.float64,
    )
    points = rotate_points(points, (size * 0.5, size * 0.5), request.rotation) + (request.x, request.y)

    d = " ".join(
        [
            format_command("M", *points[0]),
            format_command("L", *points[1]),
            _arc(r, r, points[2]),
            _arc(size, size, points[3]),
            _arc(r, r, points[4]),
            format_command("L", *points[5]),
            _arc(r, r, points[6]),
        ]
    )
    return _path(request, d)


@shape_builder(type=ShapeType.CIRCLE_HALF, description="Half disc across a double")
def build_half_circle(request: ShapeRequest) -> Shape:
    width, height = request.width, request.height
    horizontal = width > height
    max_dim, min_dim = max(width, height), min(width, height)
    radius_x = width * (0.5 if horizontal else 1)
    radius_y = height * (0.5 if width < height else 1)
    main_radius = radius_x if horizontal else radius_y

    r = min(request.radii.circle * 0.5 / 100 * max_dim, main_radius * 0.5)
    inner = main_radius - r
    hypotenuse = math.sqrt(max(0.0, inner * inner - r * r))
    angle = math.atan2(r, hypotenuse)
    rise = math.sin(angle) * main_radius
    reach = math.cos(angle) * main_radius
    middle = max_dim * 0.5

    if horizontal:
        outline = [
            [middle - hypotenuse, min_dim],
            [middle + hypotenuse, min_dim],
            [middle + reach, min_dim - rise],
            [middle - reach, min_dim - rise],
            [middle - hypotenuse, min_dim],
        ]
    else:
        outline = [
            [min_dim, middle + hypotenuse],
            [min_dim, middle - hypotenuse],
            [min_dim - rise, middle - reach],
            [min_dim - rise, middle + reach],
            [min_dim, middle + hypotenuse],
        ]
    points = np.array(outline, dtype=np.float64)
    points = rotate_points(points, (width * 0.5, height * 0.5), request.rotation) + (request.x, request.y)

    d = " ".join(
        [
            format_command("M", *points[0]),
            format_command("L", *points[1]),
            _arc(r, r, points[2]),
            _arc(radius_x, radius_y, points[3]),
            _arc(r, r, points[4]),
            "Z",
        ]
    )
    return _path(request, d)


def _diagonal_frame(request: ShapeRequest) -> tuple[float, float]:
    """(offset, complement) of the slanted edges inside a node box."""
    cell_size = (request.width - request.gap) / 2
    diagonal = math.sqrt(2) * abs(cell_size)
    offset = request.height * 0.5 + math.tan(math.pi * 0.25) * (request.width * 0.5 - diagonal * 0.5)
    return offset, request.width - offset


def _corner_radius(request: ShapeRequest) -> float:
    return request.radii.cross / 100 * request.width * 0.5


@shape_builder(type=ShapeType.DIAGONAL, description="Band across a node along one diagonal")
def build_diagonal(request: ShapeRequest) -> Shape:
    w, h = request.width, request.height
    offset, complement = _diagonal_frame(request)
    if request.rotation == 0:
        vertices = [[0, 0], [complement, 0], [w, h - complement], [w, h], [w - complement, h], [0, offset]]
    else:
        vertices = [[w, 0], [w, offset], [complement, h], [0, h], [0, h - offset], [w - complement, 0]]
    points = np.array(vertices, dtype=np.float64) + (request.x, request.y)

    corner = _corner_radius(request)
    small = corner * 0.5
    radii = [small, small, corner, small, small, corner]
    return _path(request, _rounded_polygon(points, radii, request.corner_style))


@shape_builder(type=ShapeType.CROSS, description="X across a node")
def build_cross(request: ShapeRequest) -> Shape:
    w, h = request.width, request.height
    offset, complement = _diagonal_frame(request)
    diagonal = math.sqrt(2) * abs((w - request.gap) / 2)
    inner_x = (w - diagonal) * 0.5
    inner_y = (h - diagonal) * 0.5
    vertices = [
        [0, 0], [complement, 0], [w * 0.5, inner_y], [w - complement, 0],
        [w, 0], [w, complement], [w - inner_x, h * 0.5], [w, h - complement],
        [w, h], [w - complement, h], [w * 0.5, h - inner_y], [complement, h],
        [0, h], [0, w - complement], [inner_x, h * 0.5], [0, complement],
    ]  # fmt: skip
    points = np.array(vertices, dtype=np.float64) + (request.x, request.y)

    corner = _corner_radius(request)
    small = corner * 0.5
    radii = [small, 0.0, small, corner] * 4
    fill = request.palette.tone_10 if request.palette is not None else request.fill
    return _path(request, _rounded_polygon(points, radii, request.corner_style), fill=fill)


def _rounded_polygon(points: np.ndarray, radii: list[float], style: str) -> str:
    if all(r == 0 for r in radii):
        return polygon_path(points)
    return round_polygon_corners(points, radii, style)


def create_shape(
    shape_type: ShapeType | str,
    box: Box,
    *,
    rotation: float = 0.0,
    fill: str = "",
    radii: CornerRadii | None = None,
    gap: float = 10.0,
    palette: Palette | None = None,
    corner_style: str = "circle",
) -> Shape:
    """Build the Shape for one primitive occupying ``box`` (x, y, width, height).

    Types without a registered builder render as a plain rectangle.
    """
    x, y, width, height = box
    try:
        resolved = ShapeType(shape_type)
    except ValueError:
        resolved = None
    request = ShapeRequest(
        type=resolved if resolved is not None else ShapeType.SQUARE,
        x=x,
        y=y,
        width=width,
        height=height,
        rotation=rotation,
        fill=fill,
        radii=radii or CornerRadii(),
        gap=gap,
        palette=palette,
        corner_style=corner_style,
    )
    spec = get_registry().find(resolved) if resolved is not None else None
    if spec is None:
        logger.debug("No shape builder for %r, drawing a rectangle", shape_type)
        return _rect(request)
    return spec.fn(request)
