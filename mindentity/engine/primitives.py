"""Grid primitives: cells, 2x2 nodes and 1x2 doubles.

A primitive is a tagged value with a common payload (index, grid position,
shape type, rotation, fill). Nodes and doubles additionally carry the indices
of the cells they cover and of the cells around them; they reference those
cells, they do not own them.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from mindentity.engine.constants import HALF_PI, THREE_HALVES_PI


class ShapeType(str, enum.Enum):
    CIRCLE_FULL = "CIRCLE_FULL"
    CIRCLE_HALF = "CIRCLE_HALF"
    CIRCLE_QUARTER = "CIRCLE_QURT"
    DIAGONAL = "DIAGONAL"
    SQUARE = "SQUARE"
    CROSS = "CROSS"


class Orientation(str, enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# Allowed rotations per type; the tuple order is part of the seeded draw sequence.
SHAPE_ROTATIONS: dict[ShapeType, tuple[float, ...]] = {
    ShapeType.CIRCLE_FULL: (0.0,),
    ShapeType.CIRCLE_HALF: (0.0, math.pi),
    ShapeType.CIRCLE_QUARTER: (0.0, HALF_PI, math.pi, THREE_HALVES_PI),
    ShapeType.DIAGONAL: (0.0, HALF_PI),
    ShapeType.SQUARE: (0.0,),
    ShapeType.CROSS: (0.0,),
}

CELL_TYPES = (ShapeType.SQUARE, ShapeType.CIRCLE_QUARTER)
NODE_TYPES = (ShapeType.CROSS, ShapeType.CIRCLE_FULL, ShapeType.DIAGONAL)


@dataclass(frozen=True)
class GridGeometry:
    """Pixel layout of a square grid inside the canvas."""

    width: float
    height: float
    columns: int
    rows: int
    gap: float
    margin: float

    @property
    def cell_width(self) -> float:
        return (self.width - self.margin * 2 - (self.columns - 1) * self.gap) / self.columns

    @property
    def cell_height(self) -> float:
        return (self.height - self.margin * 2 - (self.rows - 1) * self.gap) / self.rows

    @property
    def total_cells(self) -> int:
        return self.columns * self.rows

    def position(self, column: int, row: int) -> tuple[float, float]:
        """Top-left pixel corner of the cell at (column, row)."""
        x = self.margin + self.cell_width * column + self.gap * column
        y = self.margin + self.cell_height * row + self.gap * row
        return (x, y)

    def span(self, cells: int, axis: str = "x") -> float:
        """Pixel extent of ``cells`` adjacent cells, gaps included."""
        size = self.cell_width if axis == "x" else self.cell_height
        return size * cells + self.gap * (cells - 1)

    def index_of(self, column: int, row: int) -> int:
        return column * self.rows + row


@dataclass(frozen=True)
class Primitive:
    index: int
    column: int
    row: int
    type: ShapeType
    rotation: float
    fill: str

    @property
    def span(self) -> tuple[int, int]:
        """Footprint in cells: (columns, rows)."""
        return (1, 1)

    def box(self, geometry: GridGeometry) -> tuple[float, float, float, float]:
        """Pixel (x, y, width, height) at the primitive's grid position."""
        columns, rows = self.span
        x, y = geometry.position(self.column, self.row)
        return (x, y, geometry.span(columns, "x"), geometry.span(rows, "y"))


@dataclass(frozen=True)
class Cell(Primitive):
    """A single grid cell."""


@dataclass(frozen=True)
class Node(Primitive):
    cells: tuple[int, ...] = ()
    neighbour_cells: tuple[int, ...] = ()
    neighbours: tuple[int, ...] = ()

    @property
    def span(self) -> tuple[int, int]:
        return (2, 2)


@dataclass(frozen=True)
class Double(Primitive):
    orientation: Orientation = Orientation.HORIZONTAL
    cells: tuple[int, ...] = ()
    neighbour_cells: tuple[int, ...] = ()

    @property
    def span(self) -> tuple[int, int]:
        return (2, 1) if self.orientation is Orientation.HORIZONTAL else (1, 2)
