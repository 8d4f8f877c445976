"""GridBuilder: lays out cells, nodes and doubles and draws their looks.

Draw order per pass (all passes iterate ``index`` with
``column = index // rows`` and ``row = index % rows``):

1. cells: type, rotation, gradient candidate, tone-vs-gradient;
2. nodes (interior positions only): type, rotation, and for diagonals a
   gradient candidate plus tone-vs-gradient;
3. doubles: horizontal pair (rotation, then fill), then vertical pair
   (fill, then rotation).

The gradient candidate is drawn before the 80/20 tone-vs-gradient pick even
when the tone wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from mindentity.engine.constants import GRADIENT_FILL_WEIGHT, SOLID_FILL_WEIGHT
from mindentity.engine.palette import (
    BOTTOM_LEFT,
    BOTTOM_RIGHT,
    GRADIENT_URLS,
    TOP_LEFT,
    TOP_RIGHT,
    Palette,
    pick_gradient,
)
from mindentity.engine.primitives import (
    CELL_TYPES,
    NODE_TYPES,
    SHAPE_ROTATIONS,
    Cell,
    Double,
    GridGeometry,
    Node,
    Orientation,
    ShapeType,
)
from mindentity.engine.rng import DeterministicSource

logger = logging.getLogger(__name__)

# Gradients that run against a diagonal's own axis, keyed by its rotation.
_DIAGONAL_EXCLUDES = {
    0.0: (GRADIENT_URLS[TOP_RIGHT], GRADIENT_URLS[BOTTOM_LEFT]),
    1.0: (GRADIENT_URLS[TOP_LEFT], GRADIENT_URLS[BOTTOM_RIGHT]),
}


@dataclass
class GridLayout:
    geometry: GridGeometry
    cells: list[Cell] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)
    doubles: list[Double] = field(default_factory=list)

    @property
    def horizontal_doubles(self) -> list[Double]:
        return [d for d in self.doubles if d.orientation is Orientation.HORIZONTAL]

    @property
    def vertical_doubles(self) -> list[Double]:
        return [d for d in self.doubles if d.orientation is Orientation.VERTICAL]


def _tone_or_gradient(
    rng: DeterministicSource,
    tone: str,
    excludes: tuple[str, ...] = (),
) -> str:
    gradient = pick_gradient(rng, excludes)
    return rng.weighted_set([(tone, SOLID_FILL_WEIGHT), (gradient, GRADIENT_FILL_WEIGHT)]) or tone


def _pick_rotation(rng: DeterministicSource, shape_type: ShapeType) -> float:
    rotation = rng.pick(SHAPE_ROTATIONS[shape_type])
    return rotation if rotation is not None else 0.0


class _CellLookup:
    """Cells that survived the mask, indexed by (column, row)."""

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], Cell] = {}

    def add(self, cell: Cell) -> None:
        self._cells[(cell.column, cell.row)] = cell

    def get(self, column: int, row: int) -> Cell | None:
        return self._cells.get((column, row))

    def indices(self, *positions: tuple[int, int]) -> tuple[int, ...]:
        found = (self.get(column, row) for column, row in positions)
        return tuple(cell.index for cell in found if cell is not None)

    def block(self, column: int, row: int) -> tuple[int, ...]:
        """Existing cells of the 2x2 block at (column, row): TL, TR, BR, BL."""
        return self.indices(
            (column, row),
            (column + 1, row),
            (column + 1, row + 1),
            (column, row + 1),
        )


def _is_excluded(mask: NDArray[np.bool_] | None, column: int, row: int) -> bool:
    if mask is None:
        return False
    return bool(mask[column, row])


def _build_cells(
    rng: DeterministicSource,
    geometry: GridGeometry,
    palette: Palette,
    mask: NDArray[np.bool_] | None,
    skip_excluded_draws: bool,
    lookup: _CellLookup,
) -> list[Cell]:
    cells: list[Cell] = []
    for index in range(geometry.total_cells):
        column, row = divmod(index, geometry.rows)
        excluded = _is_excluded(mask, column, row)
        if excluded and skip_excluded_draws:
            continue

        shape_type = rng.pick(CELL_TYPES)
        rotation = _pick_rotation(rng, shape_type)
        tone = palette.tone_20 if shape_type is ShapeType.SQUARE else palette.tone_70
        fill = _tone_or_gradient(rng, tone)

        if excluded:
            continue
        cell = Cell(index=index, column=column, row=row, type=shape_type, rotation=rotation, fill=fill)
        lookup.add(cell)
        cells.append(cell)
    return cells


def _build_nodes(
    rng: DeterministicSource,
    geometry: GridGeometry,
    palette: Palette,
    skip_excluded_draws: bool,
    lookup: _CellLookup,
) -> list[Node]:
    nodes: list[Node] = []
    total = geometry.total_cells
    rows = geometry.rows
    for index in range(total):
        column, row = divmod(index, rows)
        if column >= geometry.columns - 1 or row >= rows - 1:
            continue

        covered = lookup.block(column, row)
        if skip_excluded_draws and len(covered) != 4:
            continue

        shape_type = rng.pick(NODE_TYPES)
        rotation = _pick_rotation(rng, shape_type)
        if shape_type is ShapeType.DIAGONAL:
            excludes = _DIAGONAL_EXCLUDES[0.0 if rotation == 0 else 1.0]
            fill = _tone_or_gradient(rng, palette.tone_10, excludes)
        else:
            fill = palette.tone_10

        if len(covered) != 4:
            continue
        neighbours = (
            index + 1, index + rows + 1, index + rows, index + rows - 1,
            index - 1, index - rows + 1, index - rows - 1, index - rows,
        )  # fmt: skip
        nodes.append(
            Node(
                index=index,
                column=column,
                row=row,
                type=shape_type,
                rotation=rotation,
                fill=fill,
                cells=covered,
                neighbour_cells=(
                    lookup.block(column + 2, row)
                    + lookup.block(column - 2, row)
                    + lookup.block(column, row + 2)
                    + lookup.block(column, row - 2)
                ),
                neighbours=tuple(n for n in neighbours if 0 <= n < total),
            )
        )
    return nodes


def _horizontal_ring(column: int, row: int) -> list[tuple[int, int]]:
    return [
        (column - 1, row - 1), (column, row - 1), (column + 1, row - 1), (column + 2, row - 1),
        (column + 2, row), (column + 2, row + 1), (column + 1, row + 1), (column, row + 1),
        (column - 1, row + 1), (column - 1, row),
    ]  # fmt: skip


def _vertical_ring(column: int, row: int) -> list[tuple[int, int]]:
    return [
        (column - 1, row - 1), (column, row - 1), (column + 1, row - 1), (column + 1, row),
        (column + 1, row + 1), (column + 1, row + 2), (column, row + 2), (column - 1, row + 2),
        (column - 1, row + 1), (column - 1, row),
    ]  # fmt: skip


def _build_doubles(
    rng: DeterministicSource,
    geometry: GridGeometry,
    palette: Palette,
    skip_excluded_draws: bool,
    lookup: _CellLookup,
) -> list[Double]:
    doubles: list[Double] = []

    def emit(
        column: int,
        row: int,
        orientation: Orientation,
        partner: tuple[int, int],
        ring: list[tuple[int, int]],
        draw: Callable[[], tuple[float, str]],
    ) -> None:
        covered = lookup.indices((column, row), partner)
        if skip_excluded_draws and len(covered) != 2:
            return
        rotation, fill = draw()
        if len(covered) != 2:
            return
        doubles.append(
            Double(
                index=len(doubles),
                column=column,
                row=row,
                type=ShapeType.CIRCLE_HALF,
                rotation=rotation,
                fill=fill,
                orientation=orientation,
                cells=covered,
                neighbour_cells=lookup.indices(*ring),
            )
        )

    def rotation_then_fill() -> tuple[float, str]:
        rotation = _pick_rotation(rng, ShapeType.CIRCLE_HALF)
        return rotation, _tone_or_gradient(rng, palette.tone_30)

    def fill_then_rotation() -> tuple[float, str]:
        fill = _tone_or_gradient(rng, palette.tone_30)
        return _pick_rotation(rng, ShapeType.CIRCLE_HALF), fill

    for index in range(geometry.total_cells):
        column, row = divmod(index, geometry.rows)
        if column < geometry.columns - 1:
            emit(column, row, Orientation.HORIZONTAL, (column + 1, row), _horizontal_ring(column, row), rotation_then_fill)
        if row < geometry.rows - 1:
            emit(column, row, Orientation.VERTICAL, (column, row + 1), _vertical_ring(column, row), fill_then_rotation)
    return doubles


def build_grid(
    rng: DeterministicSource,
    geometry: GridGeometry,
    palette: Palette,
    mask: NDArray[np.bool_] | None = None,
    *,
    skip_excluded_draws: bool = False,
) -> GridLayout:
    """Generate every candidate primitive for the grid.

    ``mask`` is a column-major boolean array (``mask[column, row]``); true
    entries drop the cell and every node or double that would cover it.
    """
    lookup = _CellLookup()
    cells = _build_cells(rng, geometry, palette, mask, skip_excluded_draws, lookup)
    nodes = _build_nodes(rng, geometry, palette, skip_excluded_draws, lookup)
    doubles = _build_doubles(rng, geometry, palette, skip_excluded_draws, lookup)
    logger.debug(
        "Grid %dx%d: %d cells, %d nodes, %d doubles",
        geometry.columns,
        geometry.rows,
        len(cells),
        len(nodes),
        len(doubles),
    )
    return GridLayout(geometry=geometry, cells=cells, nodes=nodes, doubles=doubles)
