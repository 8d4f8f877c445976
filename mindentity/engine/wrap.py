"""OffsetWrapEngine: toroidal row/column shifts with wrap splitting.

Every cell moves on its own: the column shift depends on the cell's row and
the row shift on its column::

    column_shift(row) = (offset_x + offsets_rows[row % len]) % columns
    row_shift(column) = (offset_y + offsets_cols[column % len]) % rows

A multi-cell primitive whose shifted footprint leaves the grid, or whose
constituent cells land apart (they sat in differently shifted rows or
columns), is split into single-cell pieces that redraw the same silhouette.
The split outputs come from the decision tables below.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace

from mindentity.engine.constants import HALF_PI, THREE_HALVES_PI
from mindentity.engine.primitives import Cell, Double, Node, Orientation, Primitive, ShapeType

logger = logging.getLogger(__name__)


class WrapCase(str, enum.Enum):
    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BOTH = "both"
    SHEARED = "sheared"


@dataclass(frozen=True)
class OffsetSettings:
    columns: int
    rows: int
    offset_x: int = 0
    offset_y: int = 0
    offsets_rows: tuple[int, ...] = (0,)
    offsets_cols: tuple[int, ...] = (0,)


def column_shift(settings: OffsetSettings, row: int) -> int:
    """Columns to move a cell in ``row``, normalised into [0, columns)."""
    offsets = settings.offsets_rows
    return (settings.offset_x + offsets[row % len(offsets)]) % settings.columns


def row_shift(settings: OffsetSettings, column: int) -> int:
    """Rows to move a cell in ``column``, normalised into [0, rows)."""
    offsets = settings.offsets_cols
    return (settings.offset_y + offsets[column % len(offsets)]) % settings.rows


def shift_cell(settings: OffsetSettings, column: int, row: int) -> tuple[int, int]:
    return (
        (column + column_shift(settings, row)) % settings.columns,
        (row + row_shift(settings, column)) % settings.rows,
    )


# Double split: orientation x rotation -> quarter-circle rotations for
# (first cell, second cell). Quarter rotations put the disc corner at
# 0: bottom-left, pi/2: bottom-right, pi: top-right, 3pi/2: top-left.
DOUBLE_SPLITS: dict[tuple[Orientation, float], tuple[float, float]] = {
    (Orientation.HORIZONTAL, 0.0): (HALF_PI, 0.0),
    (Orientation.HORIZONTAL, math.pi): (math.pi, THREE_HALVES_PI),
    (Orientation.VERTICAL, 0.0): (HALF_PI, math.pi),
    (Orientation.VERTICAL, math.pi): (0.0, THREE_HALVES_PI),
}


@dataclass(frozen=True)
class Piece:
    """One split output: sub-cell offset inside the node plus its look."""

    column: int
    row: int
    type: ShapeType
    rotation: float = 0.0
    orientation: Orientation | None = None


_TL, _TR, _BR, _BL = (0, 0), (1, 0), (1, 1), (0, 1)


def _squares(*corners: tuple[int, int]) -> tuple[Piece, ...]:
    return tuple(Piece(dc, dr, ShapeType.SQUARE) for dc, dr in corners)


_CROSS_PIECES = _squares(_TL, _TR, _BR, _BL)
_DIAGONAL_PIECES = {
    0.0: _squares(_TL, _BR),
    1.0: _squares(_TR, _BL),
}

# Full-circle node split per wrap case.
CIRCLE_SPLITS: dict[WrapCase, tuple[Piece, ...]] = {
    WrapCase.HORIZONTAL: (
        Piece(0, 0, ShapeType.CIRCLE_HALF, 0.0, Orientation.VERTICAL),
        Piece(1, 0, ShapeType.CIRCLE_HALF, math.pi, Orientation.VERTICAL),
    ),
    WrapCase.VERTICAL: (
        Piece(0, 0, ShapeType.CIRCLE_HALF, 0.0, Orientation.HORIZONTAL),
        Piece(0, 1, ShapeType.CIRCLE_HALF, math.pi, Orientation.HORIZONTAL),
    ),
    WrapCase.BOTH: (
        Piece(*_TL, ShapeType.CIRCLE_QUARTER, HALF_PI),
        Piece(*_TR, ShapeType.CIRCLE_QUARTER, 0.0),
        Piece(*_BR, ShapeType.CIRCLE_QUARTER, THREE_HALVES_PI),
        Piece(*_BL, ShapeType.CIRCLE_QUARTER, math.pi),
    ),
}


def node_pieces(node_type: ShapeType, rotation: float, case: WrapCase) -> tuple[Piece, ...]:
    """Decision table lookup: node type x wrap case -> split pieces."""
    if case is WrapCase.NONE:
        return ()
    if node_type is ShapeType.CROSS:
        return _CROSS_PIECES
    if node_type is ShapeType.DIAGONAL:
        return _DIAGONAL_PIECES[0.0 if rotation == 0 else 1.0]
    if node_type is ShapeType.CIRCLE_FULL:
        return CIRCLE_SPLITS[case]
    raise ValueError(f"no split rule for {node_type.value} nodes")


def _partner(double: Double) -> tuple[int, int]:
    if double.orientation is Orientation.HORIZONTAL:
        return (double.column + 1, double.row)
    return (double.column, double.row + 1)


def classify_double(double: Double, settings: OffsetSettings) -> WrapCase:
    first = shift_cell(settings, double.column, double.row)
    second = shift_cell(settings, *_partner(double))
    if double.orientation is Orientation.HORIZONTAL:
        if first[0] + 2 > settings.columns:
            return WrapCase.HORIZONTAL
        expected = (first[0] + 1, first[1])
    else:
        if first[1] + 2 > settings.rows:
            return WrapCase.VERTICAL
        expected = (first[0], first[1] + 1)
    return WrapCase.NONE if second == expected else WrapCase.SHEARED


def classify_node(node: Node, settings: OffsetSettings) -> WrapCase:
    column, row = shift_cell(settings, node.column, node.row)
    wraps_h = column + 2 > settings.columns
    wraps_v = row + 2 > settings.rows
    if wraps_h and wraps_v:
        return WrapCase.BOTH
    if wraps_h:
        return WrapCase.HORIZONTAL
    if wraps_v:
        return WrapCase.VERTICAL
    return WrapCase.NONE


def _split_double(double: Double, settings: OffsetSettings) -> list[Primitive]:
    rotations = DOUBLE_SPLITS[(double.orientation, 0.0 if double.rotation == 0 else math.pi)]
    positions = (
        shift_cell(settings, double.column, double.row),
        shift_cell(settings, *_partner(double)),
    )
    return [
        Cell(
            index=double.index,
            column=column,
            row=row,
            type=ShapeType.CIRCLE_QUARTER,
            rotation=rotation,
            fill=double.fill,
        )
        for (column, row), rotation in zip(positions, rotations)
    ]


def _split_node(node: Node, case: WrapCase, origin: tuple[int, int], settings: OffsetSettings) -> list[Primitive]:
    pieces: list[Primitive] = []
    for piece in node_pieces(node.type, node.rotation, case):
        column = (origin[0] + piece.column) % settings.columns
        row = (origin[1] + piece.row) % settings.rows
        if piece.orientation is not None:
            pieces.append(
                Double(
                    index=node.index,
                    column=column,
                    row=row,
                    type=piece.type,
                    rotation=piece.rotation,
                    fill=node.fill,
                    orientation=piece.orientation,
                )
            )
        else:
            pieces.append(
                Cell(
                    index=node.index,
                    column=column,
                    row=row,
                    type=piece.type,
                    rotation=piece.rotation,
                    fill=node.fill,
                )
            )
    return pieces


def apply_offsets(primitive: Primitive, settings: OffsetSettings) -> list[Primitive]:
    """Move ``primitive`` by the configured offsets, splitting it if it wraps.

    Returns one primitive when it stays whole, two for a split double, and
    two or four for a split node.
    """
    origin = shift_cell(settings, primitive.column, primitive.row)

    if isinstance(primitive, Double):
        case = classify_double(primitive, settings)
        if case is not WrapCase.NONE:
            logger.debug("Double %d split (%s)", primitive.index, case.value)
            return _split_double(primitive, settings)
    elif isinstance(primitive, Node):
        case = classify_node(primitive, settings)
        if case is not WrapCase.NONE:
            logger.debug("Node %d split (%s)", primitive.index, case.value)
            return _split_node(primitive, case, origin, settings)

    return [replace(primitive, column=origin[0], row=origin[1])]
