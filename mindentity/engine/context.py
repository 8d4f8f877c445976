"""GenerationContext: the mutable state of one generation call.

Each call builds a fresh context (and a fresh random source); nothing here is
shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mindentity.engine.grid import GridLayout
from mindentity.engine.mask import Mask
from mindentity.engine.palette import Palette
from mindentity.engine.primitives import Cell, Double, GridGeometry, Node
from mindentity.engine.rng import DeterministicSource, Seed
from mindentity.models.artwork import Shape
from mindentity.models.params import ArtworkConfig


@dataclass
class GenerationContext:
    """Shared state flowing through the composition steps."""

    config: ArtworkConfig
    seed: Seed = ""
    rng: DeterministicSource | None = None
    palette: Palette | None = None
    geometry: GridGeometry | None = None
    mask: Mask | None = None
    # Caller supplied the mask; glyph lookup is skipped
    explicit_mask: bool = False
    layout: GridLayout | None = None

    # Quota-selected primitives, before white-space reduction
    selected_doubles: list[Double] = field(default_factory=list)
    selected_nodes: list[Node] = field(default_factory=list)
    selected_cells: list[Cell] = field(default_factory=list)

    # Survivors of white-space reduction, in draw order per collection
    final_doubles: list[Double] = field(default_factory=list)
    final_nodes: list[Node] = field(default_factory=list)
    final_cells: list[Cell] = field(default_factory=list)

    shapes: list[Shape] = field(default_factory=list)
    # Step name -> elapsed milliseconds
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def grid_size(self) -> int:
        return self.config.effective_grid_size
