"""CompositionPipeline: seed to Artwork in one fixed sequence of steps.

Every step that draws from the random source must keep its place in this
sequence; reordering steps changes the artwork for every seed.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from mindentity.engine.constants import QUOTA_DIVISOR, SINGLE_NODE_GRID_SIZE
from mindentity.engine.context import GenerationContext
from mindentity.engine.grid import build_grid
from mindentity.engine.mask import GlyphLookup, normalize_mask, resolve_mask
from mindentity.engine.palette import derive_palette
from mindentity.engine.primitives import GridGeometry, Primitive
from mindentity.engine.rng import DeterministicSource, generate_seed
from mindentity.engine.shapes import CornerRadii, create_shape
from mindentity.engine.wrap import OffsetSettings, apply_offsets
from mindentity.models.artwork import Artwork, Shape
from mindentity.models.params import ArtworkConfig, build_config
from mindentity.utils.math_helpers import round_half_up

logger = logging.getLogger(__name__)

TRANSPARENT = "transparent"


def selection_quota(grid_size: int, chance: float) -> int:
    """Number of doubles or nodes kept: ``round(grid_size^2 * chance / 144)``."""
    return round_half_up(grid_size * grid_size * chance / QUOTA_DIVISOR)


def node_quota(grid_size: int, chance: float) -> int:
    if grid_size == SINGLE_NODE_GRID_SIZE:
        return 1
    return selection_quota(grid_size, chance)


def _keep(count: int, white_space: float) -> int:
    return math.floor(count * (1 - white_space / 100))


class CompositionPipeline:
    """Runs the composition steps on a fresh context per call."""

    def __init__(self, glyph_lookup: GlyphLookup | None = None) -> None:
        self.glyph_lookup = glyph_lookup
        self._steps: list[tuple[str, Callable[[GenerationContext], None]]] = [
            ("seed", self._resolve_seed),
            ("palette", self._derive_palette),
            ("mode", self._apply_mode),
            ("grid", self._build_grid),
            ("select", self._select),
            ("white_space", self._reduce_white_space),
            ("shapes", self._emit_shapes),
        ]

    def run(self, ctx: GenerationContext) -> GenerationContext:
        start = time.perf_counter()
        for name, step in self._steps:
            t0 = time.perf_counter()
            step(ctx)
            ctx.timings[name] = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", name, ctx.timings[name])

        logger.info(
            "Generated %d shapes on a %dx%d grid for seed %r in %.0fms",
            len(ctx.shapes),
            ctx.grid_size,
            ctx.grid_size,
            ctx.seed,
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def generate(self, config: ArtworkConfig, exclusion_mask: Any = None) -> Artwork:
        ctx = GenerationContext(config=config, explicit_mask=exclusion_mask is not None)
        if exclusion_mask is not None:
            ctx.mask = normalize_mask(exclusion_mask, config.effective_grid_size)
        self.run(ctx)
        return self._assemble(ctx)

    # ------------------------------------------------------------------ steps
    def _resolve_seed(self, ctx: GenerationContext) -> None:
        ctx.seed = ctx.config.seed or generate_seed()
        ctx.rng = DeterministicSource(ctx.seed)

    def _derive_palette(self, ctx: GenerationContext) -> None:
        ctx.palette = derive_palette(ctx.config.background_color, ctx.config.foreground_color)

    def _apply_mode(self, ctx: GenerationContext) -> None:
        config = ctx.config
        if config.mode == "none":
            return
        if config.mode == "string" and config.input:
            ctx.rng.set_seed(config.input)
        if not ctx.explicit_mask:
            ctx.mask = resolve_mask(config.input, config.effective_grid_size, self.glyph_lookup)

    def _build_grid(self, ctx: GenerationContext) -> None:
        config = ctx.config
        size = config.effective_grid_size
        ctx.geometry = GridGeometry(
            width=config.width,
            height=config.height,
            columns=size,
            rows=size,
            gap=config.gap,
            margin=config.margin,
        )
        ctx.layout = build_grid(
            ctx.rng,
            ctx.geometry,
            ctx.palette,
            ctx.mask,
            skip_excluded_draws=config.skip_excluded_draws,
        )

    def _select(self, ctx: GenerationContext) -> None:
        size = ctx.grid_size
        layout = ctx.layout
        doubles = selection_quota(size, ctx.config.half_shapes_chance)
        nodes = node_quota(size, ctx.config.node_shapes_chance)

        ctx.selected_doubles = ctx.rng.shuffle(layout.doubles)[:doubles]
        ctx.selected_nodes = ctx.rng.shuffle(layout.nodes)[:nodes]

        covered = {index for d in ctx.selected_doubles for index in d.cells}
        covered.update(index for n in ctx.selected_nodes for index in n.cells)
        ctx.selected_cells = [cell for cell in layout.cells if cell.index not in covered]
        logger.debug(
            "Selected %d doubles, %d nodes; %d cells left uncovered",
            len(ctx.selected_doubles),
            len(ctx.selected_nodes),
            len(ctx.selected_cells),
        )

    def _reduce_white_space(self, ctx: GenerationContext) -> None:
        white_space = ctx.config.white_space
        rng = ctx.rng
        ctx.final_cells = rng.shuffle(ctx.selected_cells)[: _keep(len(ctx.selected_cells), white_space)]
        ctx.final_nodes = rng.shuffle(ctx.selected_nodes)[: _keep(len(ctx.selected_nodes), white_space)]
        ctx.final_doubles = rng.shuffle(ctx.selected_doubles)[: _keep(len(ctx.selected_doubles), white_space)]

    def _emit_shapes(self, ctx: GenerationContext) -> None:
        config = ctx.config
        if not config.transparent:
            ctx.shapes.append(
                Shape(
                    type="rect",
                    attributes={
                        "x": 0,
                        "y": 0,
                        "width": config.width,
                        "height": config.height,
                        "fill": config.background_color,
                    },
                )
            )

        settings = OffsetSettings(
            columns=ctx.geometry.columns,
            rows=ctx.geometry.rows,
            offset_x=config.offset_x,
            offset_y=config.offset_y,
            offsets_rows=config.row_offsets(),
            offsets_cols=config.column_offsets(),
        )
        radii = CornerRadii(
            square=config.square_radius,
            cross=config.cross_radius,
            circle=config.circle_radius,
        )
        primitives: list[Primitive] = [*ctx.final_doubles, *ctx.final_cells, *ctx.final_nodes]
        for primitive in primitives:
            for placed in apply_offsets(primitive, settings):
                ctx.shapes.append(
                    create_shape(
                        placed.type,
                        placed.box(ctx.geometry),
                        rotation=placed.rotation,
                        fill=placed.fill,
                        radii=radii,
                        gap=config.gap,
                        palette=ctx.palette,
                        corner_style=config.corner_style,
                    )
                )

    # -------------------------------------------------------------- assembly
    @staticmethod
    def _assemble(ctx: GenerationContext) -> Artwork:
        config = ctx.config
        return Artwork(
            width=config.width,
            height=config.height,
            background_color=TRANSPARENT if config.transparent else config.background_color,
            shapes=ctx.shapes,
            gradients=list(ctx.palette.gradients),
            gradient_color=ctx.palette.gradient_color,
            seed=ctx.seed,
        )


def generate(
    config: ArtworkConfig | Mapping[str, Any] | None = None,
    *,
    exclusion_mask: Any = None,
    glyph_lookup: GlyphLookup | None = None,
    **params: Any,
) -> Artwork:
    """Generate one artwork.

    ``config`` and keyword ``params`` are merged and validated; invalid values
    raise :class:`~mindentity.errors.ConfigurationError` before any drawing.
    ``exclusion_mask`` (column-major, true = drop) overrides the glyph lookup.
    """
    resolved = build_config(config, **params)
    return CompositionPipeline(glyph_lookup=glyph_lookup).generate(resolved, exclusion_mask)


def generate_many(
    configs: Iterable[ArtworkConfig | Mapping[str, Any]],
    *,
    glyph_lookup: GlyphLookup | None = None,
) -> list[Artwork]:
    """Generate several artworks in input order, one random source per call."""
    return [generate(config, glyph_lookup=glyph_lookup) for config in configs]
