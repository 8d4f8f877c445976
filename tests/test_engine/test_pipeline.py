"""End-to-end tests for the composition pipeline."""

import logging
import math

import pytest

from tests.conftest import SEED, letter_l_mask

from mindentity import generate, generate_many
from mindentity.engine import CompositionPipeline, GenerationContext
from mindentity.engine.pipeline import node_quota, selection_quota
from mindentity.errors import ConfigurationError, MaskParseWarning
from mindentity.models.params import build_config


def _run(**params) -> GenerationContext:
    return CompositionPipeline().run(GenerationContext(config=build_config(**params)))


def _drawn(artwork):
    """Shapes minus the background rect."""
    return [s for s in artwork.shapes if s.provenance is not None]


# ----------------------------------------------------------------- quotas


@pytest.mark.parametrize(
    "grid_size, chance, expected",
    [
        (8, 4, 2),
        (12, 4.5, 5),
        (12, 0, 0),
        (24, 4, 16),
        (2, 4, 0),
    ],
)
def test_selection_quota(grid_size, chance, expected):
    assert selection_quota(grid_size, chance) == expected


def test_node_quota_special_cases_three():
    assert node_quota(3, 0) == 1
    assert node_quota(3, 100) == 1
    assert node_quota(4, 0) == 0


def test_three_by_three_grid_gets_exactly_one_node():
    ctx = _run(seed=SEED, grid_size=3, node_shapes_chance=0)
    assert len(ctx.selected_nodes) == 1


# ------------------------------------------------------------- determinism


def test_same_seed_same_artwork():
    a = generate(seed=SEED)
    b = generate(seed=SEED)
    assert a.model_dump() == b.model_dump()


def test_different_seeds_differ():
    assert generate(seed="abc").shapes != generate(seed="abd").shapes


def test_background_rect_comes_first():
    artwork = generate(seed=SEED)
    background = artwork.shapes[0]
    assert background.type == "rect"
    assert background.attributes == {"x": 0, "y": 0, "width": 1024, "height": 1024, "fill": "#ffffff"}
    assert artwork.background_color == "#ffffff"
    assert artwork.seed == SEED
    assert len(artwork.gradients) == 4


def test_transparent_has_no_background_rect():
    artwork = generate(seed=SEED, transparent=True)
    assert artwork.background_color == "transparent"
    assert all(shape.provenance is not None for shape in artwork.shapes)
    opaque = generate(seed=SEED)
    assert artwork.shapes == opaque.shapes[1:]


def test_missing_seed_is_generated():
    artwork = generate()
    assert isinstance(artwork.seed, str)
    assert artwork.seed.startswith("0x") and len(artwork.seed) == 66


def test_numeric_seed_is_reproducible():
    assert generate(seed=42).shapes == generate(seed=42).shapes


def test_gradient_fills_resolve():
    artwork = generate(seed=SEED)
    for shape in artwork.shapes:
        if shape.fill and shape.fill.startswith("url("):
            assert artwork.gradient_for(shape.fill) is not None


# ------------------------------------------------------------- white space


def test_white_space_truncates_each_collection():
    ctx = _run(seed=SEED, white_space=20)
    assert len(ctx.final_cells) == math.floor(len(ctx.selected_cells) * 0.8)
    assert len(ctx.final_nodes) == math.floor(len(ctx.selected_nodes) * 0.8)
    assert len(ctx.final_doubles) == math.floor(len(ctx.selected_doubles) * 0.8)


def test_no_white_space_keeps_everything():
    ctx = _run(seed=SEED, white_space=0)
    assert len(ctx.final_cells) == len(ctx.selected_cells)
    assert len(ctx.shapes) == 1 + len(ctx.final_cells) + len(ctx.final_nodes) + len(ctx.final_doubles)


def test_full_white_space_leaves_only_background():
    artwork = generate(seed=SEED, white_space=100)
    assert len(artwork.shapes) == 1


def test_selected_primitives_do_not_overlap():
    ctx = _run(seed=SEED, grid_size=12, half_shapes_chance=20, node_shapes_chance=20)
    covered = [i for d in ctx.selected_doubles for i in d.cells]
    covered += [i for n in ctx.selected_nodes for i in n.cells]
    cell_indices = {c.index for c in ctx.selected_cells}
    assert cell_indices.isdisjoint(covered)


def test_draw_order_doubles_cells_nodes():
    ctx = _run(seed=SEED, white_space=0, half_shapes_chance=10, node_shapes_chance=10)
    drawn = ctx.shapes[1:]
    doubles = len(ctx.final_doubles)
    cells = len(ctx.final_cells)
    assert all(s.type == "path" for s in drawn[:doubles])
    node_shapes = drawn[doubles + cells :]
    assert len(node_shapes) == len(ctx.final_nodes)
    for shape, node in zip(node_shapes, ctx.final_nodes):
        assert shape.provenance == pytest.approx(node.box(ctx.geometry))


def test_timings_recorded_per_step():
    ctx = _run(seed=SEED)
    assert list(ctx.timings) == ["seed", "palette", "mode", "grid", "select", "white_space", "shapes"]


# ------------------------------------------------------------------ modes


def test_letter_mode_applies_glyph_mask():
    artwork = generate(seed=SEED, mode="letter", input="L", glyph_lookup=lambda text: letter_l_mask())
    drawn = _drawn(artwork)
    assert drawn
    for shape in drawn:
        x, y, w, h = shape.provenance
        assert x != pytest.approx(100.0)
        assert y + h < 924.0 - 1e-6


def test_letter_mode_forces_eight_by_eight():
    ctx = _run(seed=SEED, grid_size=12, mode="letter", input="A")
    assert ctx.grid_size == 8
    assert len(ctx.layout.cells) == 64


def test_string_mode_reseeds_from_input():
    a = generate(seed="one", mode="string", input="hello")
    b = generate(seed="two", mode="string", input="hello")
    assert a.shapes == b.shapes
    assert a.seed == "one" and b.seed == "two"


def test_string_mode_without_input_keeps_seed():
    a = generate(seed=SEED, mode="string")
    b = generate(seed=SEED)
    assert a.shapes == b.shapes


def test_malformed_glyph_mask_warns_and_is_ignored():
    with pytest.warns(MaskParseWarning):
        artwork = generate(seed=SEED, mode="letter", input="A", glyph_lookup=lambda text: [[True]])
    assert artwork.shapes == generate(seed=SEED).shapes


def test_explicit_mask_overrides_glyph_lookup():
    everything = [[True] * 8 for _ in range(8)]
    a = generate(
        seed=SEED,
        mode="letter",
        input="A",
        glyph_lookup=lambda text: everything,
        exclusion_mask=letter_l_mask(),
    )
    b = generate(seed=SEED, exclusion_mask=letter_l_mask())
    assert a.shapes == b.shapes
    assert len(a.shapes) > 1


def test_fully_masked_grid_draws_nothing():
    everything = [[True] * 8 for _ in range(8)]
    artwork = generate(seed=SEED, exclusion_mask=everything)
    assert len(artwork.shapes) == 1


# ---------------------------------------------------------------- offsets


def test_offsets_keep_shapes_on_the_grid():
    plain = generate(seed=SEED, half_shapes_chance=20, node_shapes_chance=20)
    shifted = generate(seed=SEED, half_shapes_chance=20, node_shapes_chance=20, offset_x=3, offset_y=5)
    assert len(shifted.shapes) >= len(plain.shapes)
    for shape in _drawn(shifted):
        x, y, w, h = shape.provenance
        assert x >= 100.0 - 1e-6 and x + w <= 924.0 + 1e-6
        assert y >= 100.0 - 1e-6 and y + h <= 924.0 + 1e-6


def test_full_cycle_offset_is_identity():
    assert generate(seed=SEED, offset_x=8).shapes == generate(seed=SEED).shapes


def test_per_row_offsets():
    artwork = generate(seed=SEED, offsets_rows=[1, 0, 2, 0, 1, 0, 2, 0])
    assert len(_drawn(artwork)) >= len(_drawn(generate(seed=SEED)))


# ------------------------------------------------------------------ inputs


def test_camel_case_parameters():
    a = generate({"gridSize": 5, "halfShapesChance": 10, "seed": SEED})
    b = generate(grid_size=5, half_shapes_chance=10, seed=SEED)
    assert a.shapes == b.shapes


@pytest.mark.parametrize(
    "params",
    [
        {"grid_size": 1},
        {"white_space": 120},
        {"background_color": "not-a-color"},
        {"background_color": "rgb(nan, 0, 0)"},
        {"mode": "letter", "input": "AB"},
        {"margin": 600},
        {"mode": "emoji"},
        {"unknown_option": True},
    ],
)
def test_invalid_parameters_raise(params):
    with pytest.raises(ConfigurationError) as excinfo:
        generate(seed=SEED, **params)
    assert excinfo.value.errors


def test_generate_many_in_order():
    results = generate_many([{"seed": "a"}, {"seed": "b", "gridSize": 4}])
    assert [r.seed for r in results] == ["a", "b"]
    assert results[0].shapes == generate(seed="a").shapes
    assert results[1].shapes == generate(seed="b", grid_size=4).shapes


@pytest.mark.parametrize("seed", [float("inf"), float("nan")])
def test_non_finite_seed_fails_before_drawing(seed):
    with pytest.raises(ConfigurationError):
        generate(seed=seed)


def test_summary_log_line_names_grid(caplog):
    caplog.set_level(logging.INFO, logger="mindentity.engine.pipeline")
    artwork = generate(seed=SEED, grid_size=5)
    summaries = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert len(summaries) == 1
    assert summaries[0].startswith(f"Generated {len(artwork.shapes)} shapes on a 5x5 grid for seed ")
