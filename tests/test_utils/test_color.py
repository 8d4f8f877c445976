"""Tests for colour parsing and blending."""

import pytest

from mindentity.errors import ColorParseWarning
from mindentity.utils.color import (
    blend_colors,
    is_valid_color,
    parse_color,
    parse_hex_color,
    rgb_to_hex,
    to_hex,
    to_rgba,
)


def test_hex_shorthands_expand():
    assert parse_hex_color("#fff") == (1.0, 1.0, 1.0, 1.0)
    assert parse_hex_color("#f008") == pytest.approx((1.0, 0.0, 0.0, 0x88 / 255))
    assert parse_hex_color("#ff000080")[3] == pytest.approx(128 / 255)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("rgb(255, 0, 0)", (1.0, 0.0, 0.0, 1.0)),
        ("rgba(0, 0, 255, 0.5)", (0.0, 0.0, 1.0, 0.5)),
        ("hsl(120, 100%, 50%)", (0.0, 1.0, 0.0, 1.0)),
        ("hsl(0, 0%, 50%)", (0.5, 0.5, 0.5, 1.0)),
        ("Navy", (0.0, 0.0, 128 / 255, 1.0)),
    ],
)
def test_parse_color_formats(text, expected):
    assert parse_color(text) == pytest.approx(expected)


def test_unparseable_color_is_black_with_warning():
    with pytest.warns(ColorParseWarning):
        assert parse_color("definitely-not") == (0.0, 0.0, 0.0, 1.0)


def test_is_valid_color():
    assert is_valid_color("#123")
    assert is_valid_color("rgb(1, 2, 3)")
    assert not is_valid_color("#12345")
    assert not is_valid_color("rgb(1, 2)")
    assert not is_valid_color(None)


def test_rgb_to_hex_rounds_half_up():
    assert rgb_to_hex((0.5, 0.5, 0.5)) == "#808080"
    assert rgb_to_hex((1.2, -0.1, 0.0)) == "#ff0000"


def test_blend():
    assert blend_colors("#ffffff", "#000000", 0.8) == "#333333"
    assert blend_colors("#ffffff", "#000000", 0.0) == "#ffffff"
    assert blend_colors("#ff0000", "#0000ff", 1.0) == "#0000ff"


def test_conversions():
    assert to_hex("white") == "#ffffff"
    assert to_rgba("#ff0000") == "rgba(255, 0, 0, 1)"


@pytest.mark.parametrize("text", ["rgb(nan, 0, 0)", "rgba(0, inf, 0, 1)", "hsl(-inf, 50%, 50%)", "rgb(0, 0, 0, nan)"])
def test_non_finite_channels_are_unparseable(text):
    assert not is_valid_color(text)
    with pytest.warns(ColorParseWarning):
        assert parse_color(text) == (0.0, 0.0, 0.0, 1.0)


def test_hsl_hues_wrap():
    assert parse_color("hsl(360, 100%, 50%)") == pytest.approx((1.0, 0.0, 0.0, 1.0))
    assert parse_color("hsla(240, 100%, 25%, 0.5)") == pytest.approx((0.0, 0.0, 0.5, 0.5))
