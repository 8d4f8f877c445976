"""Tests for rounding, wrapping and geometry helpers."""

import math

import numpy as np
import pytest

from mindentity.utils.geometry import edge_vector, rotate_points, turn_angle
from mindentity.utils.math_helpers import (
    format_number,
    round_half_up,
    round_to,
    to_base36,
    to_int32,
)


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (1.49, 1)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_round_to():
    assert round_to(0.125, 2) == 0.13
    assert round_to(2.0, 3) == 2.0


def test_to_int32():
    assert to_int32(2**31) == -(2**31)
    assert to_int32(2**32 + 5) == 5
    assert to_int32(-1) == -1


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    with pytest.raises(ValueError):
        to_base36(-1)


@pytest.mark.parametrize(
    "value, text",
    [(100.0, "100"), (-3.0, "-3"), (0.5, "0.5"), (1e-07, "1e-7"), (-0.0, "0")],
)
def test_format_number(value, text):
    assert format_number(value) == text


def test_rotate_quarter_turn_moves_bottom_left_to_bottom_right():
    points = np.array([[0.0, 10.0]])
    rotated = rotate_points(points, (5.0, 5.0), math.pi / 2)
    assert rotated[0] == pytest.approx((10.0, 10.0))


def test_edge_vector():
    unit, length = edge_vector(np.array([0.0, 0.0]), np.array([3.0, 4.0]))
    assert length == 5.0
    assert unit == pytest.approx((0.6, 0.8))
    zero, length = edge_vector(np.array([1.0, 1.0]), np.array([1.0, 1.0]))
    assert length == 0.0 and not zero.any()


def test_turn_angle():
    assert turn_angle(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(math.pi / 2)
    assert turn_angle(np.array([1.0, 0.0]), np.array([-1.0, 0.0])) == pytest.approx(math.pi)
