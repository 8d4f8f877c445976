"""Shared test fixtures."""

from __future__ import annotations

import pytest

from mindentity.engine.palette import derive_palette
from mindentity.engine.primitives import GridGeometry
from mindentity.engine.rng import DeterministicSource
from mindentity.models.params import build_config

SEED = "abc"

WHITE = "#ffffff"
BLACK = "#000000"


def letter_l_mask(size: int = 8) -> list[list[bool]]:
    """Column-major mask excluding an L: the first column and the bottom row."""
    return [[column == 0 or row == size - 1 for row in range(size)] for column in range(size)]


@pytest.fixture
def rng() -> DeterministicSource:
    return DeterministicSource(SEED)


@pytest.fixture
def palette():
    return derive_palette(WHITE, BLACK)


@pytest.fixture
def geometry() -> GridGeometry:
    return GridGeometry(width=1024, height=1024, columns=8, rows=8, gap=10, margin=100)


@pytest.fixture
def default_config():
    return build_config(seed=SEED)
