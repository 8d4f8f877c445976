"""Palette: four blend tones and four corner-to-corner gradients.

The palette is derived once per generation call and passed explicitly to the
grid builder and the shape factory.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mindentity.engine.constants import (
    GRADIENT_END_OPACITY,
    GRADIENT_START_OPACITY,
    TONE_RATIOS,
)
from mindentity.engine.rng import DeterministicSource
from mindentity.models.artwork import Gradient, GradientStop
from mindentity.utils.color import blend_colors

TOP_LEFT = "top-left"
TOP_RIGHT = "top-right"
BOTTOM_RIGHT = "bottom-right"
BOTTOM_LEFT = "bottom-left"

# Unit-square endpoints (x1, y1, x2, y2) per direction, in descriptor order.
GRADIENT_DIRECTIONS: dict[str, tuple[float, float, float, float]] = {
    TOP_LEFT: (0, 0, 1, 1),
    TOP_RIGHT: (1, 0, 0, 1),
    BOTTOM_RIGHT: (1, 1, 0, 0),
    BOTTOM_LEFT: (0, 1, 1, 0),
}


def gradient_url(name: str) -> str:
    return f"url(#gradient-{name})"


GRADIENT_URLS: dict[str, str] = {name: gradient_url(name) for name in GRADIENT_DIRECTIONS}

# Candidate order for random picks; part of the seeded draw sequence.
_PICK_ORDER = (
    GRADIENT_URLS[TOP_LEFT],
    GRADIENT_URLS[BOTTOM_LEFT],
    GRADIENT_URLS[TOP_RIGHT],
    GRADIENT_URLS[BOTTOM_RIGHT],
)


@dataclass(frozen=True)
class Palette:
    background: str
    foreground: str
    tone_10: str
    tone_20: str
    tone_30: str
    tone_70: str
    gradients: tuple[Gradient, ...]

    @property
    def gradient_color(self) -> str:
        return self.tone_20


def derive_palette(background: str, foreground: str) -> Palette:
    """Blend the tones and build the gradient descriptors for a colour pair."""
    tones = {name: blend_colors(background, foreground, ratio) for name, ratio in TONE_RATIOS.items()}
    gradient_color = tones["tone_20"]
    gradients = tuple(
        Gradient(
            name=name,
            x1=x1,
            y1=y1,
            x2=x2,
            y2=y2,
            stops=[
                GradientStop(position=0, color=gradient_color, opacity=GRADIENT_START_OPACITY),
                GradientStop(position=1, color=gradient_color, opacity=GRADIENT_END_OPACITY),
            ],
        )
        for name, (x1, y1, x2, y2) in GRADIENT_DIRECTIONS.items()
    )
    return Palette(background=background, foreground=foreground, gradients=gradients, **tones)


def pick_gradient(rng: DeterministicSource, excludes: Iterable[str] = ()) -> str:
    """Random gradient reference, skipping ``excludes``; top-left when nothing is left."""
    excluded = set(excludes)
    available = [url for url in _PICK_ORDER if url not in excluded]
    return rng.pick(available) or GRADIENT_URLS[TOP_LEFT]


def gradient_coordinates(
    fill: str,
    box: tuple[float, float, float, float],
) -> tuple[float, float, float, float] | None:
    """Absolute gradient line for a gradient ``fill`` over an (x, y, width, height) box.

    Returns ``None`` for solid fills.
    """
    x, y, width, height = box
    for name, url in GRADIENT_URLS.items():
        if url == fill:
            x1, y1, x2, y2 = GRADIENT_DIRECTIONS[name]
            return (x + x1 * width, y + y1 * height, x + x2 * width, y + y2 * height)
    return None
