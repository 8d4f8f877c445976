"""Colour parsing and blending.

Accepts ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()/rgba()``,
``hsl()/hsla()`` and the basic CSS named colours. Everything is normalised to
0..1 RGBA. Unparseable input never raises: it becomes opaque black and a
:class:`~mindentity.errors.ColorParseWarning` is emitted.
"""

from __future__ import annotations

import colorsys
import logging
import math
import re
import warnings

from mindentity.errors import ColorParseWarning
from mindentity.utils.math_helpers import round_half_up

logger = logging.getLogger(__name__)

RGBA = tuple[float, float, float, float]
RGB = tuple[float, float, float]

_FUNC_RE = re.compile(r"^(rgba?|hsla?)\(([^)]+)\)$", re.IGNORECASE)
_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)

NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "silver": "#c0c0c0",
    "gray": "#808080",
    "maroon": "#800000",
    "olive": "#808000",
    "lime": "#00ff00",
    "aqua": "#00ffff",
    "teal": "#008080",
    "navy": "#000080",
    "fuchsia": "#ff00ff",
    "purple": "#800080",
}

_BLACK: RGBA = (0.0, 0.0, 0.0, 1.0)


def parse_hex_color(text: str) -> RGBA:
    """Parse a hex colour, expanding the 3/4-digit shorthands."""
    match = _HEX_RE.match(text.strip())
    if not match:
        raise ValueError(f"not a hex colour: {text!r}")
    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(1.0)
    return (channels[0], channels[1], channels[2], channels[3])


def _parse_args(body: str) -> list[float] | None:
    values = [float(part.strip().rstrip("%")) for part in body.split(",")]
    if not all(math.isfinite(v) for v in values):
        return None
    return values


def _try_parse(text: str) -> RGBA | None:
    color = text.strip()
    if color.startswith("#"):
        try:
            return parse_hex_color(color)
        except ValueError:
            return None

    match = _FUNC_RE.match(color)
    if match:
        kind = match.group(1).lower()
        try:
            values = _parse_args(match.group(2))
        except ValueError:
            return None
        if values is None or len(values) < 3:
            return None
        alpha = values[3] if len(values) > 3 else 1.0
        if kind.startswith("rgb"):
            return (values[0] / 255, values[1] / 255, values[2] / 255, alpha)
        r, g, b = colorsys.hls_to_rgb(values[0] / 360, values[2] / 100, values[1] / 100)
        return (r, g, b, alpha)

    named = NAMED_COLORS.get(color.lower())
    if named:
        return parse_hex_color(named)
    return None


def parse_color(text: str) -> RGBA:
    """Parse any supported colour string to normalised RGBA."""
    parsed = _try_parse(text)
    if parsed is None:
        logger.warning("Unable to parse color %r, defaulting to black", text)
        warnings.warn(f"Unable to parse color {text!r}, defaulting to black", ColorParseWarning, stacklevel=2)
        return _BLACK
    return parsed


def is_valid_color(text: str) -> bool:
    """True when ``text`` parses without falling back to black."""
    return isinstance(text, str) and _try_parse(text) is not None


def rgb_to_hex(rgb: RGB) -> str:
    """0..1 RGB to ``#rrggbb``; channels are rounded half-up to 8 bits."""
    channels = (max(0, min(255, round_half_up(c * 255))) for c in rgb[:3])
    return "#" + "".join(f"{c:02x}" for c in channels)


def rgba_to_string(rgba: RGBA = _BLACK) -> str:
    r, g, b, a = rgba
    return f"rgba({round_half_up(r * 255)}, {round_half_up(g * 255)}, {round_half_up(b * 255)}, {a:g})"


def blend_colors(color1: str, color2: str, ratio: float) -> str:
    """Linear per-channel blend: ``color1 * (1 - ratio) + color2 * ratio``, as hex."""
    c1 = parse_color(color1)
    c2 = parse_color(color2)
    blended = tuple(c2[i] * ratio + c1[i] * (1 - ratio) for i in range(3))
    return rgb_to_hex(blended)  # type: ignore[arg-type]


def to_hex(color: str) -> str:
    return rgb_to_hex(parse_color(color)[:3])


def to_rgba(color: str) -> str:
    return rgba_to_string(parse_color(color))
