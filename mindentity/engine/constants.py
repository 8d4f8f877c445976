"""Shared generation constants.

Every value here feeds the seeded output; changing one changes the artwork
produced for an existing seed.
"""

import math

# Share of the foreground colour in each tone (tone_10 is 90% foreground).
TONE_RATIOS: dict[str, float] = {
    "tone_10": 0.9,
    "tone_20": 0.8,
    "tone_30": 0.7,
    "tone_70": 0.3,
}

# Solid tone vs gradient fill, drawn as a weighted pair (80/20).
SOLID_FILL_WEIGHT = 80
GRADIENT_FILL_WEIGHT = 20

# Gradient stops: full opacity at the start, 20% at the end.
GRADIENT_START_OPACITY = 1.0
GRADIENT_END_OPACITY = 0.2

# Chance percentages are calibrated against a 12x12 reference grid.
QUOTA_DIVISOR = 144

# Grids this size always get exactly one node.
SINGLE_NODE_GRID_SIZE = 3

# Letter and string modes lay glyphs on a fixed 8x8 grid.
GLYPH_GRID_SIZE = 8

# Decimals kept on rounded-corner control points.
CORNER_PRECISION = 3

# Noise permutation table: 256 entries, shuffled with 255 draws.
NOISE_TABLE_SIZE = 256

HALF_PI = math.pi * 0.5
THREE_HALVES_PI = math.pi * 1.5
