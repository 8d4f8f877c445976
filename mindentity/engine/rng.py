"""DeterministicSource: seeded random stream plus simplex noise.

Seed scheme (kept bit-compatible with previously published artwork):

* a string seed is reduced to ``abs(hash)`` where ``hash = hash * 31 + code``
  over its UTF-16 code units, wrapped to signed 32 bits after every step;
* the stream state ``s`` then advances as ``s = sin(s) * 10000`` and each
  draw is the fractional part of the new state;
* building the noise permutation table consumes the first 255 draws, both at
  construction and on every :meth:`DeterministicSource.set_seed`.

Every generation step draws from this stream in a fixed order, so changing
the order of calls changes all downstream output for the same seed.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from typing import TypeVar

from mindentity.engine.constants import NOISE_TABLE_SIZE
from mindentity.errors import RandomnessError
from mindentity.utils.math_helpers import to_base36, to_int32

T = TypeVar("T")

Seed = str | int | float

_HEX_DIGITS = "0123456789abcdef"

# 2-D gradient directions (12 pairs); only the x component is read per slot,
# the y component is taken from the neighbouring slot of the table.
_GRAD2 = (
    1, 1, -1, 1, 1, -1, -1, -1, 1, 0, -1, 0,
    1, 0, -1, 0, 0, 1, 0, -1, 0, 1, 0, -1,
)  # fmt: skip

_F2 = 0.5 * (math.sqrt(3) - 1)
_G2 = (3 - math.sqrt(3)) / 6


def hash_string(text: str) -> int:
    """32-bit rolling hash of ``text`` (``h * 31 + code``), absolute value."""
    data = text.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        value = to_int32((value << 5) - value + code)
    return abs(value)


def seed_from_string(text: str) -> str:
    """Short stable seed for arbitrary input (base-36 of :func:`hash_string`)."""
    return to_base36(hash_string(text))


def generate_seed() -> str:
    """Fresh non-reproducible seed: ``0x`` followed by 64 hex digits."""
    return "0x" + "".join(random.choice(_HEX_DIGITS) for _ in range(64))


class _SineStream:
    """``s = sin(s) * 10000``; yields the fractional part of each new state."""

    def __init__(self, state: float) -> None:
        self._state = float(state)

    def __call__(self) -> float:
        self._state = math.sin(self._state) * 10000
        return self._state - math.floor(self._state)


class SimplexNoise:
    """2-D simplex noise over a permutation table shuffled from ``random``."""

    def __init__(self, random: Callable[[], float]) -> None:
        self._perm = self._build_permutation_table(random)
        self._grad2 = [_GRAD2[(p % 12) * 2] for p in self._perm]

    @staticmethod
    def _build_permutation_table(random: Callable[[], float]) -> list[int]:
        size = NOISE_TABLE_SIZE
        table = list(range(size))
        for i in range(size - 1):
            j = i + int(random() * (size - i))
            table[i], table[j] = table[j], table[i]
        return table + table

    def _grad(self, index: int) -> float:
        # Table lookups can reach one slot past the end; wrap instead.
        return self._grad2[index & (2 * NOISE_TABLE_SIZE - 1)]

    def noise2d(self, x: float, y: float) -> float:
        perm = self._perm

        s = (x + y) * _F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1 + 2 * _G2
        y2 = y0 - 1 + 2 * _G2

        ii = i & 255
        jj = j & 255

        n0 = n1 = n2 = 0.0

        t0 = 0.5 - x0 * x0 - y0 * y0
        if t0 >= 0:
            gi0 = ii + perm[jj]
            t0 *= t0
            n0 = t0 * t0 * (self._grad(gi0) * x0 + self._grad(gi0 + 1) * y0)

        t1 = 0.5 - x1 * x1 - y1 * y1
        if t1 >= 0:
            gi1 = ii + i1 + perm[jj + j1]
            t1 *= t1
            n1 = t1 * t1 * (self._grad(gi1) * x1 + self._grad(gi1 + 1) * y1)

        t2 = 0.5 - x2 * x2 - y2 * y2
        if t2 >= 0:
            gi2 = ii + 1 + perm[jj + 1]
            t2 *= t2
            n2 = t2 * t2 * (self._grad(gi2) * x2 + self._grad(gi2 + 1) * y2)

        return 70 * (n0 + n1 + n2)

    def noise3d(self, x: float, y: float, z: float) -> float:
        return self.noise2d(x + z * 0.1, y + z * 0.1)

    def noise4d(self, x: float, y: float, z: float, w: float) -> float:
        return self.noise2d(x + z * 0.1 + w * 0.01, y + z * 0.1 + w * 0.01)


class DeterministicSource:
    """Seeded random source. ``None`` seeds fall back to a non-reproducible stream."""

    def __init__(self, seed: Seed | None = None) -> None:
        self.set_seed(seed)

    @property
    def seed(self) -> Seed | None:
        return self._seed

    def set_seed(self, seed: Seed | None = None) -> None:
        """Re-seed and reset every piece of derived state."""
        self._seed = seed
        self._stream = self._create_stream(seed)
        self._gaussian_next: float | None = None
        self._noise = SimplexNoise(self._stream)

    @staticmethod
    def _create_stream(seed: Seed | None) -> Callable[[], float]:
        if seed is None:
            return random.Random().random
        state = hash_string(seed) if isinstance(seed, str) else seed
        return _SineStream(state)

    def permute_noise(self) -> None:
        """Rebuild the noise table from the current position of the stream."""
        self._noise = SimplexNoise(self._stream)

    # ------------------------------------------------------------------ scalars
    def value(self) -> float:
        """Next float in [0, 1)."""
        return self._stream()

    def value_non_zero(self) -> float:
        value = 0.0
        while value == 0.0:
            value = self.value()
        return value

    def boolean(self) -> bool:
        return self.value() > 0.5

    def sign(self) -> int:
        return 1 if self.boolean() else -1

    def chance(self, probability: float = 0.5) -> bool:
        return self.value() < probability

    def range(self, minimum: float, maximum: float | None = None) -> float:
        """Float in [minimum, maximum); a single argument means [0, minimum)."""
        if maximum is None:
            minimum, maximum = 0, minimum
        return self.value() * (maximum - minimum) + minimum

    def range_floor(self, minimum: float, maximum: float | None = None) -> int:
        return math.floor(self.range(minimum, maximum))

    # ------------------------------------------------------------- sequences
    def pick(self, seq: Sequence[T]) -> T | None:
        """Uniform pick by index; ``None`` for an empty sequence (no draw consumed)."""
        if not seq:
            return None
        return seq[self.range_floor(0, len(seq))]

    def shuffle(self, seq: Sequence[T]) -> list[T]:
        """Fisher-Yates on a copy; the input is never mutated."""
        result = list(seq)
        for i in range(len(result) - 1, 0, -1):
            j = self.range_floor(0, i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def weighted(self, weights: Sequence[float]) -> int:
        """Index picked proportionally to ``weights``."""
        total = sum(weights)
        if not weights or total <= 0:
            raise RandomnessError(f"weights must sum to > 0, got {total}")
        if any(weight < 0 for weight in weights):
            raise RandomnessError(f"negative weight in {list(weights)}")
        remaining = self.value() * total
        for i, weight in enumerate(weights):
            if remaining < weight:
                return i
            remaining -= weight
        return 0

    def weighted_set(self, items: Sequence[tuple[T, float]]) -> T | None:
        """Pick a value from ``(value, weight)`` pairs; ``None`` for an empty set."""
        if not items:
            return None
        index = self.weighted([weight for _, weight in items])
        return items[index][0]

    # --------------------------------------------------------------- geometry
    def on_circle(self, radius: float = 1.0) -> tuple[float, float]:
        angle = self.value() * 2 * math.pi
        return (radius * math.cos(angle), radius * math.sin(angle))

    def inside_circle(self, radius: float = 1.0) -> tuple[float, float]:
        x, y = self.on_circle(1.0)
        r = radius * math.sqrt(self.value())
        return (x * r, y * r)

    def gaussian(self, mean: float = 0.0, std: float = 1.0) -> float:
        """Normal sample (polar Box-Muller); the paired sample is cached for the next call."""
        if self._gaussian_next is not None:
            cached, self._gaussian_next = self._gaussian_next, None
            return mean + std * cached

        while True:
            u = self.value() * 2 - 1
            v = self.value() * 2 - 1
            s = u * u + v * v
            if 0 < s < 1:
                break

        multiplier = math.sqrt(-2 * math.log(s) / s)
        self._gaussian_next = v * multiplier
        return mean + std * (u * multiplier)

    # ------------------------------------------------------------------ noise
    def noise_1d(self, x: float, frequency: float = 1.0, amplitude: float = 1.0) -> float:
        return amplitude * self._noise.noise2d(x * frequency, 0)

    def noise_2d(self, x: float, y: float, frequency: float = 1.0, amplitude: float = 1.0) -> float:
        return amplitude * self._noise.noise2d(x * frequency, y * frequency)

    def noise_3d(
        self, x: float, y: float, z: float, frequency: float = 1.0, amplitude: float = 1.0
    ) -> float:
        return amplitude * self._noise.noise3d(x * frequency, y * frequency, z * frequency)

    def noise_4d(
        self,
        x: float,
        y: float,
        z: float,
        w: float,
        frequency: float = 1.0,
        amplitude: float = 1.0,
    ) -> float:
        return amplitude * self._noise.noise4d(
            x * frequency, y * frequency, z * frequency, w * frequency
        )
