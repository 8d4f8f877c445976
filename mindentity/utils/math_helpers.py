"""Math helpers: rounding, 32-bit wrapping, number formatting. No engine imports."""

from __future__ import annotations

import math
import re

_EXPONENT_RE = re.compile(r"e([+-])0*(\d)")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +inf.

    Quotas and colour channels were always rounded this way; Python's
    ``round`` uses banker's rounding and would shift 0.5 cases.
    """
    return math.floor(value + 0.5)


def round_to(value: float, decimals: int = 2) -> float:
    """Round half-up to a fixed number of decimals."""
    scale = 10**decimals
    return round_half_up(value * scale) / scale


def to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def to_base36(value: int) -> str:
    """Lower-case base-36 text of a non-negative integer."""
    if value < 0:
        raise ValueError("value must be non-negative")
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return "".join(reversed(out))


def format_number(value: float) -> str:
    """Shortest round-trip text for a coordinate: 100.0 -> '100', 1e-07 -> '1e-7'."""
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return _EXPONENT_RE.sub(r"e\1\2", repr(number))
