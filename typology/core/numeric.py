"""Numeric helpers shared by the matching and diagnostics layers.

Confidence values and stability statistics go through these helpers so that
rounding and range limits follow one rule everywhere.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_EVEN, ROUND_HALF_UP, ROUND_UP, Decimal
from typing import TypeVar

__all__ = [
    "clamp",
    "safe_round",
    "safe_div",
]


NumericT = TypeVar("NumericT", int, float)

_ROUNDING = {
    "half_up": ROUND_HALF_UP,
    "down": ROUND_DOWN,
    "up": ROUND_UP,
    "half_even": ROUND_HALF_EVEN,
}


def clamp(value: NumericT, min_value: NumericT, max_value: NumericT) -> NumericT:
    """Clamp ``value`` into ``[min_value, max_value]``.

    Example:
        >>> clamp(150, 0, 100)
        100
        >>> clamp(-5, 0, 100)
        0
    """
    if min_value > max_value:
        raise ValueError(f"min_value ({min_value}) must be <= max_value ({max_value})")
    return max(min_value, min(value, max_value))


def safe_round(value: float, decimals: int = 2, method: str = "half_up") -> float:
    """Round through ``Decimal`` so halves behave like schoolbook rounding.

    Python's built-in ``round`` uses banker's rounding; confidence percentages
    are expected to round 62.5 up to 63.

    Example:
        >>> safe_round(62.5, 0)
        63.0
        >>> safe_round(2.125, 2, "half_even")
        2.12
    """
    if method not in _ROUNDING:
        raise ValueError(f"Invalid rounding method: {method}. Use one of {sorted(_ROUNDING)}.")
    quantizer = Decimal(10) ** -decimals
    rounded = Decimal(str(value)).quantize(quantizer, rounding=_ROUNDING[method])
    return float(rounded)


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is zero."""

    if denominator == 0:
        return default
    return numerator / denominator
