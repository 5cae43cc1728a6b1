"""
Money Helpers
=============

Currency amounts are accumulated as integer minor units (cents) and only
converted back to ``Decimal`` at the result boundary.

Usage:
    from sales_analytics.common.money import to_cents, from_cents

    cents = to_cents("19.99") * 3      # 5997
    amount = from_cents(cents)         # Decimal('59.97')
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def to_cents(value: Number) -> int:
    """Round an amount half-up to two places and return it in cents."""
    quantized = to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    return int(quantized * 100)


def from_cents(cents: Union[int, float]) -> Decimal:
    """
    Convert minor units back to a two-place Decimal.

    Float input (e.g. a smoothed or projected value) is rounded half-up to
    the nearest cent first.
    """
    if isinstance(cents, float):
        cents = int(to_decimal(cents).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return (Decimal(int(cents)) / 100).quantize(CENT)
