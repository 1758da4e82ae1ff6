"""Comparison helpers for monetary values.

Amounts are stored unrounded; these helpers round half-up to cents only
for the purpose of comparing two values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from qbiif_schemas import Amount, quantize_cents


def _as_decimal(value: Decimal | Amount) -> Decimal:
    if isinstance(value, Amount):
        return value.value
    return value


def apply_precision(value: Decimal | Amount) -> Decimal:
    return quantize_cents(_as_decimal(value), ROUND_HALF_UP)


def compare_money(first: Decimal | Amount, second: Decimal | Amount) -> int:
    """Return -1, 0 or 1 comparing two values at cent precision."""
    left = apply_precision(first)
    right = apply_precision(second)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def amounts_equal(first: Decimal | Amount, second: Decimal | Amount) -> bool:
    return compare_money(first, second) == 0


__all__ = ["amounts_equal", "apply_precision", "compare_money"]
