"""Decimal rounding shared by every grade computation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half-up to ``places`` decimals.

    The float is converted through its shortest ``repr`` so that values such as
    ``2.675`` round to ``2.68`` instead of following the binary approximation.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_optional(value: float | None, places: int = 2) -> float | None:
    if value is None:
        return None
    return round_half_up(value, places)
