from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 1) -> float:
    """Round half away from zero, unlike the builtin banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> float:
    """part/whole as a percentage rounded to 1 decimal, clamped to [0, 100]."""
    if whole <= 0:
        return 0.0
    return min(100.0, max(0.0, round_half_up(part / whole * 100)))
