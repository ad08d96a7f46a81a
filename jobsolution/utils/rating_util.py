from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable


def round_half_up(value: float, digits: int = 1) -> float:
    """Round away from zero on ties, unlike the built-in banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean_rating(ratings: Iterable[float]) -> float:
    values = list(ratings)
    if not values:
        return 0.0
    return round_half_up(sum(values) / len(values), 1)
