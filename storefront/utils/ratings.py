from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple

ONE_DECIMAL = Decimal("0.1")


def summarize_ratings(rating_sum, review_count: Optional[int]) -> Tuple[float, int]:
    """
    Average rating (half-up, one decimal) and review count.

    Both read paths go through this function with an exact integer sum, so
    the listing and the single-product view always agree.
    """
    count = int(review_count or 0)
    if count == 0:
        return 0.0, 0
    average = (Decimal(rating_sum or 0) / Decimal(count)).quantize(
        ONE_DECIMAL, rounding=ROUND_HALF_UP
    )
    return float(average), count


def summarize_rating_values(ratings: Iterable[int]) -> Tuple[float, int]:
    """Summarize individual rating values"""
    values = list(ratings)
    return summarize_ratings(sum(values), len(values))
