"""
Rating analytics recomputed from committed review rows on every request.

Nothing here is cached or stored back on properties or realtors, so the numbers
cannot drift from the reviews they describe.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Tuple

from django.db.models import Avg, Exists, OuterRef

from .models import ReviewResponse, SUB_RATING_FIELDS

STAR_VALUES = (5, 4, 3, 2, 1)


def _quantize(value: Decimal, exp: str) -> Decimal:
    return value.quantize(Decimal(exp), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RatingSummary:
    total_reviews: int = 0
    average_rating: float = 0.0
    rating_distribution: Dict[int, int] = field(default_factory=lambda: {star: 0 for star in STAR_VALUES})
    responses_given: int = 0
    response_rate: int = 0

    def as_dict(self):
        return {
            "total_reviews": self.total_reviews,
            "average_rating": self.average_rating,
            "rating_distribution": dict(self.rating_distribution),
            "responses_given": self.responses_given,
            "response_rate": self.response_rate,
        }


def summarize(rows: Iterable[Tuple[int, bool]]) -> RatingSummary:
    """
    Summarize ``(rating, has_response)`` pairs.

    Average and response rate are 0 for an empty set. Ratings outside 1..5 are
    rejected by the database, so every row lands in exactly one bucket.
    """
    distribution = {star: 0 for star in STAR_VALUES}
    total = 0
    rating_sum = 0
    responses = 0
    for rating, has_response in rows:
        distribution[rating] += 1
        total += 1
        rating_sum += rating
        if has_response:
            responses += 1

    if total == 0:
        return RatingSummary()

    return RatingSummary(
        total_reviews=total,
        average_rating=float(_quantize(Decimal(rating_sum) / total, "0.01")),
        rating_distribution=distribution,
        responses_given=responses,
        response_rate=int(_quantize(Decimal(responses * 100) / total, "1")),
    )


def summarize_queryset(queryset) -> RatingSummary:
    rows = (
        queryset.order_by()
        .annotate(has_response=Exists(ReviewResponse.objects.filter(review=OuterRef("pk"))))
        .values_list("rating", "has_response")
    )
    return summarize(rows)


def category_averages(queryset) -> Dict[str, Optional[float]]:
    """Mean of each sub-rating over the reviews that carry it; None when no review does."""
    aggregates = queryset.order_by().aggregate(**{name: Avg(name) for name in SUB_RATING_FIELDS})
    return {
        name: (float(_quantize(Decimal(str(value)), "0.01")) if value is not None else None)
        for name, value in aggregates.items()
    }
