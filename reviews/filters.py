import django_filters
from .models import Review


class RatingFilter(django_filters.FilterSet):
    """
    Filters shared by every review listing:
    - rating: exact star value
    - rating_min / rating_max: range by overall rating
    """
    rating = django_filters.NumberFilter(field_name="rating", lookup_expr="exact")
    rating_min = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")
    rating_max = django_filters.NumberFilter(field_name="rating", lookup_expr="lte")

    class Meta:
        model = Review
        fields = ["rating", "rating_min", "rating_max"]


class ModerationReviewFilter(RatingFilter):
    """Realtor moderation listing: additionally by visibility (true/false) and property id."""
    is_visible = django_filters.BooleanFilter(field_name="is_visible")
    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")

    class Meta(RatingFilter.Meta):
        fields = ["is_visible", "property", "rating", "rating_min", "rating_max"]
