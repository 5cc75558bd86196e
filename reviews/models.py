from django.conf import settings
from django.db import models
from django.db.models import Q

from bookings.models import Booking
from properties.models import Property

SUB_RATING_FIELDS = (
    "cleanliness_rating",
    "communication_rating",
    "check_in_rating",
    "accuracy_rating",
    "location_rating",
    "value_rating",
)

CONTENT_FIELDS = ("rating", "comment") + SUB_RATING_FIELDS


def _rating_range(field, nullable=False):
    condition = Q(**{f"{field}__gte": 1}) & Q(**{f"{field}__lte": 5})
    if nullable:
        condition |= Q(**{f"{field}__isnull": True})
    return models.CheckConstraint(condition=condition, name=f"review_{field}_between_1_5")


class Review(models.Model):
    booking = models.OneToOneField(Booking, on_delete=models.CASCADE, related_name="review")
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="reviews")
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    rating = models.PositiveSmallIntegerField()
    cleanliness_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    communication_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    check_in_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    accuracy_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    location_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    value_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    comment = models.TextField(blank=True)
    is_verified = models.BooleanField(default=False)
    is_visible = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["property", "is_visible", "created_at"], name="review_property_visible_idx"),
            models.Index(fields=["author", "created_at"], name="review_author_created_idx"),
        ]
        constraints = [_rating_range("rating")] + [
            _rating_range(field, nullable=True) for field in SUB_RATING_FIELDS
        ]

    def __str__(self):
        return f"Review {self.rating} by {self.author_id} on {self.property_id}"


class ReviewPhoto(models.Model):
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name="photos")
    url = models.URLField(max_length=500)
    caption = models.CharField(max_length=255, blank=True)
    order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["order"]
        constraints = [
            models.UniqueConstraint(fields=["review", "order"], name="review_photo_unique_order"),
        ]

    def __str__(self):
        return f"Photo {self.order} of review {self.review_id}"


class ReviewResponse(models.Model):
    review = models.OneToOneField(Review, on_delete=models.CASCADE, related_name="host_response")
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="review_responses")
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Response to review {self.review_id} by {self.author_id}"


class ReviewHelpful(models.Model):
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name="helpful_marks")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="helpful_marks")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["review", "user"], name="review_helpful_unique_user"),
        ]
