"""
ReviewStore: persistence of reviews with their photos and host responses.

The one-review-per-booking rule is owned by the unique ``booking`` column.
Callers may pre-check for a friendlier error, but two concurrent creates can
both pass that check; the loser's insert fails here and becomes a ``Conflict``.
On MySQL the connection runs at READ COMMITTED, so the lookup made after the
failed insert sees the winning row.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count

from booking_platform.exceptions import Conflict
from .models import Review, ReviewPhoto

logger = logging.getLogger(__name__)

SORT_FIELDS = ("created_at", "updated_at", "rating")
DUPLICATE_REVIEW_MESSAGE = "Review already exists for this booking."


def base_queryset():
    return (
        Review.objects.select_related("author", "property", "host_response", "host_response__author")
        .prefetch_related("photos")
        .annotate(helpful_count=Count("helpful_marks", distinct=True))
    )


def ordering_for(sort_by=None, sort_order=None):
    """Translate sort_by/sort_order query values into an order_by() argument; unknown values fall back to newest first."""
    field = sort_by if sort_by in SORT_FIELDS else "created_at"
    prefix = "" if str(sort_order).lower() == "asc" else "-"
    return (f"{prefix}{field}", "-id")


def create_atomic(fields: dict, photos=()) -> Review:
    """
    Insert a review and all of its photos in one transaction.

    Either every row is written or none is. Photo order follows list order.
    """
    try:
        with transaction.atomic():
            review = Review.objects.create(**fields)
            ReviewPhoto.objects.bulk_create([
                ReviewPhoto(
                    review=review,
                    url=photo["url"],
                    caption=photo.get("caption") or "",
                    order=index,
                )
                for index, photo in enumerate(photos)
            ])
    except IntegrityError:
        if Review.objects.filter(booking_id=fields.get("booking_id")).exists():
            logger.info("Duplicate review rejected by storage booking_id=%s", fields.get("booking_id"))
            raise Conflict(DUPLICATE_REVIEW_MESSAGE)
        raise

    logger.info(
        "Review stored review_id=%s booking_id=%s photos=%s",
        review.id,
        review.booking_id,
        len(photos),
    )
    return base_queryset().get(pk=review.pk)


def get_review(review_id):
    return base_queryset().filter(pk=review_id).first()


def list_by_property(property_id, visible_only=True, sort_by=None, sort_order=None):
    qs = base_queryset().filter(property_id=property_id)
    if visible_only:
        qs = qs.filter(is_visible=True)
    return qs.order_by(*ordering_for(sort_by, sort_order))


def list_by_author(author_id, sort_by=None, sort_order=None):
    return base_queryset().filter(author_id=author_id).order_by(*ordering_for(sort_by, sort_order))


def list_for_realtor(realtor_id, sort_by=None, sort_order=None):
    """Every review on the realtor's properties, hidden ones included; narrowed further by ReviewFilter."""
    return base_queryset().filter(property__realtor_id=realtor_id).order_by(*ordering_for(sort_by, sort_order))


def update_content(review: Review, changes: dict) -> Review:
    for name, value in changes.items():
        setattr(review, name, value)
    review.save(update_fields=list(changes) + ["updated_at"])
    return base_queryset().get(pk=review.pk)


def delete_review(review: Review) -> None:
    """Delete the review row; photos, response and helpful marks cascade with it."""
    review_id = review.id
    review.delete()
    logger.info("Review deleted review_id=%s", review_id)
