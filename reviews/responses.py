"""ResponseThread: the single host response a realtor may attach to a review."""
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from booking_platform.exceptions import Conflict
from .events import ReviewResponded, publish
from .models import Review, ReviewResponse
from .validation import clean_text

logger = logging.getLogger(__name__)

DUPLICATE_RESPONSE_MESSAGE = "Response already exists for this review."


def _load_review(review_id) -> Review:
    review = (
        Review.objects.select_related("property", "property__realtor")
        .filter(pk=review_id)
        .first()
    )
    if review is None:
        raise NotFound("Review not found.")
    return review


def _clean_response_comment(comment) -> str:
    comment = clean_text(comment, "comment", settings.REVIEWS["MAX_RESPONSE_LENGTH"])
    if not comment:
        raise ValidationError({"comment": ["Response comment is required."]})
    return comment


def _get_response(review) -> ReviewResponse:
    response = ReviewResponse.objects.filter(review=review).first()
    if response is None:
        raise NotFound("No response exists for this review.")
    return response


def _is_owner(review, requester) -> bool:
    return review.property.realtor.user_id == getattr(requester, "id", None)


def respond(requester, review_id, comment) -> ReviewResponse:
    review = _load_review(review_id)
    if not _is_owner(review, requester):
        logger.warning("Response forbidden review_id=%s requester_id=%s", review.id, getattr(requester, "id", None))
        raise PermissionDenied("You can only respond to reviews on your properties.")
    comment = _clean_response_comment(comment)
    if ReviewResponse.objects.filter(review=review).exists():
        raise Conflict(DUPLICATE_RESPONSE_MESSAGE)

    try:
        with transaction.atomic():
            response = ReviewResponse.objects.create(review=review, author=requester, comment=comment)
    except IntegrityError:
        raise Conflict(DUPLICATE_RESPONSE_MESSAGE)

    logger.info("Review response created response_id=%s review_id=%s author_id=%s", response.id, review.id, requester.id)
    publish(ReviewResponded(
        author_id=review.author_id,
        review_id=review.id,
        property_title=review.property.title,
    ))
    return response


def update_response(requester, review_id, comment) -> ReviewResponse:
    review = _load_review(review_id)
    response = _get_response(review)
    if not _is_owner(review, requester) and response.author_id != getattr(requester, "id", None):
        raise PermissionDenied("You can only update your own responses.")
    response.comment = _clean_response_comment(comment)
    response.save(update_fields=["comment", "updated_at"])
    logger.info("Review response updated response_id=%s review_id=%s", response.id, review.id)
    return response


def delete_response(requester, review_id) -> None:
    review = _load_review(review_id)
    response = _get_response(review)
    if not _is_owner(review, requester) and response.author_id != getattr(requester, "id", None):
        raise PermissionDenied("You can only delete your own responses.")
    response.delete()
    logger.info("Review response deleted review_id=%s requester_id=%s", review.id, requester.id)
