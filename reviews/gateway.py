"""
ReviewGateway: request-level entry point for review writes.

Checks who is asking and whether the booking is eligible, delegates the write
to ``reviews.store`` and publishes the domain event after the commit.
"""
import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied

from booking_platform.exceptions import Conflict, InvalidState
from booking_platform.media import MediaStoreError, get_media_store
from . import lookups, store
from .events import ReviewReceived, publish
from .models import CONTENT_FIELDS, ReviewHelpful, SUB_RATING_FIELDS
from .validation import clean_comment, validate_photos, validate_ratings

logger = logging.getLogger(__name__)


def _require_user(requester):
    if requester is None or not getattr(requester, "is_authenticated", False):
        raise NotAuthenticated("Authentication required.")


def _get_review_or_404(review_id):
    review = store.get_review(review_id)
    if review is None:
        raise NotFound("Review not found.")
    return review


def create_review(requester, booking_id, rating, comment="", sub_ratings=None, photos=None):
    _require_user(requester)
    booking = lookups.get_booking(booking_id)

    if booking.guest_id != requester.id:
        logger.warning(
            "Review create forbidden booking_id=%s requester_id=%s guest_id=%s",
            booking.id,
            requester.id,
            booking.guest_id,
        )
        raise PermissionDenied("You can only review your own bookings.")
    if not booking.is_completed:
        raise InvalidState("You can only review completed bookings.")
    if booking.existing_review_id is not None:
        raise Conflict(store.DUPLICATE_REVIEW_MESSAGE)

    sub_ratings = {name: value for name, value in (sub_ratings or {}).items() if name in SUB_RATING_FIELDS}
    validate_ratings({"rating": rating, **sub_ratings}, require_overall=True)
    photos = validate_photos(photos)
    owner = lookups.get_property_owner(booking.property_id)

    review = store.create_atomic(
        {
            "booking_id": booking.id,
            "property_id": booking.property_id,
            "author": requester,
            "rating": rating,
            "comment": clean_comment(comment),
            "is_verified": True,
            "is_visible": True,
            **sub_ratings,
        },
        photos,
    )
    logger.info(
        "Review created review_id=%s booking_id=%s property_id=%s author_id=%s rating=%s",
        review.id,
        booking.id,
        booking.property_id,
        requester.id,
        rating,
    )
    publish(ReviewReceived(
        realtor_id=owner.realtor_id,
        review_id=review.id,
        property_title=owner.property_title,
        rating=rating,
    ))
    return review


def update_review(requester, review_id, changes: dict):
    """Apply the provided content fields only; visibility and booking are not editable here."""
    _require_user(requester)
    review = _get_review_or_404(review_id)
    if review.author_id != requester.id:
        logger.warning("Review update forbidden review_id=%s requester_id=%s", review.id, requester.id)
        raise PermissionDenied("You can only update your own reviews.")

    changes = {name: changes[name] for name in CONTENT_FIELDS if name in changes}
    validate_ratings(changes, require_overall=False)
    if "comment" in changes:
        changes["comment"] = clean_comment(changes["comment"])

    review = store.update_content(review, changes)
    logger.info("Review updated review_id=%s fields=%s", review.id, sorted(changes))
    return review


def _can_delete(review, requester) -> bool:
    if review.author_id == requester.id:
        return True
    if getattr(requester, "is_admin", False):
        return True
    owner = lookups.get_property_owner(review.property_id)
    return owner.realtor_user_id == requester.id


def _delete_photos(review) -> int:
    """Best-effort removal of photo blobs; returns how many deletions failed."""
    photos = list(review.photos.all())
    if not photos:
        return 0
    media = get_media_store()
    failed = 0
    for photo in photos:
        try:
            media.delete_image(media.extract_public_id(photo.url))
        except MediaStoreError as e:
            failed += 1
            logger.warning("Photo blob not deleted review_id=%s photo_id=%s err=%s", review.id, photo.id, e)
        except Exception:
            failed += 1
            logger.exception("Unexpected media store failure review_id=%s photo_id=%s", review.id, photo.id)
    return failed


def delete_review(requester, review_id):
    _require_user(requester)
    review = _get_review_or_404(review_id)
    if not _can_delete(review, requester):
        logger.warning("Review delete forbidden review_id=%s requester_id=%s", review.id, requester.id)
        raise PermissionDenied("Permission denied.")

    failed = _delete_photos(review)
    store.delete_review(review)
    logger.info(
        "Review removed review_id=%s requester_id=%s photo_cleanup_failures=%s",
        review_id,
        requester.id,
        failed,
    )


def toggle_helpful(requester, review_id):
    """Mark or unmark a visible review as helpful. Returns (is_helpful, helpful_count)."""
    _require_user(requester)
    review = _get_review_or_404(review_id)
    if not review.is_visible:
        raise NotFound("Review not found.")

    deleted, _ = ReviewHelpful.objects.filter(review=review, user=requester).delete()
    is_helpful = not deleted
    if is_helpful:
        try:
            with transaction.atomic():
                ReviewHelpful.objects.create(review=review, user=requester)
        except IntegrityError:
            # a concurrent request from the same user got there first
            pass
    count = ReviewHelpful.objects.filter(review=review).count()
    logger.info("Helpful toggled review_id=%s user_id=%s is_helpful=%s", review.id, requester.id, is_helpful)
    return is_helpful, count
