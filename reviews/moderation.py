import logging

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from .events import ModerationNotice, publish
from .models import Review

logger = logging.getLogger(__name__)


def set_visibility(requester, review_id, is_visible):
    """
    Show or hide a review on public listings. Only the realtor owning the
    reviewed property may do this. Content and updated_at stay untouched, and
    re-applying the current value is accepted (the author is still notified).
    """
    if not isinstance(is_visible, bool):
        raise ValidationError({"is_visible": ["is_visible must be a boolean value."]})

    review = (
        Review.objects.select_related("property", "property__realtor")
        .filter(pk=review_id)
        .first()
    )
    if review is None:
        raise NotFound("Review not found.")

    realtor = review.property.realtor
    if realtor.user_id != getattr(requester, "id", None):
        logger.warning(
            "Moderation forbidden review_id=%s requester_id=%s owner_user_id=%s",
            review.id,
            getattr(requester, "id", None),
            realtor.user_id,
        )
        raise PermissionDenied("You can only moderate reviews for your own properties.")

    if review.is_visible != is_visible:
        Review.objects.filter(pk=review.pk).update(is_visible=is_visible)
        review.is_visible = is_visible

    action = "made visible" if is_visible else "hidden"
    logger.info("Review visibility set review_id=%s is_visible=%s by realtor_id=%s", review.id, is_visible, realtor.id)
    publish(ModerationNotice(
        user_id=review.author_id,
        review_id=review.id,
        property_title=review.property.title,
        action=action,
        business_name=realtor.business_name,
    ))
    return review
