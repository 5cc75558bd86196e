"""
Domain events raised by review writes.

Events are handed to the notification emitter only after the surrounding
transaction commits. Delivery failures are logged and swallowed: a committed
review, response or visibility change is never reversed by a notification.
"""
import logging
from dataclasses import asdict, dataclass

from django.db import transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewReceived:
    realtor_id: int
    review_id: int
    property_title: str
    rating: int

    name = "review_received"


@dataclass(frozen=True)
class ReviewResponded:
    author_id: int
    review_id: int
    property_title: str

    name = "review_response"


@dataclass(frozen=True)
class ModerationNotice:
    user_id: int
    review_id: int
    property_title: str
    action: str
    business_name: str

    name = "moderation_notice"


def deliver(event) -> bool:
    # imported here so the events module has no import-time dependency on notifications
    from notifications.emitter import get_emitter

    try:
        get_emitter().send(event)
    except Exception:
        logger.exception("Notification delivery failed event=%s payload=%s", event.name, asdict(event))
        return False
    logger.info("Notification delivered event=%s review_id=%s", event.name, event.review_id)
    return True


def publish(event) -> None:
    """Schedule ``event`` for delivery once the current transaction commits."""
    transaction.on_commit(lambda: deliver(event))
