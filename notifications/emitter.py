"""
NotificationEmitter: turns review domain events into stored notifications.

Every event becomes a ``Notification`` row for its recipient. When
``NOTIFICATIONS["WEBHOOK_URL"]`` is set the same payload is also pushed over
HTTP with a bounded timeout, so a slow downstream cannot hold a request open.
"""
import logging
from dataclasses import asdict
from functools import lru_cache

import requests
from django.conf import settings
from django.utils.module_loading import import_string

from accounts.models import Realtor
from .models import Notification

logger = logging.getLogger(__name__)


class NotificationEmitter:

    def __init__(self, webhook_url=None, timeout=None):
        config = settings.NOTIFICATIONS
        self.webhook_url = webhook_url if webhook_url is not None else config.get("WEBHOOK_URL")
        self.timeout = timeout if timeout is not None else config.get("TIMEOUT", 5.0)

    def send(self, event) -> Notification:
        builder = getattr(self, f"_build_{event.name}", None)
        if builder is None:
            raise ValueError(f"Unsupported notification event: {event.name}")
        kwargs = builder(event)
        kwargs["data"] = {"event": event.name, **asdict(event)}
        notification = Notification.objects.create(**kwargs)
        logger.info(
            "Notification stored id=%s type=%s user_id=%s",
            notification.id,
            notification.type,
            notification.user_id,
        )
        if self.webhook_url:
            self._push(notification)
        return notification

    def _push(self, notification: Notification) -> None:
        payload = {
            "id": notification.id,
            "user_id": notification.user_id,
            "type": notification.type,
            "title": notification.title,
            "message": notification.message,
            "data": notification.data,
        }
        response = requests.post(self.webhook_url, json=payload, timeout=self.timeout)
        response.raise_for_status()

    # Builders: event -> Notification fields

    def _build_review_received(self, event):
        user_id = Realtor.objects.values_list("user_id", flat=True).get(pk=event.realtor_id)
        return {
            "user_id": user_id,
            "type": Notification.Types.REVIEW_RECEIVED,
            "title": "New Review Received",
            "message": f'You received a {event.rating}-star review for "{event.property_title}".',
        }

    def _build_review_response(self, event):
        return {
            "user_id": event.author_id,
            "type": Notification.Types.REVIEW_RESPONSE,
            "title": "Host Responded to Your Review",
            "message": f'The host responded to your review for "{event.property_title}".',
        }

    def _build_moderation_notice(self, event):
        by = f" by {event.business_name}" if event.business_name else ""
        return {
            "user_id": event.user_id,
            "type": Notification.Types.REVIEW_MODERATION,
            "title": "Review Status Updated",
            "message": f'Your review for "{event.property_title}" has been {event.action}{by}.',
        }


@lru_cache(maxsize=1)
def get_emitter():
    emitter_cls = import_string(settings.NOTIFICATIONS["EMITTER"])
    return emitter_cls()
