import logging

import pytest
import requests

from notifications.emitter import NotificationEmitter, get_emitter
from notifications.models import Notification
from reviews import events
from reviews.events import ModerationNotice, ReviewReceived, ReviewResponded


def _broken_send(self, event):
    raise RuntimeError("notification backend down")


class _FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_delivery_failure_is_logged_and_swallowed(monkeypatch, caplog):
    monkeypatch.setattr(NotificationEmitter, "send", _broken_send)
    caplog.set_level(logging.ERROR, logger="reviews.events")

    delivered = events.deliver(ReviewResponded(author_id=1, review_id=2, property_title="Loft"))

    assert delivered is False
    assert any("Notification delivery failed" in r.getMessage() for r in caplog.records)
    assert isinstance(get_emitter(), NotificationEmitter)


@pytest.mark.django_db
def test_create_succeeds_when_notifications_fail(
    api_client, guest, completed_booking, monkeypatch, django_capture_on_commit_callbacks
):
    monkeypatch.setattr(NotificationEmitter, "send", _broken_send)
    api_client.force_authenticate(user=guest)

    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.post("/api/reviews/", {"booking_id": completed_booking.id, "rating": 5}, format="json")

    assert resp.status_code == 201
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_publish_waits_for_commit(monkeypatch, django_capture_on_commit_callbacks):
    sent = []
    monkeypatch.setattr(events, "deliver", sent.append)

    with django_capture_on_commit_callbacks() as callbacks:
        events.publish(ReviewResponded(author_id=1, review_id=2, property_title="Loft"))
        assert sent == []

    assert len(callbacks) == 1
    callbacks[0]()
    assert sent == [ReviewResponded(author_id=1, review_id=2, property_title="Loft")]


@pytest.mark.django_db
class TestNotificationEmitter:

    def test_review_received_goes_to_realtor_user(self, realtor):
        emitter = NotificationEmitter(webhook_url="")

        notification = emitter.send(ReviewReceived(
            realtor_id=realtor.id, review_id=10, property_title="Loft", rating=5,
        ))

        assert notification.user_id == realtor.user_id
        assert notification.title == "New Review Received"
        assert notification.data == {
            "event": "review_received",
            "realtor_id": realtor.id,
            "review_id": 10,
            "property_title": "Loft",
            "rating": 5,
        }

    def test_moderation_notice_message(self, guest):
        emitter = NotificationEmitter(webhook_url="")

        notification = emitter.send(ModerationNotice(
            user_id=guest.id, review_id=3, property_title="Loft", action="hidden", business_name="Sunny Stays",
        ))

        assert notification.message == 'Your review for "Loft" has been hidden by Sunny Stays.'

    def test_webhook_push_uses_timeout(self, guest, monkeypatch):
        calls = []

        def fake_post(url, json=None, timeout=None):
            calls.append((url, json, timeout))
            return _FakeResponse()

        monkeypatch.setattr(requests, "post", fake_post)
        emitter = NotificationEmitter(webhook_url="https://hooks.example.com/reviews", timeout=2.5)

        notification = emitter.send(ReviewResponded(author_id=guest.id, review_id=4, property_title="Loft"))

        assert len(calls) == 1
        url, payload, timeout = calls[0]
        assert url == "https://hooks.example.com/reviews"
        assert timeout == 2.5
        assert payload["id"] == notification.id
        assert payload["type"] == "review_response"

    def test_webhook_error_propagates_to_caller(self, guest, monkeypatch):
        monkeypatch.setattr(requests, "post", lambda *args, **kwargs: _FakeResponse(503))
        emitter = NotificationEmitter(webhook_url="https://hooks.example.com/reviews")

        with pytest.raises(requests.HTTPError):
            emitter.send(ReviewResponded(author_id=guest.id, review_id=4, property_title="Loft"))

    def test_unknown_event_is_rejected(self):
        class Unknown:
            name = "something_else"

        with pytest.raises(ValueError):
            NotificationEmitter(webhook_url="").send(Unknown())
