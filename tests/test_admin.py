import pytest

from notifications.models import Notification
from reviews.models import ReviewPhoto, ReviewResponse


@pytest.mark.django_db
@pytest.mark.parametrize("path", [
    "/admin/accounts/user/",
    "/admin/accounts/realtor/",
    "/admin/properties/property/",
    "/admin/bookings/booking/",
    "/admin/reviews/review/",
    "/admin/notifications/notification/",
])
def test_changelists_render(admin_client, path, completed_booking, review_factory, realtor):
    review = review_factory(completed_booking, comment="Great")
    ReviewResponse.objects.create(review=review, author=realtor.user, comment="Thanks")
    Notification.objects.create(user=realtor.user, type=Notification.Types.REVIEW_RECEIVED, title="t", message="m")

    assert admin_client.get(path).status_code == 200


@pytest.mark.django_db
def test_review_change_page_shows_inlines(admin_client, completed_booking, review_factory):
    review = review_factory(completed_booking)
    ReviewPhoto.objects.create(review=review, url="https://cdn.example.com/reviews/a.jpg", order=0)

    resp = admin_client.get(f"/admin/reviews/review/{review.id}/change/")

    assert resp.status_code == 200
    assert b"https://cdn.example.com/reviews/a.jpg" in resp.content
