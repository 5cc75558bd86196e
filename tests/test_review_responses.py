import pytest

from notifications.models import Notification
from reviews.models import ReviewResponse


def _response_url(review_id):
    return f"/api/reviews/{review_id}/response/"


@pytest.fixture
def review(completed_booking, review_factory):
    return review_factory(completed_booking, rating=5, comment="Loved it")


@pytest.mark.django_db
class TestHostResponse:

    def test_owner_responds_once(self, api_client, realtor, review):
        api_client.force_authenticate(user=realtor.user)

        first = api_client.post(_response_url(review.id), {"comment": "Thanks!"}, format="json")
        second = api_client.post(_response_url(review.id), {"comment": "Thanks again!"}, format="json")

        assert first.status_code == 201, first.content
        assert first.json()["comment"] == "Thanks!"
        assert first.json()["review_id"] == review.id
        assert first.json()["author"]["id"] == realtor.user_id
        assert second.status_code == 409
        assert second.json()["message"] == "Response already exists for this review."
        assert ReviewResponse.objects.filter(review=review).count() == 1

    def test_response_is_embedded_in_review(self, api_client, realtor, review):
        api_client.force_authenticate(user=realtor.user)
        api_client.post(_response_url(review.id), {"comment": "Thanks!"}, format="json")

        body = api_client.get(f"/api/reviews/{review.id}/").json()

        assert body["host_response"]["comment"] == "Thanks!"

    def test_author_is_notified(self, api_client, realtor, review, guest, django_capture_on_commit_callbacks):
        api_client.force_authenticate(user=realtor.user)

        with django_capture_on_commit_callbacks(execute=True):
            api_client.post(_response_url(review.id), {"comment": "Thanks!"}, format="json")

        notification = Notification.objects.get(user=guest)
        assert notification.type == Notification.Types.REVIEW_RESPONSE
        assert notification.message == 'The host responded to your review for "Sea View Loft".'

    def test_non_owner_is_forbidden(self, api_client, other_realtor, review):
        api_client.force_authenticate(user=other_realtor.user)

        resp = api_client.post(_response_url(review.id), {"comment": "Hi"}, format="json")

        assert resp.status_code == 403
        assert resp.json()["message"] == "You can only respond to reviews on your properties."
        assert not ReviewResponse.objects.exists()

    @pytest.mark.parametrize("comment", ["", "   "])
    def test_blank_comment_is_rejected(self, api_client, realtor, review, comment):
        api_client.force_authenticate(user=realtor.user)

        resp = api_client.post(_response_url(review.id), {"comment": comment}, format="json")

        assert resp.status_code == 400
        assert resp.json()["message"] == "Response comment is required."

    def test_comment_is_trimmed(self, api_client, realtor, review):
        api_client.force_authenticate(user=realtor.user)

        resp = api_client.post(_response_url(review.id), {"comment": "  Thanks!  "}, format="json")

        assert resp.json()["comment"] == "Thanks!"

    def test_unknown_review_is_404(self, api_client, realtor):
        api_client.force_authenticate(user=realtor.user)

        assert api_client.post(_response_url(31337), {"comment": "Hi"}, format="json").status_code == 404

    def test_owner_edits_and_removes_response(self, api_client, realtor, review):
        ReviewResponse.objects.create(review=review, author=realtor.user, comment="Thanks!")
        api_client.force_authenticate(user=realtor.user)

        edited = api_client.put(_response_url(review.id), {"comment": "Thank you so much!"}, format="json")
        removed = api_client.delete(_response_url(review.id))

        assert edited.status_code == 200
        assert edited.json()["comment"] == "Thank you so much!"
        assert removed.status_code == 204
        assert not ReviewResponse.objects.exists()

    def test_editing_missing_response_is_404(self, api_client, realtor, review):
        api_client.force_authenticate(user=realtor.user)

        resp = api_client.put(_response_url(review.id), {"comment": "Hello"}, format="json")

        assert resp.status_code == 404
        assert resp.json()["message"] == "No response exists for this review."

    def test_guest_cannot_delete_response(self, api_client, realtor, review, guest):
        ReviewResponse.objects.create(review=review, author=realtor.user, comment="Thanks!")
        api_client.force_authenticate(user=guest)

        assert api_client.delete(_response_url(review.id)).status_code == 403
        assert ReviewResponse.objects.exists()
