import pytest

from accounts.models import User
from reviews.models import Review, ReviewPhoto


def _detail(review_id):
    return f"/api/reviews/{review_id}/"


@pytest.fixture
def review(completed_booking, review_factory):
    return review_factory(completed_booking, rating=4, comment="Nice place")


@pytest.fixture
def review_with_photos(review):
    ReviewPhoto.objects.create(review=review, url="https://reviews.s3.eu-central-1.amazonaws.com/reviews/a.jpg", order=0)
    ReviewPhoto.objects.create(review=review, url="https://reviews.s3.eu-central-1.amazonaws.com/reviews/b.jpg", order=1)
    return review


@pytest.mark.django_db
class TestRetrieveReview:

    def test_visible_review_is_public(self, api_client, review):
        resp = api_client.get(_detail(review.id))

        assert resp.status_code == 200
        assert resp.json()["comment"] == "Nice place"

    def test_hidden_review_is_404_for_anonymous(self, api_client, review):
        Review.objects.filter(pk=review.pk).update(is_visible=False)

        resp = api_client.get(_detail(review.id))

        assert resp.status_code == 404

    def test_hidden_review_readable_by_author_and_owner(self, api_client, review, guest, realtor):
        Review.objects.filter(pk=review.pk).update(is_visible=False)

        for user in (guest, realtor.user):
            api_client.force_authenticate(user=user)
            resp = api_client.get(_detail(review.id))
            assert resp.status_code == 200, user.email
            assert resp.json()["is_visible"] is False

    def test_hidden_review_is_404_for_other_users(self, api_client, review, user_factory):
        Review.objects.filter(pk=review.pk).update(is_visible=False)
        api_client.force_authenticate(user=user_factory("someone@example.com"))

        assert api_client.get(_detail(review.id)).status_code == 404


@pytest.mark.django_db
class TestUpdateReview:

    def test_author_updates_content(self, api_client, guest, review):
        api_client.force_authenticate(user=guest)

        resp = api_client.patch(_detail(review.id), {"rating": 2, "comment": "Changed my mind"}, format="json")

        assert resp.status_code == 200, resp.content
        review.refresh_from_db()
        assert review.rating == 2
        assert review.comment == "Changed my mind"

    def test_partial_update_keeps_other_fields(self, api_client, guest, review):
        api_client.force_authenticate(user=guest)

        resp = api_client.patch(_detail(review.id), {"location_rating": 5}, format="json")

        assert resp.status_code == 200
        review.refresh_from_db()
        assert review.location_rating == 5
        assert review.rating == 4
        assert review.comment == "Nice place"

    def test_visibility_and_verification_are_not_editable(self, api_client, guest, review):
        api_client.force_authenticate(user=guest)

        resp = api_client.patch(_detail(review.id), {"is_visible": False, "is_verified": False}, format="json")

        assert resp.status_code == 200
        review.refresh_from_db()
        assert review.is_visible is True
        assert review.is_verified is True

    def test_only_author_may_update(self, api_client, realtor, review):
        api_client.force_authenticate(user=realtor.user)

        resp = api_client.patch(_detail(review.id), {"comment": "Hijacked"}, format="json")

        assert resp.status_code == 403
        assert resp.json()["message"] == "You can only update your own reviews."
        review.refresh_from_db()
        assert review.comment == "Nice place"

    def test_invalid_rating_is_rejected(self, api_client, guest, review):
        api_client.force_authenticate(user=guest)

        resp = api_client.patch(_detail(review.id), {"rating": 9}, format="json")

        assert resp.status_code == 400
        review.refresh_from_db()
        assert review.rating == 4

    def test_unknown_review_is_404(self, api_client, guest):
        api_client.force_authenticate(user=guest)

        assert api_client.patch(_detail(424242), {"rating": 3}, format="json").status_code == 404


@pytest.mark.django_db
class TestDeleteReview:

    def test_author_deletes_review_and_photo_blobs(self, api_client, guest, review_with_photos, fake_media):
        api_client.force_authenticate(user=guest)

        resp = api_client.delete(_detail(review_with_photos.id))

        assert resp.status_code == 204
        assert not Review.objects.exists()
        assert not ReviewPhoto.objects.exists()
        assert fake_media.deleted == ["reviews/a.jpg", "reviews/b.jpg"]

    def test_media_failure_does_not_block_deletion(self, api_client, guest, review_with_photos, fake_media, caplog):
        fake_media.failing.add("reviews/a.jpg")
        api_client.force_authenticate(user=guest)

        resp = api_client.delete(_detail(review_with_photos.id))

        assert resp.status_code == 204
        assert not Review.objects.exists()
        assert not ReviewPhoto.objects.exists()
        assert fake_media.deleted == ["reviews/b.jpg"]
        assert any("Photo blob not deleted" in r.getMessage() for r in caplog.records)

    def test_owning_realtor_may_delete(self, api_client, realtor, review, fake_media):
        api_client.force_authenticate(user=realtor.user)

        assert api_client.delete(_detail(review.id)).status_code == 204
        assert not Review.objects.exists()

    def test_admin_may_delete(self, api_client, user_factory, review, fake_media):
        admin = user_factory("admin@example.com", role=User.Roles.ADMIN)
        api_client.force_authenticate(user=admin)

        assert api_client.delete(_detail(review.id)).status_code == 204

    def test_other_realtor_may_not_delete(self, api_client, other_realtor, review, fake_media):
        api_client.force_authenticate(user=other_realtor.user)

        resp = api_client.delete(_detail(review.id))

        assert resp.status_code == 403
        assert resp.json()["message"] == "Permission denied."
        assert Review.objects.filter(pk=review.pk).exists()


@pytest.mark.django_db
class TestListings:

    @pytest.fixture
    def reviews(self, property_obj, guest, booking_factory, review_factory):
        ratings = [5, 3, 4, 1]
        created = [review_factory(booking_factory(property_obj, guest), rating=r) for r in ratings]
        Review.objects.filter(pk=created[-1].pk).update(is_visible=False)
        return created

    def test_property_listing_shows_visible_reviews_only(self, api_client, property_obj, reviews):
        resp = api_client.get(f"/api/properties/{property_obj.id}/reviews/")

        assert resp.status_code == 200
        body = resp.json()
        assert body["pagination"]["total_items"] == 3
        assert reviews[-1].id not in [r["id"] for r in body["results"]]

    def test_property_listing_sorts_and_paginates(self, api_client, property_obj, reviews):
        resp = api_client.get(
            f"/api/properties/{property_obj.id}/reviews/",
            {"sort_by": "rating", "sort_order": "asc", "limit": 2},
        )

        body = resp.json()
        assert [r["rating"] for r in body["results"]] == [3, 4]
        assert body["pagination"] == {
            "current_page": 1,
            "total_pages": 2,
            "total_items": 3,
            "has_next": True,
            "has_prev": False,
        }

    def test_property_listing_filters_by_rating(self, api_client, property_obj, reviews):
        resp = api_client.get(f"/api/properties/{property_obj.id}/reviews/", {"rating_min": 4})

        assert sorted(r["rating"] for r in resp.json()["results"]) == [4, 5]

    def test_unknown_property_is_404(self, api_client):
        resp = api_client.get("/api/properties/999999/reviews/")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Property not found."

    def test_mine_lists_own_reviews_including_hidden(self, api_client, guest, reviews, user_factory):
        api_client.force_authenticate(user=guest)

        resp = api_client.get("/api/reviews/mine/")

        assert resp.status_code == 200
        assert resp.json()["pagination"]["total_items"] == 4

        api_client.force_authenticate(user=user_factory("nobody@example.com"))
        assert api_client.get("/api/reviews/mine/").json()["results"] == []

    def test_realtor_listing_includes_hidden_reviews(self, api_client, realtor, reviews):
        api_client.force_authenticate(user=realtor.user)

        resp = api_client.get("/api/realtor/reviews/")
        hidden = api_client.get("/api/realtor/reviews/", {"is_visible": "false"})

        assert resp.json()["pagination"]["total_items"] == 4
        assert [r["id"] for r in hidden.json()["results"]] == [reviews[-1].id]

    def test_realtor_listing_is_scoped_to_own_properties(self, api_client, other_realtor, reviews):
        api_client.force_authenticate(user=other_realtor.user)

        assert api_client.get("/api/realtor/reviews/").json()["results"] == []

    def test_realtor_listing_requires_realtor_role(self, api_client, guest, reviews):
        api_client.force_authenticate(user=guest)

        assert api_client.get("/api/realtor/reviews/").status_code == 403

    def test_admin_is_refused_realtor_listing(self, api_client, user_factory, reviews):
        api_client.force_authenticate(user=user_factory("ops@example.com", role=User.Roles.ADMIN))

        resp = api_client.get("/api/realtor/reviews/")

        assert resp.status_code == 403
        assert resp.json()["message"] == "Realtor access required."

    def test_realtor_without_profile_is_404(self, api_client, user_factory):
        api_client.force_authenticate(user=user_factory("bare@example.com", role=User.Roles.REALTOR))

        resp = api_client.get("/api/realtor/reviews/")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Realtor profile not found."
