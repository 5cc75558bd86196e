from datetime import date, timedelta

import pytest
from rest_framework.test import APIClient

from accounts.models import Realtor, User
from bookings.models import Booking
from booking_platform import media
from booking_platform.media import MediaStoreError
from notifications import emitter
from properties.models import Property
from reviews.models import Review


class FakeMediaStore:
    """Records deletions instead of talking to S3; keys listed in ``failing`` raise."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.deleted = []

    def extract_public_id(self, url):
        return media.extract_public_id(url)

    def delete_image(self, public_id):
        if public_id in self.failing:
            raise MediaStoreError(f"cannot delete {public_id}")
        self.deleted.append(public_id)


@pytest.fixture(autouse=True)
def _reset_cached_backends():
    emitter.get_emitter.cache_clear()
    media.get_media_store.cache_clear()
    yield
    emitter.get_emitter.cache_clear()
    media.get_media_store.cache_clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_factory(db):
    def create_user(email, role=User.Roles.GUEST, name="Test User", password="Pass12345", **extra):
        first_name, _, last_name = name.partition(" ")
        return User.objects.create_user(
            email=email,
            password=password,
            role=role,
            first_name=first_name,
            last_name=last_name,
            **extra,
        )
    return create_user


@pytest.fixture
def realtor_factory(user_factory):
    def create_realtor(email, business_name="Sunny Stays"):
        user = user_factory(email, role=User.Roles.REALTOR, name="Rita Realtor")
        return Realtor.objects.create(user=user, business_name=business_name)
    return create_realtor


@pytest.fixture
def property_factory():
    def create_property(realtor, title="Sea View Loft"):
        return Property.objects.create(
            title=title,
            description="Two rooms by the sea",
            location="Hamburg",
            price="120.00",
            realtor=realtor,
        )
    return create_property


@pytest.fixture
def booking_factory():
    def create_booking(prop, guest, status=Booking.Status.COMPLETED):
        return Booking.objects.create(
            property=prop,
            guest=guest,
            start_date=date.today() - timedelta(days=7),
            end_date=date.today() - timedelta(days=2),
            total_amount="600.00",
            status=status,
        )
    return create_booking


@pytest.fixture
def review_factory():
    def create_review(booking, rating=5, comment="", is_visible=True, **extra):
        return Review.objects.create(
            booking=booking,
            property=booking.property,
            author=booking.guest,
            rating=rating,
            comment=comment,
            is_verified=True,
            is_visible=is_visible,
            **extra,
        )
    return create_review


@pytest.fixture
def guest(user_factory):
    return user_factory("guest@example.com", name="Gina Guest")


@pytest.fixture
def realtor(realtor_factory):
    return realtor_factory("realtor@example.com")


@pytest.fixture
def other_realtor(realtor_factory):
    return realtor_factory("other-realtor@example.com", business_name="Other Homes")


@pytest.fixture
def property_obj(property_factory, realtor):
    return property_factory(realtor)


@pytest.fixture
def completed_booking(booking_factory, property_obj, guest):
    return booking_factory(property_obj, guest)


@pytest.fixture
def fake_media(monkeypatch):
    store = FakeMediaStore()
    monkeypatch.setattr("reviews.gateway.get_media_store", lambda: store)
    return store
