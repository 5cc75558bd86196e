"""
Boundary lookups into the booking and property/realtor collaborators.

The review subsystem only needs a narrow view of those records, so they are
returned as small immutable value objects instead of ORM instances.
"""
from dataclasses import dataclass
from typing import Optional

from rest_framework.exceptions import NotFound

from accounts.models import Realtor
from bookings.models import Booking
from properties.models import Property


@dataclass(frozen=True)
class BookingInfo:
    id: int
    guest_id: int
    property_id: int
    status: str
    existing_review_id: Optional[int] = None

    @property
    def is_completed(self) -> bool:
        return self.status == Booking.Status.COMPLETED


@dataclass(frozen=True)
class PropertyOwner:
    property_id: int
    property_title: str
    realtor_id: int
    realtor_user_id: int
    business_name: str


def get_booking(booking_id) -> BookingInfo:
    row = (
        Booking.objects.filter(pk=booking_id)
        .values("id", "guest_id", "property_id", "status", "review__id")
        .first()
    )
    if row is None:
        raise NotFound("Booking not found.")
    return BookingInfo(
        id=row["id"],
        guest_id=row["guest_id"],
        property_id=row["property_id"],
        status=row["status"],
        existing_review_id=row["review__id"],
    )


def get_property_owner(property_id) -> PropertyOwner:
    row = (
        Property.objects.filter(pk=property_id)
        .values("id", "title", "realtor_id", "realtor__user_id", "realtor__business_name")
        .first()
    )
    if row is None:
        raise NotFound("Property not found.")
    return PropertyOwner(
        property_id=row["id"],
        property_title=row["title"],
        realtor_id=row["realtor_id"],
        realtor_user_id=row["realtor__user_id"],
        business_name=row["realtor__business_name"],
    )


def get_realtor_for_user(user) -> Realtor:
    try:
        return Realtor.objects.get(user_id=getattr(user, "id", None))
    except Realtor.DoesNotExist:
        raise NotFound("Realtor profile not found.")
