from django.conf import settings
from rest_framework.exceptions import ValidationError

from .models import SUB_RATING_FIELDS

RATING_MESSAGE = "Rating must be between 1 and 5."
SUB_RATING_MESSAGE = "All detailed ratings must be between 1 and 5."


def is_star_value(value) -> bool:
    # bool is an int subclass, True must not pass as a 1-star rating
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 5


def validate_ratings(values: dict, require_overall: bool) -> None:
    """Raise ValidationError unless the overall rating and each provided sub-rating is an integer in 1..5."""
    errors = {}
    if "rating" in values or require_overall:
        if not is_star_value(values.get("rating")):
            errors["rating"] = [RATING_MESSAGE]
    for name in SUB_RATING_FIELDS:
        value = values.get(name)
        if value is not None and not is_star_value(value):
            errors[name] = [SUB_RATING_MESSAGE]
    if errors:
        raise ValidationError(errors)


def clean_text(value, field_name: str, max_length: int) -> str:
    value = (value or "").strip()
    if len(value) > max_length:
        raise ValidationError({field_name: [f"The {field_name} is too long (maximum {max_length} characters)."]})
    for ch in value:
        if ord(ch) < 32 and ch not in ("\n", "\r", "\t"):
            raise ValidationError({field_name: [f"The {field_name} contains invalid control characters."]})
    return value


def clean_comment(value) -> str:
    return clean_text(value, "comment", settings.REVIEWS["MAX_COMMENT_LENGTH"])


def validate_photos(photos) -> list:
    photos = list(photos or [])
    limit = settings.REVIEWS["MAX_PHOTOS"]
    if len(photos) > limit:
        raise ValidationError({"photos": [f"A review can have at most {limit} photos."]})
    for photo in photos:
        if not isinstance(photo, dict) or not photo.get("url"):
            raise ValidationError({"photos": ["Every photo needs a url."]})
    return photos
