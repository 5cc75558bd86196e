from django.conf import settings
from rest_framework import serializers

from .models import Review, ReviewPhoto, ReviewResponse, SUB_RATING_FIELDS
from .validation import RATING_MESSAGE, SUB_RATING_MESSAGE, is_star_value


class AuthorSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)
    avatar = serializers.CharField(read_only=True)


class ReviewPhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReviewPhoto
        fields = ["id", "url", "caption", "order"]
        read_only_fields = fields


class ReviewResponseSerializer(serializers.ModelSerializer):
    review_id = serializers.IntegerField(read_only=True)
    author = AuthorSerializer(read_only=True)

    class Meta:
        model = ReviewResponse
        fields = ["id", "review_id", "author", "comment", "created_at", "updated_at"]
        read_only_fields = fields


class ReviewSerializer(serializers.ModelSerializer):
    booking_id = serializers.IntegerField(read_only=True)
    property_id = serializers.IntegerField(read_only=True)
    property_title = serializers.CharField(source="property.title", read_only=True)
    author = AuthorSerializer(read_only=True)
    photos = ReviewPhotoSerializer(many=True, read_only=True)
    host_response = serializers.SerializerMethodField()
    helpful_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Review
        fields = [
            "id", "booking_id", "property_id", "property_title", "author",
            "rating", *SUB_RATING_FIELDS, "comment",
            "is_verified", "is_visible", "photos", "host_response",
            "helpful_count", "created_at", "updated_at",
        ]
        read_only_fields = fields

    def get_host_response(self, obj):
        response = getattr(obj, "host_response", None)
        if response is None:
            return None
        return ReviewResponseSerializer(response).data


# ---------- input ----------

class PhotoInputSerializer(serializers.Serializer):
    url = serializers.URLField(max_length=500)
    caption = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class ReviewContentSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    cleanliness_rating = serializers.IntegerField(required=False, allow_null=True)
    communication_rating = serializers.IntegerField(required=False, allow_null=True)
    check_in_rating = serializers.IntegerField(required=False, allow_null=True)
    accuracy_rating = serializers.IntegerField(required=False, allow_null=True)
    location_rating = serializers.IntegerField(required=False, allow_null=True)
    value_rating = serializers.IntegerField(required=False, allow_null=True)

    def validate_rating(self, value):
        if not is_star_value(value):
            raise serializers.ValidationError(RATING_MESSAGE)
        return value

    def validate(self, attrs):
        errors = {
            name: [SUB_RATING_MESSAGE]
            for name in SUB_RATING_FIELDS
            if attrs.get(name) is not None and not is_star_value(attrs[name])
        }
        if errors:
            raise serializers.ValidationError(errors)
        return attrs

    def sub_ratings(self):
        return {name: self.validated_data[name] for name in SUB_RATING_FIELDS if name in self.validated_data}


class ReviewCreateSerializer(ReviewContentSerializer):
    booking_id = serializers.IntegerField()
    photos = PhotoInputSerializer(many=True, required=False)

    def validate_photos(self, value):
        limit = settings.REVIEWS["MAX_PHOTOS"]
        if len(value) > limit:
            raise serializers.ValidationError(f"A review can have at most {limit} photos.")
        return value


class ResponseInputSerializer(serializers.Serializer):
    comment = serializers.CharField(allow_blank=True, trim_whitespace=False)
