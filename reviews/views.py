import logging

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import decorators, generics, mixins, permissions, response, serializers, status, views, viewsets
from rest_framework.exceptions import NotFound

from booking_platform.permissions import IsRealtor
from properties.models import Property
from . import gateway, lookups, moderation, responses, store
from .aggregation import category_averages, summarize_queryset
from .filters import ModerationReviewFilter, RatingFilter
from .models import Review
from .serializers import (
    ResponseInputSerializer,
    ReviewContentSerializer,
    ReviewCreateSerializer,
    ReviewResponseSerializer,
    ReviewSerializer,
)

logger = logging.getLogger(__name__)


def _sort_params(request):
    return request.query_params.get("sort_by"), request.query_params.get("sort_order")


class ReviewViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Review API.

    Access rules:
    - create (POST /api/reviews/): the guest of a COMPLETED booking, once per booking.
    - retrieve (GET /api/reviews/{id}/): visible reviews are public; hidden ones only
      for the author, the owning realtor or an admin.
    - partial_update (PATCH /api/reviews/{id}/): author only, content fields only.
    - destroy (DELETE /api/reviews/{id}/): author, owning realtor or admin.
    - mine (GET /api/reviews/mine/): the requester's own reviews.
    - response (POST/PUT/DELETE /api/reviews/{id}/response/): owning realtor.
    - visibility (PATCH /api/reviews/{id}/visibility/): owning realtor.
    - helpful (POST /api/reviews/{id}/helpful/): any authenticated user, toggles.
    """
    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "retrieve":
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):
        return store.base_queryset()

    def retrieve(self, request, *args, **kwargs):
        review = self.get_object()
        if not review.is_visible and not self._can_see_hidden(review, request.user):
            raise NotFound("Review not found.")
        return response.Response(self.get_serializer(review).data)

    @staticmethod
    def _can_see_hidden(review, user):
        if not getattr(user, "is_authenticated", False):
            return False
        if review.author_id == user.id or getattr(user, "is_admin", False):
            return True
        return lookups.get_property_owner(review.property_id).realtor_user_id == user.id

    @extend_schema(request=ReviewCreateSerializer, responses={201: ReviewSerializer})
    def create(self, request, *args, **kwargs):
        data = ReviewCreateSerializer(data=request.data)
        data.is_valid(raise_exception=True)
        review = gateway.create_review(
            request.user,
            booking_id=data.validated_data["booking_id"],
            rating=data.validated_data["rating"],
            comment=data.validated_data.get("comment", ""),
            sub_ratings=data.sub_ratings(),
            photos=data.validated_data.get("photos", []),
        )
        return response.Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ReviewContentSerializer, responses={200: ReviewSerializer})
    def partial_update(self, request, *args, **kwargs):
        data = ReviewContentSerializer(data=request.data, partial=True)
        data.is_valid(raise_exception=True)
        review = gateway.update_review(request.user, kwargs["pk"], dict(data.validated_data))
        return response.Response(ReviewSerializer(review).data)

    def destroy(self, request, *args, **kwargs):
        gateway.delete_review(request.user, kwargs["pk"])
        return response.Response(status=status.HTTP_204_NO_CONTENT)

    @decorators.action(detail=False, methods=["get"])
    def mine(self, request):
        sort_by, sort_order = _sort_params(request)
        qs = store.list_by_author(request.user.id, sort_by, sort_order)
        page = self.paginate_queryset(qs)
        return self.get_paginated_response(ReviewSerializer(page, many=True).data)

    @extend_schema(request=ResponseInputSerializer, responses={200: ReviewResponseSerializer, 201: ReviewResponseSerializer})
    @decorators.action(detail=True, methods=["post", "put", "delete"], url_path="response")
    def host_response(self, request, pk=None):
        if request.method == "DELETE":
            responses.delete_response(request.user, pk)
            return response.Response(status=status.HTTP_204_NO_CONTENT)

        data = ResponseInputSerializer(data=request.data)
        data.is_valid(raise_exception=True)
        comment = data.validated_data["comment"]
        if request.method == "PUT":
            host_response = responses.update_response(request.user, pk, comment)
            return response.Response(ReviewResponseSerializer(host_response).data)

        host_response = responses.respond(request.user, pk, comment)
        return response.Response(ReviewResponseSerializer(host_response).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=inline_serializer("VisibilityInput", {"is_visible": serializers.BooleanField()}),
        responses={200: ReviewSerializer},
    )
    @decorators.action(detail=True, methods=["patch"])
    def visibility(self, request, pk=None):
        # a non-object body (list, scalar) has no is_visible; set_visibility rejects None with a 400
        is_visible = request.data.get("is_visible") if isinstance(request.data, dict) else None
        moderation.set_visibility(request.user, pk, is_visible)
        return response.Response(ReviewSerializer(store.get_review(pk)).data)

    @decorators.action(detail=True, methods=["post"])
    def helpful(self, request, pk=None):
        is_helpful, count = gateway.toggle_helpful(request.user, pk)
        return response.Response({"review_id": int(pk), "is_helpful": is_helpful, "helpful_count": count})


class PropertyReviewListView(generics.ListAPIView):
    """Public, paginated list of a property's visible reviews (?page&limit&sort_by&sort_order)."""
    serializer_class = ReviewSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = RatingFilter

    def get_queryset(self):
        property_id = self.kwargs["property_id"]
        if not Property.objects.filter(pk=property_id).exists():
            raise NotFound("Property not found.")
        sort_by, sort_order = _sort_params(self.request)
        return store.list_by_property(property_id, visible_only=True, sort_by=sort_by, sort_order=sort_order)


class PropertyRatingSummaryView(views.APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, property_id):
        if not Property.objects.filter(pk=property_id).exists():
            raise NotFound("Property not found.")
        visible = Review.objects.filter(property_id=property_id, is_visible=True)
        payload = summarize_queryset(visible).as_dict()
        payload["category_averages"] = category_averages(visible)
        return response.Response(payload)


class RealtorReviewListView(generics.ListAPIView):
    """Moderation listing: every review on the requester's properties, hidden ones included."""
    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticated, IsRealtor]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ModerationReviewFilter

    def get_queryset(self):
        realtor = lookups.get_realtor_for_user(self.request.user)
        sort_by, sort_order = _sort_params(self.request)
        return store.list_for_realtor(realtor.id, sort_by=sort_by, sort_order=sort_order)


class RealtorReviewAnalyticsView(views.APIView):
    """Rating analytics over the realtor's whole portfolio, recomputed per request."""
    permission_classes = [permissions.IsAuthenticated, IsRealtor]

    def get(self, request):
        realtor = lookups.get_realtor_for_user(request.user)
        portfolio = Review.objects.filter(property__realtor_id=realtor.id)
        payload = summarize_queryset(portfolio).as_dict()
        recent = store.list_for_realtor(realtor.id)[: settings.REVIEWS["RECENT_REVIEWS_LIMIT"]]
        payload["recent_reviews"] = ReviewSerializer(recent, many=True).data
        logger.debug("Review analytics computed realtor_id=%s total=%s", realtor.id, payload["total_reviews"])
        return response.Response(payload)
