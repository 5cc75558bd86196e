from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import (
    PropertyRatingSummaryView,
    PropertyReviewListView,
    RealtorReviewAnalyticsView,
    RealtorReviewListView,
    ReviewViewSet,
)

router = SimpleRouter()
router.register(r"", ReviewViewSet, basename="review")

urlpatterns = [
    path("", include(router.urls)),
]

# Mounted under /api/properties/<property_id>/reviews/
property_urlpatterns = [
    path("", PropertyReviewListView.as_view(), name="property-reviews"),
    path("summary/", PropertyRatingSummaryView.as_view(), name="property-review-summary"),
]

# Mounted under /api/realtor/reviews/
realtor_urlpatterns = [
    path("", RealtorReviewListView.as_view(), name="realtor-reviews"),
    path("analytics/", RealtorReviewAnalyticsView.as_view(), name="realtor-review-analytics"),
]
