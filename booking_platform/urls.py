from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

from reviews.urls import property_urlpatterns, realtor_urlpatterns

urlpatterns = [
    path("admin/", admin.site.urls),

    # Auth (JWT)
    path("api/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # DRF browsable API login/logout
    path("api-auth/", include("rest_framework.urls")),

    # Apps
    path("api/reviews/", include("reviews.urls")),
    path("api/properties/<int:property_id>/reviews/", include(property_urlpatterns)),
    path("api/realtor/reviews/", include(realtor_urlpatterns)),
    path("api/notifications/", include("notifications.urls")),

    # OpenAPI schema + Swagger UI + Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]
