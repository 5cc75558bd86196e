from rest_framework.routers import SimpleRouter
from django.urls import path, include
from .views import NotificationViewSet

router = SimpleRouter()
router.register("", NotificationViewSet, basename="notification")

urlpatterns = [
    path("", include(router.urls)),
]