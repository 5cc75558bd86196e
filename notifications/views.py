from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, viewsets, permissions, decorators
from rest_framework.response import Response
from .filters import NotificationFilter
from .models import Notification
from .serializers import NotificationSerializer


class NotificationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Review notifications of the requesting user, newest first.

    - list (GET /api/notifications/): ?is_read=true|false, ?type=review_received|review_response|review_moderation;
      an unknown type is a 400.
    - read (POST /api/notifications/{id}/read/): marks one notification read.
    - read_all (POST /api/notifications/read_all/): marks every unread one read.
    """
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = NotificationFilter

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user).order_by("-created_at")

    @decorators.action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        # get_queryset is scoped to the requester, so foreign ids are 404
        notification = self.get_object()
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return Response({"id": notification.id, "is_read": notification.is_read})

    @decorators.action(detail=False, methods=["post"])
    def read_all(self, request):
        updated = self.get_queryset().filter(is_read=False).update(is_read=True)
        return Response({"updated": updated})
