import django_filters
from .models import Notification


class NotificationFilter(django_filters.FilterSet):
    """Inbox filters: ?is_read=true|false and ?type=<one of Notification.Types>."""
    is_read = django_filters.BooleanFilter(field_name="is_read")
    type = django_filters.ChoiceFilter(field_name="type", choices=Notification.Types.choices)

    class Meta:
        model = Notification
        fields = ["is_read", "type"]
