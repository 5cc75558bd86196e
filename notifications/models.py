from django.conf import settings
from django.db import models


class Notification(models.Model):
    class Types(models.TextChoices):
        REVIEW_RECEIVED = "review_received", "New review (for realtor)"
        REVIEW_RESPONSE = "review_response", "Host responded to a review (for guest)"
        REVIEW_MODERATION = "review_moderation", "Review visibility changed (for guest)"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    type = models.CharField(max_length=50, choices=Types.choices)
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.type} -> {self.user_id}"
