# notifications/models.py
import time

from django.conf import settings
from django.db import models


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class Notification(models.Model):
    SEVERITY_SUCCESS = "success"
    SEVERITY_INFO = "info"
    SEVERITY_WARNING = "warning"
    SEVERITY_ERROR = "error"

    SEVERITY_CHOICES = [
        (SEVERITY_SUCCESS, "Success"),
        (SEVERITY_INFO, "Info"),
        (SEVERITY_WARNING, "Warning"),
        (SEVERITY_ERROR, "Error"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    title = models.CharField(max_length=255)
    message = models.TextField(blank=True)
    severity = models.CharField(max_length=16, choices=SEVERITY_CHOICES, default=SEVERITY_INFO)
    is_read = models.BooleanField(default=False)
    # Epoch milliseconds, as the frontend sorts on it directly
    created_at = models.BigIntegerField(default=now_millis, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.user} - {self.severity} - {self.title}"
