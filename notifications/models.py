# notifications/models.py
from django.conf import settings
from django.db import models


class Notification(models.Model):
    LEVELS = (("info", "Info"), ("success", "Success"), ("warning", "Warning"), ("error", "Error"))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    # Dotted event name, e.g. "kyc.application.approved"
    event = models.CharField(max_length=64, blank=True, db_index=True)
    title = models.CharField(max_length=200)
    message = models.TextField()
    level = models.CharField(max_length=10, choices=LEVELS, default="info")
    url = models.CharField(max_length=300, blank=True)
    emailed = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "read_at"], name="notif_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.event or 'notice'} -> {self.user_id}"
