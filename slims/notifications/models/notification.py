from django.db import models
from django.conf import settings


class Notification(models.Model):
    NOTIFICATION_TYPES = [
        ("SYSTEM", "System Notification"),
        ("ENROLLMENT", "Session Enrollment"),
        ("ASSIGNMENT", "Supervisor Assignment"),
        ("REVIEW_REQUEST", "Review Request"),
        ("COMMENT", "Comment Received"),
        ("WEEK_LOCKED", "Week Locked"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    notification_type = models.CharField(max_length=20, choices=NOTIFICATION_TYPES)
    title = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    email_sent = models.BooleanField(default=False)
    related_model = models.CharField(max_length=50, null=True, blank=True)
    related_id = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_read_idx")
        ]

    def __str__(self):
        return f"{self.get_notification_type_display()} for {self.user}"
