from datetime import timedelta
from django.conf import settings
from django.db import models
from django.utils import timezone
import secrets


class MagicLinkToken(models.Model):
    """Single-use passwordless login link, used by industry supervisors"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="magic_links",
    )
    token = models.CharField(max_length=64, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()
    used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["token", "used_at"], name="magic_link_token_used_idx")
        ]

    def save(self, *args, **kwargs):
        if not self.pk:
            self.token = secrets.token_urlsafe(32)
            self.expires_at = timezone.now() + timedelta(
                minutes=settings.MAGIC_LINK_EXPIRY_M
            )
        super().save(*args, **kwargs)

    def is_valid(self):
        """Check if the link is unused and unexpired"""
        return self.used_at is None and timezone.now() < self.expires_at

    def mark_as_used(self):
        self.used_at = timezone.now()
        self.save(update_fields=["used_at"])

        if not self.user.email_verified:
            self.user.email_verified = True
            self.user.save(update_fields=["email_verified"])
