from datetime import timedelta
from django.conf import settings
from django.db import models
from django.utils import timezone
import secrets


class SessionTokenQuerySet(models.QuerySet):
    def active(self):
        return self.filter(expires_at__gt=timezone.now())

    def expired(self):
        return self.filter(expires_at__lte=timezone.now())


class SessionToken(models.Model):
    """Cookie session issued at login; looked up through the session cache"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sessions"
    )
    token = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=500, blank=True)
    device = models.CharField(max_length=100, blank=True)
    browser = models.CharField(max_length=100, blank=True)
    os = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SessionTokenQuerySet.as_manager()

    class Meta:
        verbose_name = "Session Token"
        verbose_name_plural = "Session Tokens"
        ordering = ["-updated_at"]
        indexes = [models.Index(fields=["expires_at"], name="session_token_expires_idx")]

    def __str__(self):
        return f"{self.user.username}'s session ({self.device or 'Unknown device'})"

    def save(self, *args, **kwargs):
        if not self.token:
            self.token = secrets.token_urlsafe(32)
        if not self.expires_at:
            self.expires_at = timezone.now() + timedelta(
                seconds=settings.SESSION_EXPIRES_IN
            )
        super().save(*args, **kwargs)

    @property
    def is_expired(self):
        return timezone.now() >= self.expires_at

    def seconds_until_expiry(self):
        return int((self.expires_at - timezone.now()).total_seconds())
