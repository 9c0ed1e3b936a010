from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone


class ActionCategory(models.TextChoices):
    CREATE = "CREATE", "Create"
    UPDATE = "UPDATE", "Update"
    DELETE = "DELETE", "Delete"
    VIEW = "VIEW", "View"
    LOGIN = "LOGIN", "Login"
    LOGOUT = "LOGOUT", "Logout"
    UPLOAD = "UPLOAD", "Upload"
    REVIEW = "REVIEW", "Review"
    SYSTEM = "SYSTEM", "System"
    OTHER = "OTHER", "Other"


class ActionLog(models.Model):
    # User who performed the action
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="actions",
    )
    user_tag = models.UUIDField(editable=False)
    user_type = models.CharField(max_length=30, blank=True)

    # Action details
    action = models.CharField(max_length=255)
    category = models.CharField(
        max_length=20, choices=ActionCategory.choices, default=ActionCategory.OTHER
    )
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=500, blank=True, null=True)

    # Affected model/object (using generic foreign key)
    content_type = models.ForeignKey(
        ContentType, on_delete=models.SET_NULL, null=True, blank=True
    )
    object_id = models.PositiveIntegerField(null=True, blank=True)
    content_object = GenericForeignKey("content_type", "object_id")

    metadata = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["-timestamp"], name="action_log_timestamp_idx"),
            models.Index(fields=["user"], name="action_log_user_idx"),
            models.Index(fields=["category"], name="action_log_category_idx"),
            models.Index(fields=["content_type", "object_id"], name="action_log_object_idx"),
        ]
        verbose_name = "Action Log"
        verbose_name_plural = "Action Logs"

    def __str__(self):
        return f"{self.user_tag} - {self.get_category_display()} - {self.action}"

    def save(self, *args, **kwargs):
        if self.user and not self.user_tag:
            self.user_tag = self.user.user_tag
        if self.user and not self.user_type:
            self.user_type = self.user.user_type
        super().save(*args, **kwargs)

    @property
    def affected_model(self):
        if self.content_type:
            model_class = self.content_type.model_class()
            return model_class.__name__ if model_class else self.content_type.model
        return None

    @property
    def affected_object(self):
        if self.content_object:
            return str(self.content_object)
        return None
