# slims/notifications/utils/notification.py
from django.conf import settings
from django.core.mail import send_mail
from slims.notifications.models.notification import Notification
import logging

logger = logging.getLogger(__name__)


def send_email(user, subject, message):
    """
    Send a plain text email to a user. Failures are logged and reported
    through the return value so one bad address never aborts a task.
    """
    if not user.email:
        logger.warning(f"User {user.pk} has no email address")
        return False

    try:
        send_mail(
            subject=f"[{settings.APP_NAME}] {subject}",
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            fail_silently=False,
        )
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {user.email}: {str(e)}")
        return False


def notify(user, notification_type, title, message, related_obj=None, email=True):
    """Record an in-app notification and optionally mirror it by email."""
    notification = Notification.objects.create(
        user=user,
        notification_type=notification_type,
        title=title,
        message=message,
        related_model=related_obj._meta.model_name if related_obj else None,
        related_id=related_obj.pk if related_obj else None,
    )
    if email and send_email(user, title, message):
        notification.email_sent = True
        notification.save(update_fields=["email_sent"])
    return notification
