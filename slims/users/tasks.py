from celery import shared_task
from django.utils import timezone
from slims.users.models.session import SessionToken
from slims.users.models.verification import MagicLinkToken
import logging

logger = logging.getLogger(__name__)


@shared_task(name="slims.users.tasks.cleanup_expired_sessions")
def cleanup_expired_sessions():
    """
    Delete expired session tokens and spent or expired magic links.
    Runs daily at 2:00 AM (configured in settings).
    """
    now = timezone.now()
    # Deleted one by one so the cache eviction signal fires for each token
    expired_sessions = 0
    for session in list(SessionToken.objects.expired()):
        session.delete()
        expired_sessions += 1

    deleted_links, _ = MagicLinkToken.objects.filter(expires_at__lte=now).delete()

    logger.info(
        f"Cleaned up {expired_sessions} expired sessions and {deleted_links} magic links"
    )
    return {
        "status": "success",
        "deleted_sessions": expired_sessions,
        "deleted_magic_links": deleted_links,
        "timestamp": now.isoformat(),
    }
