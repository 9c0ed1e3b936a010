from celery import shared_task
from datetime import timedelta
from django.utils import timezone
from slims.action_logs.models.action_log import ActionLog
import logging

logger = logging.getLogger(__name__)


@shared_task(name="slims.action_logs.tasks.cleanup_old_action_logs")
def cleanup_old_action_logs(days=365):
    """Delete action logs older than ``days`` days"""
    cutoff = timezone.now() - timedelta(days=days)
    deleted_count, _ = ActionLog.objects.filter(timestamp__lt=cutoff).delete()
    logger.info(f"Cleaned up {deleted_count} action logs older than {cutoff}")
    return {"status": "success", "deleted_count": deleted_count}
