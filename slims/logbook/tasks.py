from celery import shared_task
from datetime import timedelta
from django.conf import settings
from django.utils import timezone
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
import logging

logger = logging.getLogger(__name__)


@shared_task(name="slims.logbook.tasks.expire_stale_review_requests")
def expire_stale_review_requests():
    """
    Mark review requests that stayed PENDING longer than
    REVIEW_REQUEST_EXPIRY_DAYS as EXPIRED so students can ask again.
    """
    cutoff = timezone.now() - timedelta(days=settings.REVIEW_REQUEST_EXPIRY_DAYS)
    expired = IndustrySupervisorReviewRequest.objects.filter(
        status=IndustrySupervisorReviewRequest.STATUS.PENDING,
        requested_at__lt=cutoff,
    ).update(status=IndustrySupervisorReviewRequest.STATUS.EXPIRED)

    logger.info(f"Expired {expired} stale review requests")
    return {
        "status": "success",
        "expired_count": expired,
        "timestamp": timezone.now().isoformat(),
    }
