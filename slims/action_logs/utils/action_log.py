import json
import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from slims.action_logs.models.action_log import ActionLog

logger = logging.getLogger(__name__)

SYSTEM_USER_TAG = uuid.UUID("00000000-0000-0000-0000-000000000000")


class CustomJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal, date, datetime and model instances"""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        elif isinstance(obj, (date, datetime)):
            return obj.isoformat()
        elif isinstance(obj, uuid.UUID):
            return str(obj)
        elif hasattr(obj, "pk"):
            return {"model": obj.__class__.__name__, "id": obj.pk, "str": str(obj)}
        return super().default(obj)


def _serialize_metadata(action, metadata):
    if not metadata:
        return {}
    try:
        return json.loads(json.dumps(metadata, cls=CustomJSONEncoder))
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to serialize metadata: {str(e)}")
        return {
            "error": "Failed to serialize metadata",
            "original_action": action,
        }


def log_action(user, action, category, obj=None, metadata=None, request=None):
    """
    Record an auditable action. Failures are logged and never propagate
    into the operation being audited.
    """
    if not getattr(settings, "ACTION_LOG_ENABLED", True):
        return None

    if user is not None and not user.pk:
        # Unsaved user, nothing to attribute the action to
        return None

    try:
        content_type = None
        object_id = None
        if obj is not None and obj.pk is not None:
            content_type = ContentType.objects.get_for_model(obj)
            object_id = obj.pk

        ip_address = None
        user_agent = None
        if request is not None:
            from slims.users.utils.sessions import get_client_ip

            ip_address = get_client_ip(request)
            user_agent = request.META.get("HTTP_USER_AGENT", "")[:500]

        action_log = ActionLog.objects.create(
            user=user,
            user_tag=user.user_tag if user else SYSTEM_USER_TAG,
            user_type=user.user_type if user else "",
            action=action,
            category=category,
            ip_address=ip_address,
            user_agent=user_agent,
            content_type=content_type,
            object_id=object_id,
            metadata=_serialize_metadata(action, metadata),
        )
        if request is not None:
            # The middleware skips requests a view already recorded
            getattr(request, "_request", request)._action_logged = True
        return action_log
    except Exception as e:
        logger.warning(f"Failed to create action log: {str(e)}")
        return None
