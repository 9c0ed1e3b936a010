import logging
from django.conf import settings
from rest_framework import status
from slims.action_logs.models.action_log import ActionLog, ActionCategory
from slims.users.utils.sessions import get_client_ip

logger = logging.getLogger(__name__)

METHOD_TO_CATEGORY = {
    "POST": ActionCategory.CREATE,
    "PUT": ActionCategory.UPDATE,
    "PATCH": ActionCategory.UPDATE,
    "DELETE": ActionCategory.DELETE,
}

SKIPPED_PREFIXES = ("/admin/", "/static/", "/media/", "/api/auth/", "/api/csrf")


class ActionLogMiddleware:
    """
    Records successful state-changing API requests that the view did not
    already record through log_action. DRF authenticates inside the view, so
    the user is read back from the DRF request on the response.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if not getattr(settings, "ACTION_LOG_ENABLED", True):
            return response

        if (
            request.method not in METHOD_TO_CATEGORY
            or response.status_code >= status.HTTP_400_BAD_REQUEST
            or getattr(request, "_action_logged", False)
            or any(request.path.startswith(p) for p in SKIPPED_PREFIXES)
        ):
            return response

        user = self.get_user(request, response)
        if user is None:
            return response

        self.log_request(request, response, user)
        return response

    def get_user(self, request, response):
        drf_request = getattr(response, "renderer_context", {}).get("request")
        user = getattr(drf_request, "user", None) or getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return user

    def log_request(self, request, response, user):
        try:
            ip = get_client_ip(request)
            user_agent = request.META.get("HTTP_USER_AGENT", "")[:500]
            ActionLog.objects.create(
                user=user,
                action=f"{request.method} {request.path}",
                category=METHOD_TO_CATEGORY[request.method],
                ip_address=ip,
                user_agent=user_agent,
                metadata={
                    "method": request.method,
                    "path": request.path,
                    "status_code": response.status_code,
                },
            )
        except Exception as e:
            logger.error(f"ActionLog creation failed: {str(e)}")
