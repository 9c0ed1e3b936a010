# slims/users/middleware/auth.py
import logging
from django.conf import settings
from slims.core.responses import error_json_response
from slims.core.routing import matches_any

logger = logging.getLogger(__name__)


class RouteAuthMiddleware:
    """
    Optimistic route guard. Protected routes are refused with 401 when the
    request carries no session cookie and no bearer token; the credentials
    themselves are validated later by the DRF authentication classes.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path_info

        if matches_any(path, settings.AUTH_EXEMPT_ROUTES):
            return self.get_response(request)

        if matches_any(path, settings.AUTH_PROTECTED_ROUTES) and not self.has_credentials(
            request
        ):
            logger.warning(f"Unauthenticated request to protected route {path}")
            return error_json_response(
                "Invalid or expired session", 401, code="SESSION_INVALID"
            )

        return self.get_response(request)

    def has_credentials(self, request):
        if request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME):
            return True
        authorization = request.META.get("HTTP_AUTHORIZATION", "")
        return authorization.startswith("Bearer ")
