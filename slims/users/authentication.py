from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from slims.users.utils.sessions import resolve_session


class CookieSessionAuthentication(BaseAuthentication):
    """
    Authenticates requests carrying the session token cookie.

    Requests without the cookie fall through to the next authentication
    class (JWT). A cookie that does not resolve to a live session fails.
    """

    def authenticate(self, request):
        token = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME)
        if not token:
            return None

        resolved = resolve_session(token)
        if resolved is None:
            raise AuthenticationFailed("Invalid or expired session", code="session_invalid")

        user, session_id = resolved
        if not user.is_active:
            raise AuthenticationFailed("User account is disabled", code="user_inactive")

        request.session_token = token
        return user, session_id

    def authenticate_header(self, request):
        return "Session"
