import logging
from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.db.utils import DatabaseError
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from slims.action_logs.models.action_log import ActionCategory
from slims.action_logs.utils.action_log import log_action
from slims.core.exceptions import AppError, ForbiddenError
from slims.notifications.tasks import send_magic_link_email
from slims.users.middleware.csrf import get_csrf_token
from slims.users.models.base_user import User
from slims.users.models.verification import MagicLinkToken
from slims.users.serializers.auth import (
    LoginSerializer,
    MagicLinkRequestSerializer,
    MagicLinkVerifySerializer,
    ChangePasswordSerializer,
)
from slims.users.serializers.base_user import UserSerializer
from slims.users.utils.sessions import (
    create_session,
    revoke_session,
    set_session_cookie,
    clear_session_cookie,
)

logger = logging.getLogger(__name__)


class LoginAPIView(APIView):
    """
    POST /api/auth/login
    Body: {"identifier": "CSC/2020/001", "password": "...", "user_type": "STUDENT"}
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]

        session = create_session(user, request)
        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])
        log_action(user, "Signed in with password", ActionCategory.LOGIN, request=request)

        response = Response(
            {"user": UserSerializer(user).data, "expires_at": session.expires_at},
            status=status.HTTP_200_OK,
        )
        return set_session_cookie(response, session)


class MagicLinkRequestAPIView(APIView):
    """
    POST /api/auth/magic-link
    Body: {"email": "supervisor@company.com"}

    Always answers 200 so the endpoint cannot be used to probe for accounts.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = MagicLinkRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]

        user = User.objects.filter(
            email__iexact=email,
            user_type=User.INDUSTRY_SUPERVISOR,
            is_active=True,
        ).first()
        if user is not None:
            magic_link = MagicLinkToken.objects.create(user=user)
            link = f"{settings.APP_URL}/auth/magic-link/verify?token={magic_link.token}"
            send_magic_link_email.delay(user.id, link)
            logger.info(f"Magic link issued for user {user.id}")
        else:
            logger.info("Magic link requested for unknown email")

        return Response(
            {
                "message": "If an account exists with this email, a sign-in link has been sent.",
                "expires_in_minutes": settings.MAGIC_LINK_EXPIRY_M,
            },
            status=status.HTTP_200_OK,
        )


class MagicLinkVerifyAPIView(APIView):
    """POST /api/auth/magic-link/verify  Body: {"token": "..."}"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = MagicLinkVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        magic_link = serializer.validated_data["magic_link"]
        magic_link.mark_as_used()
        user = magic_link.user

        session = create_session(user, request)
        log_action(user, "Signed in with magic link", ActionCategory.LOGIN, request=request)

        response = Response(
            {"user": UserSerializer(user).data, "expires_at": session.expires_at},
            status=status.HTTP_200_OK,
        )
        return set_session_cookie(response, session)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def logout_view(request):
    """Deletes the session row and its cache entry, then clears the cookie"""
    token = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME)
    if token:
        revoke_session(token)
    response = Response({"message": "Signed out"}, status=status.HTTP_200_OK)
    return clear_session_cookie(response)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me_view(request):
    return Response(UserSerializer(request.user).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def change_password(request):
    serializer = ChangePasswordSerializer(
        data=request.data, context={"request": request}
    )
    serializer.is_valid(raise_exception=True)
    user = request.user
    user.set_password(serializer.validated_data["new_password"])
    user.save(update_fields=["password"])

    # Sign out every other device
    current = getattr(request, "session_token", None)
    for session in user.sessions.exclude(token=current):
        session.delete()

    log_action(user, "Changed password", ActionCategory.UPDATE, request=request)
    return Response({"message": "Password changed successfully"})


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def csrf_token_view(request):
    """
    GET /api/csrf
    Returns the CSRF token issued for this browser. Cross-origin callers are
    refused outside DEBUG.
    """
    origin = request.headers.get("Origin")
    referer = request.headers.get("Referer")
    same_origin = (origin and origin == settings.APP_URL) or (
        referer and referer.startswith(settings.APP_URL)
    )
    if not same_origin and not settings.DEBUG:
        raise ForbiddenError("Invalid origin", code="INVALID_ORIGIN")

    token = get_csrf_token(request)
    if not token:
        raise AppError(
            "CSRF token not available. Please refresh the page.",
            code="CSRF_TOKEN_NOT_GENERATED",
        )

    return Response(
        {
            "message": "CSRF token is available in cookie",
            "token": token,
            "header_name": "X-CSRF-Token",
        }
    )


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health_view(request):
    checks = {}

    try:
        connection.ensure_connection()
        checks["database"] = "ok"
    except DatabaseError as e:
        logger.error(f"Health check database failure: {str(e)}")
        checks["database"] = "error"

    try:
        cache.set("health:ping", "pong", timeout=5)
        checks["cache"] = "ok" if cache.get("health:ping") == "pong" else "error"
    except Exception as e:
        logger.error(f"Health check cache failure: {str(e)}")
        checks["cache"] = "error"

    healthy = checks["database"] == "ok"
    return Response(
        {
            "status": "healthy" if healthy else "unhealthy",
            "version": settings.APP_VERSION,
            "checks": checks,
        },
        status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
