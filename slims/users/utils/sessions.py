# slims/users/utils/sessions.py
import logging
from datetime import timedelta
import user_agents
from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from slims.users.models.session import SessionToken
from slims.users.utils import session_store

logger = logging.getLogger(__name__)


def get_client_ip(request):
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    return (
        x_forwarded_for.split(",")[0].strip()
        if x_forwarded_for
        else request.META.get("REMOTE_ADDR")
    )


def get_device_name(ua):
    if ua.is_mobile:
        return ua.device.family
    elif ua.is_tablet:
        return f"{ua.device.family} Tablet"
    return "Desktop"


def _cache_payload(session):
    return {
        "session_id": session.pk,
        "user_id": session.user_id,
        "expires_at": session.expires_at.isoformat(),
        "updated_at": session.updated_at.isoformat(),
    }


def cache_session(session):
    session_store.set(
        session.token, _cache_payload(session), session.seconds_until_expiry()
    )


def create_session(user, request=None):
    """Issue a new session token for ``user`` and prime the cache"""
    fields = {"user": user}
    if request is not None:
        raw_agent = request.META.get("HTTP_USER_AGENT", "")
        ua = user_agents.parse(raw_agent)
        fields.update(
            ip_address=get_client_ip(request),
            user_agent=raw_agent[:500],
            device=get_device_name(ua),
            browser=ua.browser.family,
            os=ua.os.family,
        )

    session = SessionToken.objects.create(**fields)
    cache_session(session)
    logger.info(f"Session created for user {user.pk}")
    return session


def _refresh_if_stale(session):
    """Slide the expiry forward once the session is older than the update age"""
    now = timezone.now()
    if now - session.updated_at < timedelta(seconds=settings.SESSION_UPDATE_AGE):
        return session

    session.expires_at = now + timedelta(seconds=settings.SESSION_EXPIRES_IN)
    session.save(update_fields=["expires_at", "updated_at"])
    logger.debug(f"Session {session.pk} expiry refreshed")
    return session


def resolve_session(token):
    """
    Returns ``(user, session_id)`` for a live token or None.

    Looks in the cache first and falls back to the database; database hits
    are written back to the cache with a TTL equal to the remaining lifetime.
    """
    if not token:
        return None

    User = get_user_model()
    cached = session_store.get(token)
    if cached:
        expires_at = parse_datetime(cached["expires_at"])
        updated_at = parse_datetime(cached["updated_at"])
        now = timezone.now()
        if expires_at and expires_at > now:
            stale = updated_at is None or now - updated_at >= timedelta(
                seconds=settings.SESSION_UPDATE_AGE
            )
            if not stale:
                try:
                    user = User.objects.get(pk=cached["user_id"])
                except User.DoesNotExist:
                    session_store.delete(token)
                    return None
                return user, cached["session_id"]
        else:
            session_store.delete(token)
            return None

    try:
        session = SessionToken.objects.select_related("user").get(token=token)
    except SessionToken.DoesNotExist:
        return None

    if session.is_expired:
        logger.info(f"Expired session {session.pk} rejected")
        session.delete()
        return None

    session = _refresh_if_stale(session)
    cache_session(session)
    return session.user, session.pk


def revoke_session(token):
    session_store.delete(token)
    deleted, _ = SessionToken.objects.filter(token=token).delete()
    return deleted > 0


def set_session_cookie(response, session):
    response.set_cookie(
        settings.SESSION_TOKEN_COOKIE_NAME,
        session.token,
        max_age=session.seconds_until_expiry(),
        httponly=True,
        secure=settings.SESSION_TOKEN_COOKIE_SECURE,
        samesite="Lax",
        path="/",
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(settings.SESSION_TOKEN_COOKIE_NAME, path="/")
    return response
