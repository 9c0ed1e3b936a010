# slims/siwes_sessions/services/session.py
import logging
from slims.core.exceptions import BusinessError, ConflictError, NotFoundError
from slims.siwes_sessions.models.session import SiwesSession

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_WEEKS = 24


def get_session(session_id):
    try:
        return SiwesSession.objects.get(pk=session_id)
    except SiwesSession.DoesNotExist:
        raise NotFoundError("Session not found")


def get_active_session():
    """Most recently started ACTIVE session, or None"""
    return (
        SiwesSession.objects.filter(status=SiwesSession.STATUS.ACTIVE)
        .order_by("-start_date")
        .first()
    )


def _check_dates(start_date, end_date):
    if start_date >= end_date:
        raise BusinessError("Start date must be before end date")


def create_session(name, start_date, end_date, total_weeks=None):
    logger.info(f"Creating session {name}")
    _check_dates(start_date, end_date)

    if SiwesSession.objects.filter(name__iexact=name.strip()).exists():
        raise ConflictError("Session with this name already exists")

    return SiwesSession.objects.create(
        name=name.strip(),
        start_date=start_date,
        end_date=end_date,
        total_weeks=total_weeks or DEFAULT_TOTAL_WEEKS,
        status=SiwesSession.STATUS.ACTIVE,
    )


def update_session(session_id, **data):
    logger.info(f"Updating session {session_id}")
    session = get_session(session_id)

    _check_dates(
        data.get("start_date") or session.start_date,
        data.get("end_date") or session.end_date,
    )

    name = data.get("name")
    if name and name.strip() != session.name:
        if (
            SiwesSession.objects.filter(name__iexact=name.strip())
            .exclude(pk=session.pk)
            .exists()
        ):
            raise ConflictError("Session with this name already exists")
        data["name"] = name.strip()

    for field in ("name", "start_date", "end_date", "total_weeks"):
        if data.get(field) is not None:
            setattr(session, field, data[field])
    session.save()
    return session


def close_session(session_id):
    logger.info(f"Closing session {session_id}")
    session = get_session(session_id)
    if session.status == SiwesSession.STATUS.CLOSED:
        raise BusinessError("Session is already closed")
    session.status = SiwesSession.STATUS.CLOSED
    session.save(update_fields=["status", "updated_at"])
    return session


def reopen_session(session_id):
    logger.info(f"Reopening session {session_id}")
    session = get_session(session_id)
    if session.status == SiwesSession.STATUS.ACTIVE:
        raise BusinessError("Session is already active")
    session.status = SiwesSession.STATUS.ACTIVE
    session.save(update_fields=["status", "updated_at"])
    return session
