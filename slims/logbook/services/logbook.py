# slims/logbook/services/logbook.py
import logging
import re
from django.conf import settings
from django.db import transaction
from django.db.models import Count
from slims.core.exceptions import (
    BusinessError,
    ForbiddenError,
    NoEntriesError,
    NotFoundError,
    ReviewAlreadyRequestedError,
    WeekLockedError,
)
from slims.logbook.models.diagram import Diagram
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.logbook.services import review
from slims.notifications.tasks import notify_industry_supervisor_review_request
from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail

logger = logging.getLogger(__name__)

DANGEROUS_CONTENT = [
    re.compile(r"<\s*script\b", re.IGNORECASE),
    re.compile(r"<\s*iframe\b", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=\s*[^\s>]*", re.IGNORECASE),
]


def validate_entry_content(content):
    """Trimmed content. Markup that could run script is rejected, not stripped."""
    trimmed = (content or "").strip()
    if not trimmed:
        raise BusinessError("Entry content cannot be empty")

    max_length = settings.LOGBOOK_ENTRY_MAX_LENGTH
    if len(trimmed) > max_length:
        raise BusinessError(
            f"Entry content too long: Maximum {max_length} characters allowed"
        )

    if any(pattern.search(trimmed) for pattern in DANGEROUS_CONTENT):
        raise BusinessError("Invalid content: Scripts and event handlers are not allowed")

    return trimmed


def get_logbook_weeks(student_id, session_id):
    logger.info(f"Getting logbook weeks for student {student_id} in session {session_id}")
    return (
        WeeklyEntry.objects.filter(student_id=student_id, siwes_session_id=session_id)
        .annotate(
            diagram_count=Count("diagrams", distinct=True),
            industry_comment_count=Count("industry_comments", distinct=True),
            school_comment_count=Count("school_comments", distinct=True),
        )
        .order_by("week_number")
    )


def get_week_details(week_id):
    try:
        return (
            WeeklyEntry.objects.select_related("student__user", "siwes_session")
            .prefetch_related("diagrams")
            .get(pk=week_id)
        )
    except WeeklyEntry.DoesNotExist:
        raise NotFoundError("Week not found")


def is_week_locked(week_id):
    return get_week_details(week_id).is_locked


def _get_editable_week(week_id, student_id):
    week = review.get_week(week_id, for_update=True)
    if week.student_id != student_id:
        raise ForbiddenError("Unauthorized: Week does not belong to this student")
    if week.is_locked:
        raise WeekLockedError()
    return week


def _day_field(day):
    field = WeeklyEntry.day_field(day)
    if field is None:
        raise BusinessError(f"Invalid day: {day}")
    return field


def upsert_week_entry(week_id, student_id, day, content):
    logger.info(f"Upserting {day} entry of week {week_id} for student {student_id}")
    field = _day_field(day)
    content = validate_entry_content(content)

    with transaction.atomic():
        week = _get_editable_week(week_id, student_id)
        setattr(week, field, content)
        week.save(update_fields=[field, "updated_at"])
    return week


def delete_week_entry(week_id, student_id, day):
    logger.info(f"Deleting {day} entry of week {week_id} for student {student_id}")
    field = _day_field(day)

    with transaction.atomic():
        week = _get_editable_week(week_id, student_id)
        setattr(week, field, None)
        week.save(update_fields=[field, "updated_at"])
    return week


def upload_weekly_diagram(week_id, student_id, uploaded_file, caption=""):
    logger.info(f"Uploading diagram {uploaded_file.name} to week {week_id}")
    file_name = uploaded_file.name or ""
    if ".." in file_name or "~" in file_name or file_name.startswith("/"):
        raise BusinessError("Invalid file path: Path traversal detected")

    max_size = settings.LOGBOOK_DIAGRAM_MAX_SIZE
    if uploaded_file.size > max_size:
        raise BusinessError(
            f"File too large: Maximum diagram size is {max_size // (1024 * 1024)}MB"
        )

    mime_type = (uploaded_file.content_type or "").lower()
    if mime_type not in settings.LOGBOOK_DIAGRAM_MIME_TYPES:
        raise BusinessError(
            "Invalid file type: Only images (JPEG, PNG, GIF, WebP) and PDF files are allowed"
        )

    with transaction.atomic():
        week = review.get_week(week_id, for_update=True)
        if week.student_id != student_id:
            raise ForbiddenError("Unauthorized: Week does not belong to this student")
        if week.is_locked:
            raise WeekLockedError(
                "Cannot upload diagram to locked week. Contact your school supervisor to unlock."
            )
        return Diagram.objects.create(
            weekly_entry=week,
            file=uploaded_file,
            file_name=file_name,
            file_size=uploaded_file.size,
            mime_type=mime_type,
            caption=(caption or "").strip(),
        )


def delete_weekly_diagram(diagram_id, student_id):
    logger.info(f"Deleting diagram {diagram_id}")
    try:
        diagram = Diagram.objects.select_related("weekly_entry").get(pk=diagram_id)
    except Diagram.DoesNotExist:
        raise NotFoundError("Diagram not found")

    week = diagram.weekly_entry
    if week.student_id != student_id:
        raise ForbiddenError("Unauthorized: Diagram does not belong to this student")
    if week.is_locked:
        raise WeekLockedError(
            "Cannot delete diagram from locked week. Contact your school supervisor to unlock."
        )
    diagram.file.delete(save=False)
    diagram.delete()


def get_week_diagrams(week_id):
    return Diagram.objects.filter(weekly_entry_id=week_id)


def request_week_review(week_id, student_id):
    logger.info(f"Requesting review of week {week_id} for student {student_id}")
    with transaction.atomic():
        week = review.get_week(week_id, for_update=True)
        if week.is_locked:
            raise WeekLockedError("Week is already locked and reviewed")
        if week.student_id != student_id:
            raise ForbiddenError("Unauthorized: Week does not belong to this student")
        if not week.has_entries:
            raise NoEntriesError()

        siwes_detail = StudentSiwesDetail.objects.filter(
            student_id=student_id, siwes_session_id=week.siwes_session_id
        ).first()
        if siwes_detail is None:
            raise BusinessError(
                "SIWES details not found. Please complete your SIWES details first."
            )

        if IndustrySupervisorReviewRequest.objects.filter(
            weekly_entry=week, status=IndustrySupervisorReviewRequest.STATUS.PENDING
        ).exists():
            raise ReviewAlreadyRequestedError()

        review_request = review.create_review_request(
            week.pk, student_id, siwes_detail.industry_supervisor_id
        )

    notify_industry_supervisor_review_request.delay(review_request.id)
    logger.info(f"Review request {review_request.pk} created for week {week.pk}")
    return review_request
