"""
Comments, final assessments and the lock state of weekly entries.

A weekly entry locks automatically once it carries at least one industry
supervisor comment and at least one school supervisor comment; the side whose
comment completes the pair is recorded in ``locked_by``. Comment insertion,
the existence check and the lock update share one transaction holding a row
lock on the entry, so concurrent comments on the same week are serialized.
"""
import logging
from django.db import IntegrityError, transaction
from django.utils import timezone
from slims.core.exceptions import (
    BusinessError,
    FinalCommentExistsError,
    NotFoundError,
    UnauthorizedSupervisorError,
    WeekNotLockedError,
)
from slims.logbook.models.comment import (
    IndustrySupervisorWeeklyComment,
    SchoolSupervisorWeeklyComment,
    IndustrySupervisorFinalComment,
    SchoolSupervisorFinalComment,
)
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.notifications.tasks import (
    notify_student_comment_received,
    notify_student_week_locked,
)
from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment
from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail

logger = logging.getLogger(__name__)

INDUSTRY_SUPERVISOR = WeeklyEntry.LOCKED_BY.INDUSTRY_SUPERVISOR
SCHOOL_SUPERVISOR = WeeklyEntry.LOCKED_BY.SCHOOL_SUPERVISOR
MANUAL = WeeklyEntry.LOCKED_BY.MANUAL


def get_week(week_id, for_update=False):
    queryset = WeeklyEntry.objects.select_related("student__user", "siwes_session")
    if for_update:
        queryset = queryset.select_for_update(of=("self",))
    try:
        return queryset.get(pk=week_id)
    except WeeklyEntry.DoesNotExist:
        raise NotFoundError("Week not found")


def is_industry_supervisor_for(supervisor_id, student_id, session_id):
    return StudentSiwesDetail.objects.filter(
        student_id=student_id,
        siwes_session_id=session_id,
        industry_supervisor_id=supervisor_id,
    ).exists()


def is_school_supervisor_for(supervisor_id, student_id, session_id):
    return StudentSupervisorAssignment.objects.filter(
        student_id=student_id,
        siwes_session_id=session_id,
        school_supervisor_id=supervisor_id,
    ).exists()


def _check_supervisor(week, supervisor_id, supervisor_type):
    if supervisor_type == INDUSTRY_SUPERVISOR:
        authorized = is_industry_supervisor_for(
            supervisor_id, week.student_id, week.siwes_session_id
        )
    else:
        authorized = is_school_supervisor_for(
            supervisor_id, week.student_id, week.siwes_session_id
        )
    if not authorized:
        logger.warning(
            f"Supervisor {supervisor_id} ({supervisor_type}) is not linked to "
            f"student {week.student_id} for session {week.siwes_session_id}"
        )
        raise UnauthorizedSupervisorError()


def has_industry_comment(week_id):
    return IndustrySupervisorWeeklyComment.objects.filter(
        weekly_entry_id=week_id
    ).exists()


def has_school_comment(week_id):
    return SchoolSupervisorWeeklyComment.objects.filter(
        weekly_entry_id=week_id
    ).exists()


def _lock(week, locked_by):
    """Lock ``week`` unless already locked. Returns True when it changed."""
    if week.is_locked:
        return False
    week.is_locked = True
    week.locked_by = locked_by
    week.locked_at = timezone.now()
    week.save(update_fields=["is_locked", "locked_by", "locked_at", "updated_at"])
    logger.info(f"Week {week.pk} locked by {locked_by}")
    return True


def get_week_comments(week_id):
    """Both supervisor sides merged, oldest first"""
    get_week(week_id)
    industry = IndustrySupervisorWeeklyComment.objects.filter(
        weekly_entry_id=week_id
    ).select_related("industry_supervisor__user")
    school = SchoolSupervisorWeeklyComment.objects.filter(
        weekly_entry_id=week_id
    ).select_related("school_supervisor__user")
    return sorted(
        [*industry, *school], key=lambda comment: (comment.commented_at, comment.pk)
    )


def add_industry_comment(week_id, supervisor_id, text):
    logger.info(f"Adding industry comment to week {week_id} by {supervisor_id}")
    text = (text or "").strip()
    if not text:
        raise BusinessError("Comment cannot be empty")

    with transaction.atomic():
        week = get_week(week_id, for_update=True)
        _check_supervisor(week, supervisor_id, INDUSTRY_SUPERVISOR)

        comment = IndustrySupervisorWeeklyComment.objects.create(
            weekly_entry=week, industry_supervisor_id=supervisor_id, comment=text
        )
        locked = has_school_comment(week.pk) and _lock(week, INDUSTRY_SUPERVISOR)

        reviewed = IndustrySupervisorReviewRequest.objects.filter(
            weekly_entry=week, status=IndustrySupervisorReviewRequest.STATUS.PENDING
        ).update(
            status=IndustrySupervisorReviewRequest.STATUS.REVIEWED,
            reviewed_at=timezone.now(),
        )
        if reviewed:
            logger.info(f"Marked {reviewed} review request(s) for week {week.pk} reviewed")

    notify_student_comment_received.delay(week.pk, INDUSTRY_SUPERVISOR)
    if locked:
        notify_student_week_locked.delay(week.pk)
    return comment


def add_school_comment(week_id, supervisor_id, text):
    logger.info(f"Adding school comment to week {week_id} by {supervisor_id}")
    text = (text or "").strip()
    if not text:
        raise BusinessError("Comment cannot be empty")

    with transaction.atomic():
        week = get_week(week_id, for_update=True)
        _check_supervisor(week, supervisor_id, SCHOOL_SUPERVISOR)

        comment = SchoolSupervisorWeeklyComment.objects.create(
            weekly_entry=week, school_supervisor_id=supervisor_id, comment=text
        )
        locked = has_industry_comment(week.pk) and _lock(week, SCHOOL_SUPERVISOR)

    notify_student_comment_received.delay(week.pk, SCHOOL_SUPERVISOR)
    if locked:
        notify_student_week_locked.delay(week.pk)
    return comment


def lock_week(week_id, supervisor_id, supervisor_type):
    """
    Idempotent: an already locked week is returned unchanged. Industry locks
    require the linked industry supervisor; school and manual locks require
    the assigned school supervisor.

    ``supervisor_id`` is a bare profile pk, so ``supervisor_type`` alone
    decides whether it is checked against industry or school supervisors.
    """
    logger.info(f"Locking week {week_id} ({supervisor_type}) by {supervisor_id}")
    if supervisor_type not in WeeklyEntry.LOCKED_BY:
        raise BusinessError(f"Invalid supervisor type: {supervisor_type}")

    with transaction.atomic():
        week = get_week(week_id, for_update=True)
        _check_supervisor(week, supervisor_id, supervisor_type)
        if week.is_locked:
            logger.info(f"Week {week.pk} already locked")
            return week
        _lock(week, supervisor_type)

    notify_student_week_locked.delay(week.pk)
    return week


def unlock_week(week_id, supervisor_id):
    """Only the assigned school supervisor may reverse a lock"""
    logger.info(f"Unlocking week {week_id} by {supervisor_id}")
    with transaction.atomic():
        week = get_week(week_id, for_update=True)
        if not week.is_locked:
            raise WeekNotLockedError()
        _check_supervisor(week, supervisor_id, SCHOOL_SUPERVISOR)

        week.is_locked = False
        week.locked_by = None
        week.locked_at = None
        week.save(update_fields=["is_locked", "locked_by", "locked_at", "updated_at"])
    return week


FINAL_COMMENT_MODELS = {
    INDUSTRY_SUPERVISOR: (IndustrySupervisorFinalComment, "industry_supervisor_id"),
    SCHOOL_SUPERVISOR: (SchoolSupervisorFinalComment, "school_supervisor_id"),
}


def add_final_comment(
    student_id, session_id, supervisor_id, text, supervisor_type, rating=None
):
    logger.info(
        f"Adding {supervisor_type} final comment for student {student_id} "
        f"in session {session_id}"
    )
    if supervisor_type not in FINAL_COMMENT_MODELS:
        raise BusinessError(f"Invalid supervisor type: {supervisor_type}")
    text = (text or "").strip()
    if not text:
        raise BusinessError("Comment cannot be empty")
    if rating is not None and not 1 <= int(rating) <= 5:
        raise BusinessError("Rating must be between 1 and 5")

    if supervisor_type == INDUSTRY_SUPERVISOR:
        authorized = is_industry_supervisor_for(supervisor_id, student_id, session_id)
    else:
        authorized = is_school_supervisor_for(supervisor_id, student_id, session_id)
    if not authorized:
        raise UnauthorizedSupervisorError()

    model, supervisor_field = FINAL_COMMENT_MODELS[supervisor_type]
    label = supervisor_type.lower().replace("_", " ")
    if model.objects.filter(student_id=student_id, siwes_session_id=session_id).exists():
        raise FinalCommentExistsError(f"Final {label} comment already submitted")

    try:
        with transaction.atomic():
            return model.objects.create(
                student_id=student_id,
                siwes_session_id=session_id,
                comment=text,
                rating=int(rating) if rating is not None else None,
                **{supervisor_field: supervisor_id},
            )
    except IntegrityError:
        # Lost a race with a concurrent submission
        raise FinalCommentExistsError(f"Final {label} comment already submitted")


def get_final_comments(student_id, session_id):
    return {
        "industry": IndustrySupervisorFinalComment.objects.filter(
            student_id=student_id, siwes_session_id=session_id
        )
        .select_related("industry_supervisor__user")
        .first(),
        "school": SchoolSupervisorFinalComment.objects.filter(
            student_id=student_id, siwes_session_id=session_id
        )
        .select_related("school_supervisor__user")
        .first(),
    }


def create_review_request(week_id, student_id, industry_supervisor_id):
    return IndustrySupervisorReviewRequest.objects.create(
        weekly_entry_id=week_id,
        student_id=student_id,
        industry_supervisor_id=industry_supervisor_id,
    )
