"""
Outbound notifications. Every task records an in-app Notification for the
recipient and emails the same text. Tasks report failures in their result
instead of raising, so a notification problem never fails the request that
queued it.
"""
from celery import shared_task
from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone
from slims.notifications.utils.notification import notify, send_email
import logging

logger = logging.getLogger(__name__)


def _result(status, **extra):
    return {"status": status, "timestamp": timezone.now().isoformat(), **extra}


@shared_task(name="slims.notifications.tasks.send_magic_link_email")
def send_magic_link_email(user_id, link):
    User = get_user_model()

    try:
        user = User.objects.get(id=user_id)
        message = f"""
Hello {user.get_full_name() or user.email},

Use the link below to sign in to {settings.APP_NAME}:

{link}

This link expires in {settings.MAGIC_LINK_EXPIRY_M} minutes and can only be used once.

If you did not request this link, you can ignore this email.
"""
        if not send_email(user, "Your sign-in link", message):
            return _result("error", error="Email delivery failed")

        logger.info(f"Magic link email sent to {user.email}")
        return _result("success")
    except User.DoesNotExist:
        logger.error(f"User with id {user_id} not found")
        return _result("error", error="User not found")


@shared_task(name="slims.notifications.tasks.notify_student_enrollment")
def notify_student_enrollment(enrollment_id):
    from slims.siwes_sessions.models.session import StudentSessionEnrollment

    try:
        enrollment = StudentSessionEnrollment.objects.select_related(
            "student__user", "siwes_session"
        ).get(id=enrollment_id)
    except StudentSessionEnrollment.DoesNotExist:
        logger.error(f"Student enrollment {enrollment_id} not found")
        return _result("error", error="Enrollment not found")

    session = enrollment.siwes_session
    notify(
        enrollment.student.user,
        "ENROLLMENT",
        f"Enrolled in {session.name}",
        f"You have been enrolled in the SIWES session {session.name} "
        f"({session.start_date} to {session.end_date}). "
        f"Your logbook has {session.total_weeks} weeks ready for entries.",
        related_obj=session,
    )
    return _result("success")


@shared_task(name="slims.notifications.tasks.notify_supervisor_enrollment")
def notify_supervisor_enrollment(enrollment_id):
    from slims.siwes_sessions.models.session import SupervisorSessionEnrollment

    try:
        enrollment = SupervisorSessionEnrollment.objects.select_related(
            "school_supervisor__user", "siwes_session"
        ).get(id=enrollment_id)
    except SupervisorSessionEnrollment.DoesNotExist:
        logger.error(f"Supervisor enrollment {enrollment_id} not found")
        return _result("error", error="Enrollment not found")

    session = enrollment.siwes_session
    notify(
        enrollment.school_supervisor.user,
        "ENROLLMENT",
        f"Added to {session.name}",
        f"You have been added as a school supervisor for the SIWES session {session.name}.",
        related_obj=session,
    )
    return _result("success")


def _get_assignment(assignment_id):
    from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment

    return StudentSupervisorAssignment.objects.select_related(
        "student__user", "school_supervisor__user", "siwes_session"
    ).filter(id=assignment_id).first()


@shared_task(name="slims.notifications.tasks.notify_school_supervisor_assigned")
def notify_school_supervisor_assigned(assignment_id):
    assignment = _get_assignment(assignment_id)
    if assignment is None:
        logger.error(f"Assignment {assignment_id} not found")
        return _result("error", error="Assignment not found")

    student = assignment.student
    notify(
        assignment.school_supervisor.user,
        "ASSIGNMENT",
        "New student assigned",
        f"{student.full_name} ({student.matric_number}) has been assigned to you "
        f"for {assignment.siwes_session.name}.",
        related_obj=assignment,
    )
    return _result("success")


@shared_task(name="slims.notifications.tasks.notify_student_supervisor_assigned")
def notify_student_supervisor_assigned(assignment_id):
    assignment = _get_assignment(assignment_id)
    if assignment is None:
        logger.error(f"Assignment {assignment_id} not found")
        return _result("error", error="Assignment not found")

    supervisor = assignment.school_supervisor
    notify(
        assignment.student.user,
        "ASSIGNMENT",
        "School supervisor assigned",
        f"{supervisor.full_name} is your school supervisor for "
        f"{assignment.siwes_session.name}.",
        related_obj=assignment,
    )
    return _result("success")


@shared_task(name="slims.notifications.tasks.notify_industry_supervisor_linked")
def notify_industry_supervisor_linked(siwes_detail_id):
    from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail

    detail = (
        StudentSiwesDetail.objects.select_related(
            "student__user", "industry_supervisor__user", "siwes_session"
        )
        .filter(id=siwes_detail_id)
        .first()
    )
    if detail is None or detail.industry_supervisor is None:
        logger.error(f"SIWES detail {siwes_detail_id} has no industry supervisor")
        return _result("error", error="Industry supervisor not found")

    student = detail.student
    notify(
        detail.industry_supervisor.user,
        "ASSIGNMENT",
        "SIWES student linked to you",
        f"{student.full_name} ({student.matric_number}) listed you as their "
        f"industry supervisor for {detail.siwes_session.name}. "
        f"Sign in at {settings.APP_URL}/login to review their logbook.",
        related_obj=detail,
    )
    return _result("success")


def _get_week(week_id):
    from slims.logbook.models.weekly_entry import WeeklyEntry

    return WeeklyEntry.objects.select_related("student__user").filter(id=week_id).first()


@shared_task(name="slims.notifications.tasks.notify_student_comment_received")
def notify_student_comment_received(week_id, supervisor_type):
    week = _get_week(week_id)
    if week is None:
        logger.error(f"Week {week_id} not found")
        return _result("error", error="Week not found")

    who = "industry" if supervisor_type == "INDUSTRY_SUPERVISOR" else "school"
    notify(
        week.student.user,
        "COMMENT",
        f"New comment on week {week.week_number}",
        f"Your {who} supervisor commented on week {week.week_number} of your logbook.",
        related_obj=week,
    )
    return _result("success")


@shared_task(name="slims.notifications.tasks.notify_student_week_locked")
def notify_student_week_locked(week_id):
    week = _get_week(week_id)
    if week is None:
        logger.error(f"Week {week_id} not found")
        return _result("error", error="Week not found")

    notify(
        week.student.user,
        "WEEK_LOCKED",
        f"Week {week.week_number} locked",
        f"Week {week.week_number} of your logbook has been reviewed and locked. "
        "Contact your school supervisor if you need to make changes.",
        related_obj=week,
    )
    return _result("success")


@shared_task(name="slims.notifications.tasks.notify_industry_supervisor_review_request")
def notify_industry_supervisor_review_request(review_request_id):
    from slims.logbook.models.review_request import IndustrySupervisorReviewRequest

    review_request = (
        IndustrySupervisorReviewRequest.objects.select_related(
            "weekly_entry", "student__user", "industry_supervisor__user"
        )
        .filter(id=review_request_id)
        .first()
    )
    if review_request is None:
        logger.error(f"Review request {review_request_id} not found")
        return _result("error", error="Review request not found")

    student = review_request.student
    week_number = review_request.weekly_entry.week_number
    notify(
        review_request.industry_supervisor.user,
        "REVIEW_REQUEST",
        f"Review requested for week {week_number}",
        f"{student.full_name} ({student.matric_number}) requested your review of "
        f"week {week_number}. Sign in at {settings.APP_URL}/login to comment.",
        related_obj=review_request,
    )
    return _result("success")
