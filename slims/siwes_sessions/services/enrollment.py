# slims/siwes_sessions/services/enrollment.py
import logging
from django.db import transaction
from slims.core.exceptions import AppError, BusinessError, ConflictError, NotFoundError
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.notifications.tasks import (
    notify_student_enrollment,
    notify_supervisor_enrollment,
)
from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment
from slims.siwes_sessions.models.session import (
    StudentSessionEnrollment,
    SupervisorSessionEnrollment,
)
from slims.siwes_sessions.services.session import get_session
from slims.users.models.profiles import Student, SchoolSupervisor

logger = logging.getLogger(__name__)


def get_session_enrollments(session_id):
    session = get_session(session_id)
    return {
        "session": session,
        "students": StudentSessionEnrollment.objects.filter(
            siwes_session=session
        ).select_related("student__user", "student__department"),
        "supervisors": SupervisorSessionEnrollment.objects.filter(
            siwes_session=session
        ).select_related("school_supervisor__user", "school_supervisor__department"),
    }


def create_logbook_for_student(student, session):
    """Empty weekly entries for weeks 1..total_weeks. Existing weeks are kept."""
    WeeklyEntry.objects.bulk_create(
        [
            WeeklyEntry(student=student, siwes_session=session, week_number=week)
            for week in range(1, session.total_weeks + 1)
        ],
        ignore_conflicts=True,
    )
    logger.info(
        f"Logbook created for student {student.pk} in session {session.pk} "
        f"({session.total_weeks} weeks)"
    )


def add_student_to_session(student_id, session_id):
    logger.info(f"Adding student {student_id} to session {session_id}")
    try:
        student = Student.objects.get(pk=student_id)
    except Student.DoesNotExist:
        raise NotFoundError("Student not found")
    session = get_session(session_id)

    with transaction.atomic():
        if StudentSessionEnrollment.objects.filter(
            student=student, siwes_session=session
        ).exists():
            raise ConflictError("Student already enrolled in this session")

        enrollment = StudentSessionEnrollment.objects.create(
            student=student, siwes_session=session
        )
        create_logbook_for_student(student, session)

        if student.current_siwes_session_id is None:
            student.current_siwes_session = session
            student.save(update_fields=["current_siwes_session", "updated_at"])

    notify_student_enrollment.delay(enrollment.id)
    return enrollment


def remove_student_from_session(enrollment_id):
    logger.info(f"Removing student enrollment {enrollment_id}")
    try:
        enrollment = StudentSessionEnrollment.objects.select_related("student").get(
            pk=enrollment_id
        )
    except StudentSessionEnrollment.DoesNotExist:
        raise NotFoundError("Enrollment not found")

    student = enrollment.student
    with transaction.atomic():
        StudentSupervisorAssignment.objects.filter(
            student=student, siwes_session_id=enrollment.siwes_session_id
        ).delete()
        if student.current_siwes_session_id == enrollment.siwes_session_id:
            student.current_siwes_session = None
            student.save(update_fields=["current_siwes_session", "updated_at"])
        enrollment.delete()


def add_supervisor_to_session(supervisor_id, session_id):
    logger.info(f"Adding supervisor {supervisor_id} to session {session_id}")
    try:
        supervisor = SchoolSupervisor.objects.get(pk=supervisor_id)
    except SchoolSupervisor.DoesNotExist:
        raise NotFoundError("School supervisor not found")
    session = get_session(session_id)

    if SupervisorSessionEnrollment.objects.filter(
        school_supervisor=supervisor, siwes_session=session
    ).exists():
        raise ConflictError("Supervisor already enrolled in this session")

    enrollment = SupervisorSessionEnrollment.objects.create(
        school_supervisor=supervisor, siwes_session=session
    )
    notify_supervisor_enrollment.delay(enrollment.id)
    return enrollment


def remove_supervisor_from_session(enrollment_id):
    logger.info(f"Removing supervisor enrollment {enrollment_id}")
    try:
        enrollment = SupervisorSessionEnrollment.objects.get(pk=enrollment_id)
    except SupervisorSessionEnrollment.DoesNotExist:
        raise NotFoundError("Supervisor enrollment not found")

    assigned = StudentSupervisorAssignment.objects.filter(
        school_supervisor_id=enrollment.school_supervisor_id,
        siwes_session_id=enrollment.siwes_session_id,
    ).count()
    if assigned > 0:
        raise BusinessError(
            f"Cannot remove supervisor. {assigned} student(s) still assigned."
        )
    enrollment.delete()


def _bulk(session_id, ids, enroll, id_key):
    get_session(session_id)
    results = {"success": [], "errors": []}
    for item_id in ids:
        try:
            enroll(item_id, session_id)
            results["success"].append(item_id)
        except AppError as e:
            results["errors"].append({id_key: item_id, "error": e.message})

    logger.info(
        f"Bulk enrollment in session {session_id} completed: "
        f"{len(results['success'])} succeeded, {len(results['errors'])} failed"
    )
    return results


def bulk_enroll_students(session_id, student_ids):
    return _bulk(session_id, student_ids, add_student_to_session, "student_id")


def bulk_enroll_supervisors(session_id, supervisor_ids):
    return _bulk(session_id, supervisor_ids, add_supervisor_to_session, "supervisor_id")
