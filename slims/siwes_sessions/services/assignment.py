# slims/siwes_sessions/services/assignment.py
import logging
from collections import defaultdict
from django.db import transaction
from slims.core.exceptions import BusinessError, ConflictError, NotFoundError
from slims.notifications.tasks import (
    notify_school_supervisor_assigned,
    notify_student_supervisor_assigned,
)
from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment
from slims.siwes_sessions.models.session import (
    SiwesSession,
    StudentSessionEnrollment,
    SupervisorSessionEnrollment,
)
from slims.siwes_sessions.services.session import get_session
from slims.users.models.profiles import Student, SchoolSupervisor

logger = logging.getLogger(__name__)

DEFAULT_MAX_STUDENTS_PER_SUPERVISOR = 10


def get_assignments(session_id):
    return StudentSupervisorAssignment.objects.filter(
        siwes_session_id=session_id
    ).select_related(
        "student__user", "student__department", "school_supervisor__user"
    )


def _notify_assignment(assignment):
    notify_school_supervisor_assigned.delay(assignment.id)
    notify_student_supervisor_assigned.delay(assignment.id)


def manual_assignment(student_id, supervisor_id, session_id, admin):
    logger.info(
        f"Manual assignment of student {student_id} to supervisor {supervisor_id} "
        f"in session {session_id}"
    )
    try:
        student = Student.objects.get(pk=student_id)
    except Student.DoesNotExist:
        raise NotFoundError("Student not found")
    try:
        supervisor = SchoolSupervisor.objects.get(pk=supervisor_id)
    except SchoolSupervisor.DoesNotExist:
        raise NotFoundError("School supervisor not found")
    session = get_session(session_id)

    if not StudentSessionEnrollment.objects.filter(
        student=student, siwes_session=session
    ).exists():
        raise BusinessError("Student is not enrolled in this session")

    if not SupervisorSessionEnrollment.objects.filter(
        school_supervisor=supervisor, siwes_session=session
    ).exists():
        raise BusinessError(
            "Supervisor is not enrolled in this session. Please enroll the supervisor first."
        )

    with transaction.atomic():
        existing = (
            StudentSupervisorAssignment.objects.select_for_update()
            .filter(student=student, siwes_session=session)
            .first()
        )
        if existing is not None:
            if existing.school_supervisor_id == supervisor.pk:
                raise ConflictError("Student is already assigned to this supervisor")
            raise ConflictError(
                "Student already has a school supervisor for this session"
            )

        assignment = StudentSupervisorAssignment.objects.create(
            student=student,
            school_supervisor=supervisor,
            siwes_session=session,
            assigned_by=admin,
            assignment_method=StudentSupervisorAssignment.METHOD.MANUAL,
        )

    _notify_assignment(assignment)
    logger.info(f"Manual assignment {assignment.pk} created")
    return assignment


def _supervisor_workloads(supervisor_ids, session):
    workloads = {supervisor_id: 0 for supervisor_id in supervisor_ids}
    for assignment in StudentSupervisorAssignment.objects.filter(
        siwes_session=session, school_supervisor_id__in=supervisor_ids
    ).values("school_supervisor_id"):
        workloads[assignment["school_supervisor_id"]] += 1
    return workloads


def auto_assign_by_department(
    session_id, admin, max_students_per_supervisor=DEFAULT_MAX_STUDENTS_PER_SUPERVISOR
):
    """
    Give every unassigned enrolled student the least-loaded supervisor from
    their own department (same faculty) who is enrolled in the session and
    below ``max_students_per_supervisor``.
    """
    session = get_session(session_id)
    max_students = max_students_per_supervisor or DEFAULT_MAX_STUDENTS_PER_SUPERVISOR
    logger.info(
        f"Auto assignment by department for session {session_id} "
        f"(max {max_students} students per supervisor)"
    )

    enrolled = StudentSessionEnrollment.objects.filter(siwes_session=session)
    if not enrolled.exists():
        return {
            "message": "No students enrolled in this session",
            "assigned": 0,
            "total": 0,
        }

    assigned_ids = StudentSupervisorAssignment.objects.filter(
        siwes_session=session
    ).values_list("student_id", flat=True)
    unassigned = (
        Student.objects.filter(session_enrollments__siwes_session=session)
        .exclude(pk__in=assigned_ids)
        .select_related("department")
        .order_by("matric_number")
    )
    unassigned = list(unassigned)
    if not unassigned:
        return {"message": "No unassigned students found", "assigned": 0, "total": 0}

    students_by_department = defaultdict(list)
    for student in unassigned:
        students_by_department[student.department].append(student)

    total_assigned = 0
    created = []
    with transaction.atomic():
        for department, students in students_by_department.items():
            supervisor_ids = list(
                SchoolSupervisor.objects.filter(
                    department=department,
                    department__faculty_id=department.faculty_id,
                    is_active=True,
                    session_enrollments__siwes_session=session,
                ).values_list("pk", flat=True)
            )
            if not supervisor_ids:
                logger.warning(
                    f"No supervisors available for department {department.pk} "
                    f"in faculty {department.faculty_id}"
                )
                continue

            workloads = _supervisor_workloads(supervisor_ids, session)
            for student in students:
                # Ties go to the lower id so runs are deterministic
                supervisor_id, load = min(
                    workloads.items(), key=lambda item: (item[1], item[0])
                )
                if load >= max_students:
                    logger.warning(
                        f"All supervisors at capacity for department {department.pk}"
                    )
                    break

                created.append(
                    StudentSupervisorAssignment.objects.create(
                        student=student,
                        school_supervisor_id=supervisor_id,
                        siwes_session=session,
                        assigned_by=admin,
                        assignment_method=StudentSupervisorAssignment.METHOD.AUTOMATIC,
                    )
                )
                workloads[supervisor_id] += 1
                total_assigned += 1

    for assignment in created:
        _notify_assignment(assignment)

    logger.info(
        f"Auto-assignment completed for session {session_id}: "
        f"{total_assigned} of {len(unassigned)} students assigned"
    )
    return {
        "message": f"Assigned {total_assigned} out of {len(unassigned)} students",
        "assigned": total_assigned,
        "total": len(unassigned),
    }


def unassign_student(student_id, supervisor_id, session_id):
    logger.info(
        f"Unassigning student {student_id} from supervisor {supervisor_id} "
        f"in session {session_id}"
    )
    deleted, _ = StudentSupervisorAssignment.objects.filter(
        student_id=student_id,
        school_supervisor_id=supervisor_id,
        siwes_session_id=session_id,
    ).delete()
    if not deleted:
        raise NotFoundError("Assignment not found")


def get_supervisor_workload(supervisor_id, session_id=None):
    if not SchoolSupervisor.objects.filter(pk=supervisor_id).exists():
        raise NotFoundError("School supervisor not found")

    assignments = StudentSupervisorAssignment.objects.filter(
        school_supervisor_id=supervisor_id
    ).select_related("siwes_session", "student__user")

    if session_id is not None:
        assignments = assignments.filter(siwes_session_id=session_id)
        return {
            "supervisor_id": supervisor_id,
            "session_id": session_id,
            "total_students": assignments.count(),
            "assignments": list(assignments),
        }

    active = [
        a for a in assignments if a.siwes_session.status == SiwesSession.STATUS.ACTIVE
    ]
    return {
        "supervisor_id": supervisor_id,
        "total_students": len(assignments),
        "active_students": len(active),
        "historical_students": len(assignments) - len(active),
        "assignments": active,
    }
