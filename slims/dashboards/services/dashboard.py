# slims/dashboards/services/dashboard.py
import logging
from django.db.models import Count, Q
from slims.action_logs.models.action_log import ActionLog
from slims.institutions.models.institution import PlacementOrganization
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment
from slims.siwes_sessions.models.session import (
    SiwesSession,
    StudentSessionEnrollment,
)
from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail
from slims.users.models.profiles import Student, SchoolSupervisor, IndustrySupervisor

logger = logging.getLogger(__name__)

SUPERVISOR_LOCKS = [
    WeeklyEntry.LOCKED_BY.INDUSTRY_SUPERVISOR,
    WeeklyEntry.LOCKED_BY.SCHOOL_SUPERVISOR,
]


def _completed_weeks_filter():
    """Weeks with every day from Monday to Saturday filled in"""
    condition = Q()
    for day in WeeklyEntry.DAYS:
        field = f"{day}_entry"
        condition &= Q(**{f"{field}__isnull": False}) & ~Q(**{field: ""})
    return condition


def resolve_active_enrollment(student, session_id=None):
    """
    Explicit ``session_id`` first, then the student's current session,
    then the most recently started ACTIVE session they are enrolled in.
    """
    enrollments = StudentSessionEnrollment.objects.filter(
        student=student
    ).select_related("siwes_session")

    if session_id:
        return enrollments.filter(siwes_session_id=session_id).first()
    if student.current_siwes_session_id:
        return enrollments.filter(
            siwes_session_id=student.current_siwes_session_id
        ).first()
    return (
        enrollments.filter(siwes_session__status=SiwesSession.STATUS.ACTIVE)
        .order_by("-siwes_session__start_date")
        .first()
    )


def count_pending_reviews(student_id, session_id):
    """Weeks with an open review request that no industry comment answered yet"""
    return (
        WeeklyEntry.objects.filter(
            student_id=student_id,
            siwes_session_id=session_id,
            review_requests__status=IndustrySupervisorReviewRequest.STATUS.PENDING,
            industry_comments__isnull=True,
        )
        .distinct()
        .count()
    )


def calculate_week_stats(student_id, session_id):
    weeks = WeeklyEntry.objects.filter(
        student_id=student_id, siwes_session_id=session_id
    )
    return {
        "total_weeks": weeks.count(),
        "completed_weeks": weeks.filter(_completed_weeks_filter()).count(),
        "locked_weeks": weeks.filter(
            is_locked=True, locked_by__in=SUPERVISOR_LOCKS
        ).count(),
        "pending_reviews": count_pending_reviews(student_id, session_id),
    }


def get_placement_info(siwes_detail, assignment):
    if siwes_detail is None:
        return None
    industry_supervisor = siwes_detail.industry_supervisor
    return {
        "organization_name": siwes_detail.placement_organization.name,
        "industry_supervisor_name": (
            industry_supervisor.full_name if industry_supervisor else "Not assigned"
        ),
        "school_supervisor_name": (
            assignment.school_supervisor.full_name if assignment else None
        ),
    }


def build_student_alerts(siwes_detail, assignment, pending_reviews):
    alerts = []
    if siwes_detail is None:
        alerts.append(
            {
                "id": "siwes-details-missing",
                "type": "error",
                "title": "SIWES Details Required",
                "message": (
                    "Please complete your SIWES details including placement "
                    "organization and industry supervisor information"
                ),
                "priority": 1,
            }
        )
    if assignment is None:
        alerts.append(
            {
                "id": "supervisor-not-assigned",
                "type": "warning",
                "title": "School Supervisor Not Assigned",
                "message": (
                    "School supervisor not yet assigned. Contact SIWES Unit if "
                    "this persists."
                ),
                "priority": 2,
            }
        )
    if pending_reviews > 0:
        alerts.append(
            {
                "id": "pending-reviews",
                "type": "info",
                "title": "Pending Reviews",
                "message": f"{pending_reviews} week(s) awaiting industry supervisor review",
                "priority": 3,
            }
        )
    return sorted(alerts, key=lambda alert: alert["priority"])


def get_student_dashboard(student, session_id=None):
    logger.info(f"Getting student dashboard for {student.pk}, session {session_id}")
    sessions = [
        enrollment.siwes_session
        for enrollment in StudentSessionEnrollment.objects.filter(
            student=student
        ).select_related("siwes_session")
    ]
    enrollment = resolve_active_enrollment(student, session_id)
    if enrollment is None:
        return {
            "student": student,
            "sessions": sessions,
            "active_session": None,
            "enrollment": None,
            "stats": None,
            "placement": None,
            "siwes_detail": None,
            "alerts": [],
        }

    session = enrollment.siwes_session
    siwes_detail = (
        StudentSiwesDetail.objects.filter(student=student, siwes_session=session)
        .select_related("placement_organization", "industry_supervisor__user")
        .first()
    )
    assignment = (
        StudentSupervisorAssignment.objects.filter(student=student, siwes_session=session)
        .select_related("school_supervisor__user")
        .first()
    )
    stats = calculate_week_stats(student.pk, session.pk)

    return {
        "student": student,
        "sessions": sessions,
        "active_session": session,
        "enrollment": enrollment,
        "stats": stats,
        "placement": get_placement_info(siwes_detail, assignment),
        "siwes_detail": siwes_detail,
        "alerts": build_student_alerts(
            siwes_detail, assignment, stats["pending_reviews"]
        ),
    }


def get_school_supervisor_students(supervisor, session_id=None):
    """Assignments in ACTIVE sessions (or one session) with week counts"""
    assignments = StudentSupervisorAssignment.objects.filter(
        school_supervisor=supervisor
    ).select_related("student__user", "student__department", "siwes_session")
    if session_id:
        assignments = assignments.filter(siwes_session_id=session_id)
    else:
        assignments = assignments.filter(
            siwes_session__status=SiwesSession.STATUS.ACTIVE
        )

    students = []
    for assignment in assignments:
        weeks = WeeklyEntry.objects.filter(
            student=assignment.student, siwes_session=assignment.siwes_session
        ).aggregate(
            total=Count("id", distinct=True),
            locked=Count("id", filter=Q(is_locked=True), distinct=True),
            commented=Count(
                "id", filter=Q(school_comments__isnull=False), distinct=True
            ),
        )
        students.append(
            {
                "assignment": assignment,
                "total_weeks": weeks["total"],
                "locked_weeks": weeks["locked"],
                "commented_weeks": weeks["commented"],
            }
        )
    return students


def get_school_supervisor_dashboard(supervisor):
    logger.info(f"Getting school supervisor dashboard for {supervisor.pk}")
    students = get_school_supervisor_students(supervisor)
    return {
        "supervisor": supervisor,
        "students": students,
        "stats": {
            "total_students": len(students),
            "active_sessions": len(
                {item["assignment"].siwes_session_id for item in students}
            ),
        },
    }


def get_industry_supervisor_students(supervisor):
    return StudentSiwesDetail.objects.filter(
        industry_supervisor=supervisor,
        siwes_session__status=SiwesSession.STATUS.ACTIVE,
    ).select_related("student__user", "student__department__faculty", "siwes_session")


def get_industry_supervisor_dashboard(supervisor):
    logger.info(f"Getting industry supervisor dashboard for {supervisor.pk}")
    details = list(get_industry_supervisor_students(supervisor))
    pending = list(
        IndustrySupervisorReviewRequest.objects.filter(
            industry_supervisor=supervisor,
            status=IndustrySupervisorReviewRequest.STATUS.PENDING,
        )
        .select_related("weekly_entry", "student__user")
        .order_by("requested_at")
    )
    return {
        "supervisor": supervisor,
        "students": details,
        "pending_reviews": pending,
        "stats": {
            "total_students": len(details),
            "pending_reviews": len(pending),
        },
    }


def get_admin_dashboard(recent_limit=20):
    logger.info("Getting admin dashboard")
    active_sessions = SiwesSession.objects.filter(
        status=SiwesSession.STATUS.ACTIVE
    ).annotate(student_count=Count("student_enrollments"))
    return {
        "stats": {
            "active_sessions": active_sessions.count(),
            "total_students": Student.objects.count(),
            "total_supervisors": SchoolSupervisor.objects.count(),
            "total_industry_supervisors": IndustrySupervisor.objects.count(),
            "total_organizations": PlacementOrganization.objects.count(),
            "active_enrollments": StudentSessionEnrollment.objects.filter(
                siwes_session__status=SiwesSession.STATUS.ACTIVE
            ).count(),
            "locked_weeks": WeeklyEntry.objects.filter(is_locked=True).count(),
        },
        "active_sessions": list(active_sessions),
        "recent_activities": list(
            ActionLog.objects.select_related("user", "content_type").order_by(
                "-timestamp"
            )[:recent_limit]
        ),
    }
