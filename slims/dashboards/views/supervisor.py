from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.dashboards.services.dashboard import (
    get_industry_supervisor_dashboard,
    get_industry_supervisor_students,
    get_school_supervisor_dashboard,
    get_school_supervisor_students,
)
from slims.logbook.serializers.logbook import ReviewRequestSerializer
from slims.siwes_sessions.serializers.session import SessionQuerySerializer
from slims.users.permissions.permission import (
    IsIndustrySupervisor,
    IsSchoolSupervisor,
)


def serialize_assigned_student(item):
    assignment = item["assignment"]
    student = assignment.student
    return {
        "assignment_id": assignment.pk,
        "student_id": student.pk,
        "name": student.full_name,
        "matric_number": student.matric_number,
        "department": student.department.name,
        "session_id": assignment.siwes_session_id,
        "session_name": assignment.siwes_session.name,
        "total_weeks": item["total_weeks"],
        "locked_weeks": item["locked_weeks"],
        "commented_weeks": item["commented_weeks"],
    }


def serialize_placed_student(detail):
    student = detail.student
    return {
        "siwes_detail_id": detail.pk,
        "student_id": student.pk,
        "name": student.full_name,
        "matric_number": student.matric_number,
        "department": student.department.name,
        "faculty": student.department.faculty.name,
        "session_id": detail.siwes_session_id,
        "session_name": detail.siwes_session.name,
        "job_title": detail.job_title,
    }


class SchoolSupervisorDashboardView(APIView):
    permission_classes = [IsAuthenticated, IsSchoolSupervisor]

    def get(self, request):
        supervisor = request.user.school_supervisor_profile
        dashboard = get_school_supervisor_dashboard(supervisor)
        return Response(
            {
                "supervisor": {
                    "name": supervisor.full_name,
                    "staff_id": supervisor.staff_id,
                    "department": supervisor.department.name,
                },
                "students": [
                    serialize_assigned_student(item) for item in dashboard["students"]
                ],
                "stats": dashboard["stats"],
            }
        )


class SchoolSupervisorStudentsView(APIView):
    permission_classes = [IsAuthenticated, IsSchoolSupervisor]

    def get(self, request):
        query = SessionQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        students = get_school_supervisor_students(
            request.user.school_supervisor_profile,
            query.validated_data.get("session_id"),
        )
        return Response([serialize_assigned_student(item) for item in students])


class IndustrySupervisorDashboardView(APIView):
    permission_classes = [IsAuthenticated, IsIndustrySupervisor]

    def get(self, request):
        supervisor = request.user.industry_supervisor_profile
        dashboard = get_industry_supervisor_dashboard(supervisor)
        return Response(
            {
                "supervisor": {
                    "name": supervisor.full_name,
                    "position": supervisor.position,
                    "organization": supervisor.placement_organization.name,
                },
                "students": [
                    serialize_placed_student(detail) for detail in dashboard["students"]
                ],
                "pending_reviews": ReviewRequestSerializer(
                    dashboard["pending_reviews"], many=True
                ).data,
                "stats": dashboard["stats"],
            }
        )


class IndustrySupervisorStudentsView(APIView):
    permission_classes = [IsAuthenticated, IsIndustrySupervisor]

    def get(self, request):
        details = get_industry_supervisor_students(
            request.user.industry_supervisor_profile
        )
        return Response([serialize_placed_student(detail) for detail in details])
