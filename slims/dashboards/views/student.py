from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.dashboards.services.dashboard import get_student_dashboard
from slims.siwes_sessions.serializers.session import (
    SessionQuerySerializer,
    SiwesDetailSerializer,
    SiwesSessionSerializer,
)
from slims.users.permissions.permission import IsStudent
from slims.users.serializers.base_user import StudentProfileSerializer


class StudentDashboardView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        """Dashboard for the logged-in student, optionally for ``session_id``"""
        query = SessionQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        student = request.user.student_profile
        dashboard = get_student_dashboard(
            student, query.validated_data.get("session_id")
        )
        enrollment = dashboard["enrollment"]
        siwes_detail = dashboard["siwes_detail"]

        data = {
            "student": {
                "name": request.user.get_full_name(),
                "email": request.user.email,
                **StudentProfileSerializer(student).data,
            },
            "sessions": SiwesSessionSerializer(dashboard["sessions"], many=True).data,
            "active_session": (
                SiwesSessionSerializer(dashboard["active_session"]).data
                if dashboard["active_session"]
                else None
            ),
            "enrolled_at": enrollment.enrolled_at if enrollment else None,
            "stats": dashboard["stats"],
            "placement": dashboard["placement"],
            "siwes_detail": (
                SiwesDetailSerializer(siwes_detail).data if siwes_detail else None
            ),
            "alerts": dashboard["alerts"],
        }
        return Response(data)
