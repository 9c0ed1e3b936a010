from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.action_logs.serializers.action_log import ActionLogSerializer
from slims.dashboards.services.dashboard import get_admin_dashboard
from slims.siwes_sessions.serializers.session import SiwesSessionSerializer
from slims.users.permissions.permission import IsAdmin


class AdminDashboardView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        dashboard = get_admin_dashboard()
        return Response(
            {
                "stats": dashboard["stats"],
                "active_sessions": SiwesSessionSerializer(
                    dashboard["active_sessions"], many=True
                ).data,
                "recent_activities": ActionLogSerializer(
                    dashboard["recent_activities"], many=True
                ).data,
            }
        )
