import logging
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.action_logs.models.action_log import ActionCategory
from slims.action_logs.utils.action_log import log_action
from slims.core.exceptions import BusinessError
from slims.siwes_sessions.models.session import StudentSessionEnrollment
from slims.siwes_sessions.serializers.session import (
    SiwesDetailInputSerializer,
    SessionQuerySerializer,
    SiwesDetailSerializer,
    StudentEnrollmentSerializer,
    SwitchSessionSerializer,
)
from slims.siwes_sessions.services import siwes_detail as siwes_detail_service
from slims.users.permissions.permission import IsStudent

logger = logging.getLogger(__name__)


class StudentSessionViewSet(viewsets.ViewSet):
    """Sessions a student is enrolled in, and switching between them."""

    permission_classes = [IsAuthenticated, IsStudent]

    def list(self, request):
        student = request.user.student_profile
        enrollments = StudentSessionEnrollment.objects.filter(
            student=student
        ).select_related("siwes_session", "student__user", "student__department")
        data = StudentEnrollmentSerializer(enrollments, many=True).data
        for item in data:
            item["is_current"] = item["siwes_session"] == student.current_siwes_session_id
        return Response(data)

    @action(detail=False, methods=["post"])
    def switch(self, request):
        serializer = SwitchSessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session_id = serializer.validated_data["session_id"]
        student = request.user.student_profile

        enrollment = (
            StudentSessionEnrollment.objects.filter(
                student=student, siwes_session_id=session_id
            )
            .select_related("siwes_session")
            .first()
        )
        if enrollment is None:
            raise BusinessError("You are not enrolled in this session")

        student.current_siwes_session = enrollment.siwes_session
        student.save(update_fields=["current_siwes_session", "updated_at"])
        logger.info(f"Student {student.pk} switched to session {session_id}")
        return Response(
            {
                "message": f"Switched to {enrollment.siwes_session.name}",
                "session_id": session_id,
            }
        )


class StudentSiwesDetailViewSet(viewsets.ViewSet):
    """Placement details for the student's current (or chosen) session."""

    permission_classes = [IsAuthenticated, IsStudent]

    def _session_id(self, request, explicit=None):
        student = request.user.student_profile
        query = SessionQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        session_id = (
            explicit
            or query.validated_data.get("session_id")
            or student.current_siwes_session_id
        )
        if not session_id:
            raise BusinessError("No active SIWES session. Contact the SIWES unit.")
        return session_id

    def list(self, request):
        student = request.user.student_profile
        detail = siwes_detail_service.get_siwes_details(
            student.pk, self._session_id(request)
        )
        return Response(SiwesDetailSerializer(detail).data if detail else None)

    def create(self, request):
        serializer = SiwesDetailInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        student = request.user.student_profile
        session_id = self._session_id(request, data.pop("session_id", None))

        detail = siwes_detail_service.create_or_update_siwes_details(
            student.pk, session_id, data
        )
        log_action(
            request.user,
            f"Updated SIWES details for {detail.siwes_session}",
            ActionCategory.UPDATE,
            detail,
            request=request,
        )
        return Response(SiwesDetailSerializer(detail).data)
