import logging
from django.db.models import Count
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.action_logs.models.action_log import ActionCategory
from slims.action_logs.utils.action_log import log_action
from slims.core.exceptions import BusinessError
from slims.siwes_sessions.models.session import SiwesSession
from slims.siwes_sessions.serializers.session import (
    AssignmentQuerySerializer,
    AssignmentSerializer,
    AutoAssignmentSerializer,
    EnrollSerializer,
    ManualAssignmentSerializer,
    SiwesSessionSerializer,
    StudentEnrollmentSerializer,
    SupervisorEnrollmentSerializer,
    WorkloadQuerySerializer,
)
from slims.siwes_sessions.services import assignment as assignment_service
from slims.siwes_sessions.services import enrollment as enrollment_service
from slims.siwes_sessions.services import session as session_service
from slims.users.permissions.permission import IsAdmin

logger = logging.getLogger(__name__)


class SiwesSessionViewSet(viewsets.ModelViewSet):
    """SIWES sessions and their student/supervisor enrollments."""

    serializer_class = SiwesSessionSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    lookup_value_regex = r"\d+"
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name"]
    ordering_fields = ["start_date", "name", "created_at"]

    def get_queryset(self):
        queryset = SiwesSession.objects.annotate(
            student_count=Count("student_enrollments", distinct=True),
            supervisor_count=Count("supervisor_enrollments", distinct=True),
        )
        session_status = self.request.query_params.get("status")
        if session_status:
            queryset = queryset.filter(status=session_status.upper())
        return queryset

    def perform_create(self, serializer):
        session = session_service.create_session(**serializer.validated_data)
        serializer.instance = session
        log_action(
            self.request.user,
            f"Created session {session.name}",
            ActionCategory.CREATE,
            session,
            request=self.request,
        )

    def perform_update(self, serializer):
        session = session_service.update_session(
            serializer.instance.pk, **serializer.validated_data
        )
        serializer.instance = session
        log_action(
            self.request.user,
            f"Updated session {session.name}",
            ActionCategory.UPDATE,
            session,
            {"fields_updated": list(serializer.validated_data.keys())},
            request=self.request,
        )

    def perform_destroy(self, instance):
        if instance.student_enrollments.exists():
            raise BusinessError("Cannot delete session with enrolled students")
        log_action(
            self.request.user,
            f"Deleted session {instance.name}",
            ActionCategory.DELETE,
            instance,
            request=self.request,
        )
        instance.delete()

    @action(detail=True, methods=["post"])
    def close(self, request, pk=None):
        session = session_service.close_session(pk)
        log_action(
            request.user,
            f"Closed session {session.name}",
            ActionCategory.UPDATE,
            session,
            request=request,
        )
        return Response(SiwesSessionSerializer(session).data)

    @action(detail=True, methods=["post"])
    def reopen(self, request, pk=None):
        session = session_service.reopen_session(pk)
        log_action(
            request.user,
            f"Reopened session {session.name}",
            ActionCategory.UPDATE,
            session,
            request=request,
        )
        return Response(SiwesSessionSerializer(session).data)

    @action(detail=True, methods=["get"])
    def enrollments(self, request, pk=None):
        enrollments = enrollment_service.get_session_enrollments(pk)
        return Response(
            {
                "session": SiwesSessionSerializer(enrollments["session"]).data,
                "students": StudentEnrollmentSerializer(
                    enrollments["students"], many=True
                ).data,
                "supervisors": SupervisorEnrollmentSerializer(
                    enrollments["supervisors"], many=True
                ).data,
            }
        )

    @action(detail=True, methods=["post"])
    def students(self, request, pk=None):
        """Enroll one or more students; failures are reported per student."""
        serializer = EnrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        results = enrollment_service.bulk_enroll_students(
            int(pk), serializer.validated_data["ids"]
        )
        log_action(
            request.user,
            f"Enrolled {len(results['success'])} student(s) in session {pk}",
            ActionCategory.CREATE,
            metadata=results,
            request=request,
        )
        return Response(results)

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"students/(?P<enrollment_id>\d+)",
    )
    def remove_student(self, request, pk=None, enrollment_id=None):
        enrollment_service.remove_student_from_session(int(enrollment_id))
        log_action(
            request.user,
            f"Removed student enrollment {enrollment_id} from session {pk}",
            ActionCategory.DELETE,
            request=request,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def supervisors(self, request, pk=None):
        serializer = EnrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        results = enrollment_service.bulk_enroll_supervisors(
            int(pk), serializer.validated_data["ids"]
        )
        log_action(
            request.user,
            f"Enrolled {len(results['success'])} supervisor(s) in session {pk}",
            ActionCategory.CREATE,
            metadata=results,
            request=request,
        )
        return Response(results)

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"supervisors/(?P<enrollment_id>\d+)",
    )
    def remove_supervisor(self, request, pk=None, enrollment_id=None):
        enrollment_service.remove_supervisor_from_session(int(enrollment_id))
        log_action(
            request.user,
            f"Removed supervisor enrollment {enrollment_id} from session {pk}",
            ActionCategory.DELETE,
            request=request,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class AssignmentViewSet(viewsets.ViewSet):
    """Student to school supervisor assignments."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def list(self, request):
        query = AssignmentQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        assignments = assignment_service.get_assignments(
            query.validated_data["session_id"]
        )
        return Response(AssignmentSerializer(assignments, many=True).data)

    def create(self, request):
        serializer = ManualAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        assignment = assignment_service.manual_assignment(
            data["student_id"], data["supervisor_id"], data["session_id"], request.user
        )
        log_action(
            request.user,
            f"Assigned {assignment.student} to {assignment.school_supervisor}",
            ActionCategory.CREATE,
            assignment,
            request=request,
        )
        return Response(AssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def auto(self, request):
        serializer = AutoAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = assignment_service.auto_assign_by_department(
            serializer.validated_data["session_id"],
            request.user,
            serializer.validated_data["max_students_per_supervisor"],
        )
        log_action(
            request.user,
            result["message"],
            ActionCategory.CREATE,
            metadata={"session_id": serializer.validated_data["session_id"], **result},
            request=request,
        )
        return Response(result)

    @action(detail=False, methods=["post"])
    def unassign(self, request):
        serializer = ManualAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        assignment_service.unassign_student(
            data["student_id"], data["supervisor_id"], data["session_id"]
        )
        log_action(
            request.user,
            f"Unassigned student {data['student_id']} from supervisor {data['supervisor_id']}",
            ActionCategory.DELETE,
            metadata=dict(data),
            request=request,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def workload(self, request):
        query = WorkloadQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        workload = assignment_service.get_supervisor_workload(
            query.validated_data["supervisor_id"],
            query.validated_data.get("session_id"),
        )
        workload["assignments"] = AssignmentSerializer(
            workload["assignments"], many=True
        ).data
        return Response(workload)
