import logging
from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.action_logs.models.action_log import ActionCategory
from slims.action_logs.utils.action_log import log_action
from slims.core.exceptions import BusinessError
from slims.institutions.models.institution import (
    Faculty,
    Department,
    PlacementOrganization,
)
from slims.institutions.serializers.institution import (
    FacultySerializer,
    DepartmentSerializer,
    OrganizationSearchQuerySerializer,
    PlacementOrganizationSerializer,
)
from slims.users.permissions.permission import IsAdmin

logger = logging.getLogger(__name__)


class AuditedModelViewSet(viewsets.ModelViewSet):
    """ModelViewSet that writes an action log entry for every change"""

    permission_classes = [IsAuthenticated, IsAdmin]
    audit_label = "record"

    def perform_create(self, serializer):
        instance = serializer.save()
        log_action(
            self.request.user,
            f"Created {self.audit_label} {instance}",
            ActionCategory.CREATE,
            instance,
            request=self.request,
        )

    def perform_update(self, serializer):
        instance = serializer.save()
        log_action(
            self.request.user,
            f"Updated {self.audit_label} {instance}",
            ActionCategory.UPDATE,
            instance,
            {"fields_updated": list(serializer.validated_data.keys())},
            request=self.request,
        )

    def perform_destroy(self, instance):
        log_action(
            self.request.user,
            f"Deleted {self.audit_label} {instance}",
            ActionCategory.DELETE,
            instance,
            request=self.request,
        )
        instance.delete()


class FacultyViewSet(AuditedModelViewSet):
    queryset = Faculty.objects.prefetch_related("departments")
    serializer_class = FacultySerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ["name", "code"]
    audit_label = "faculty"

    def perform_destroy(self, instance):
        if Department.objects.filter(faculty=instance, students__isnull=False).exists():
            raise BusinessError(
                "Cannot delete faculty with departments that have students"
            )
        super().perform_destroy(instance)


class DepartmentViewSet(AuditedModelViewSet):
    queryset = Department.objects.select_related("faculty").annotate(
        student_count=Count("students")
    )
    serializer_class = DepartmentSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["faculty"]
    search_fields = ["name", "code"]
    audit_label = "department"

    def perform_destroy(self, instance):
        if instance.students.exists():
            raise BusinessError("Cannot delete department with enrolled students")
        super().perform_destroy(instance)

    @action(detail=True, methods=["get"])
    def stats(self, request, pk=None):
        from slims.siwes_sessions.models.session import SiwesSession

        department = self.get_object()
        return Response(
            {
                "total_students": department.students.count(),
                "active_sessions": SiwesSession.objects.filter(
                    status=SiwesSession.STATUS.ACTIVE
                ).count(),
                "total_supervisors": department.school_supervisors.count(),
            }
        )


class PlacementOrganizationViewSet(AuditedModelViewSet):
    queryset = PlacementOrganization.objects.all()
    serializer_class = PlacementOrganizationSerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name", "city", "state"]
    ordering_fields = ["name", "created_at"]
    audit_label = "organization"

    @action(detail=False, methods=["get"])
    def stats(self, request):
        from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail

        return Response(
            {
                "total_organizations": PlacementOrganization.objects.count(),
                "students_with_placement": StudentSiwesDetail.objects.values(
                    "student"
                )
                .distinct()
                .count(),
            }
        )

    @action(detail=False, methods=["get"])
    def search(self, request):
        """Organization names for autocomplete"""
        query = OrganizationSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        term = query.validated_data["q"].strip()
        limit = query.validated_data["limit"]
        if not term:
            return Response([])
        names = (
            PlacementOrganization.objects.filter(name__icontains=term)
            .order_by("name")
            .values_list("name", flat=True)[:limit]
        )
        return Response(list(names))
