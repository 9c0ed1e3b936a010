from django.contrib.contenttypes.models import ContentType
from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, permissions, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from slims.action_logs.models.action_log import ActionLog, ActionCategory
from slims.action_logs.serializers.action_log import ActionLogSerializer
from slims.users.permissions.permission import IsAdmin


class ActionLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Viewset for action logs with filtering capabilities.
    Only accessible by SIWES unit administrators.
    """

    queryset = ActionLog.objects.select_related("user", "content_type").order_by(
        "-timestamp"
    )
    serializer_class = ActionLogSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]

    filterset_fields = {
        "user_tag": ["exact"],
        "user_type": ["exact"],
        "category": ["exact"],
        "content_type__model": ["exact"],
        "timestamp": ["gte", "lte", "exact"],
    }

    search_fields = [
        "action",
        "user__username",
        "user__email",
        "user__first_name",
        "user__last_name",
    ]

    ordering_fields = ["timestamp", "user_tag"]
    ordering = ["-timestamp"]

    @action(detail=False, methods=["get"])
    def model_options(self, request):
        """Get available model options for filtering"""
        content_types = ContentType.objects.filter(
            id__in=ActionLog.objects.values("content_type").distinct()
        )
        options = [{"value": ct.model, "label": ct.name} for ct in content_types]
        return Response(options)

    @action(detail=False, methods=["get"])
    def category_options(self, request):
        return Response(ActionCategory.choices)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        queryset = self.get_queryset()
        by_user_type = {
            row["user_type"] or "SYSTEM": row["total"]
            for row in queryset.values("user_type").annotate(total=Count("id"))
        }
        by_category = {
            row["category"]: row["total"]
            for row in queryset.values("category").annotate(total=Count("id"))
        }
        return Response(
            {
                "total_activities": queryset.count(),
                "by_user_type": by_user_type,
                "by_category": by_category,
            }
        )
