import logging
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.action_logs.models.action_log import ActionCategory
from slims.action_logs.utils.action_log import log_action
from slims.core.exceptions import UnauthorizedSupervisorError
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
from slims.logbook.serializers.logbook import (
    CommentSerializer,
    FinalCommentInputSerializer,
    FinalCommentSerializer,
    ReviewRequestSerializer,
    StudentWeeksQuerySerializer,
    WeeklyCommentSerializer,
    WeeklyEntryDetailSerializer,
    WeeklyEntryListSerializer,
)
from slims.logbook.services import logbook, review
from slims.users.permissions.permission import (
    IsIndustrySupervisor,
    IsSchoolSupervisor,
)

logger = logging.getLogger(__name__)


class SupervisorWeekViewSet(viewsets.ViewSet):
    """
    Weekly entries of the students linked to the requesting supervisor.
    Subclasses pick the supervisor side.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"
    supervisor_type = None
    profile_attribute = None

    def get_supervisor(self):
        return getattr(self.request.user, self.profile_attribute)

    def is_linked(self, student_id, session_id):
        check = (
            review.is_industry_supervisor_for
            if self.supervisor_type == review.INDUSTRY_SUPERVISOR
            else review.is_school_supervisor_for
        )
        return check(self.get_supervisor().pk, student_id, session_id)

    def get_linked_week(self, pk):
        week = logbook.get_week_details(pk)
        if not self.is_linked(week.student_id, week.siwes_session_id):
            raise UnauthorizedSupervisorError()
        return week

    def list(self, request):
        query = StudentWeeksQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        student_id = query.validated_data["student_id"]
        session_id = query.validated_data["session_id"]
        if not self.is_linked(student_id, session_id):
            raise UnauthorizedSupervisorError()

        weeks = logbook.get_logbook_weeks(student_id, session_id)
        return Response(WeeklyEntryListSerializer(weeks, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(WeeklyEntryDetailSerializer(self.get_linked_week(pk)).data)

    def add_comment(self, week_id, text):
        raise NotImplementedError

    @action(detail=True, methods=["post"])
    def comments(self, request, pk=None):
        serializer = CommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = self.add_comment(int(pk), serializer.validated_data["comment"])
        week = logbook.get_week_details(pk)
        log_action(
            request.user,
            f"Commented on week {week.week_number} of {week.student}",
            ActionCategory.REVIEW,
            week,
            {"locked": week.is_locked},
            request,
        )
        return Response(
            {
                "comment": WeeklyCommentSerializer(comment).data,
                "week": WeeklyEntryDetailSerializer(week).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["post"], url_path="final-comments")
    def final_comments(self, request):
        serializer = FinalCommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        final_comment = review.add_final_comment(
            data["student_id"],
            data["session_id"],
            self.get_supervisor().pk,
            data["comment"],
            self.supervisor_type,
            rating=data.get("rating"),
        )
        log_action(
            request.user,
            f"Submitted final comment for {final_comment.student}",
            ActionCategory.REVIEW,
            final_comment,
            {"rating": final_comment.rating},
            request,
        )
        return Response(
            FinalCommentSerializer(final_comment).data, status=status.HTTP_201_CREATED
        )


class SchoolSupervisorWeekViewSet(SupervisorWeekViewSet):
    permission_classes = [IsAuthenticated, IsSchoolSupervisor]
    supervisor_type = review.SCHOOL_SUPERVISOR
    profile_attribute = "school_supervisor_profile"

    def add_comment(self, week_id, text):
        return review.add_school_comment(week_id, self.get_supervisor().pk, text)

    @action(detail=True, methods=["post"])
    def lock(self, request, pk=None):
        week = review.lock_week(int(pk), self.get_supervisor().pk, review.MANUAL)
        log_action(
            request.user,
            f"Locked week {week.week_number} of {week.student}",
            ActionCategory.UPDATE,
            week,
            request=request,
        )
        return Response(WeeklyEntryDetailSerializer(week).data)

    @action(detail=True, methods=["post"])
    def unlock(self, request, pk=None):
        week = review.unlock_week(int(pk), self.get_supervisor().pk)
        log_action(
            request.user,
            f"Unlocked week {week.week_number} of {week.student}",
            ActionCategory.UPDATE,
            week,
            request=request,
        )
        return Response(WeeklyEntryDetailSerializer(week).data)


class IndustrySupervisorWeekViewSet(SupervisorWeekViewSet):
    permission_classes = [IsAuthenticated, IsIndustrySupervisor]
    supervisor_type = review.INDUSTRY_SUPERVISOR
    profile_attribute = "industry_supervisor_profile"

    def add_comment(self, week_id, text):
        return review.add_industry_comment(week_id, self.get_supervisor().pk, text)


class ReviewRequestViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ReviewRequestSerializer
    permission_classes = [IsAuthenticated, IsIndustrySupervisor]
    filterset_fields = ["status"]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return IndustrySupervisorReviewRequest.objects.none()
        return (
            IndustrySupervisorReviewRequest.objects.filter(
                industry_supervisor=self.request.user.industry_supervisor_profile
            )
            .select_related("weekly_entry", "student__user")
            .order_by("-requested_at")
        )
