import logging
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.action_logs.models.action_log import ActionCategory
from slims.action_logs.utils.action_log import log_action
from slims.core.exceptions import BusinessError, ForbiddenError
from slims.logbook.serializers.logbook import (
    DayEntrySerializer,
    DiagramSerializer,
    DiagramUploadSerializer,
    FinalCommentSerializer,
    ReviewRequestSerializer,
    WeeklyEntryDetailSerializer,
    WeeklyEntryListSerializer,
)
from slims.logbook.services import logbook, review
from slims.siwes_sessions.serializers.session import SessionQuerySerializer
from slims.users.permissions.permission import IsStudent

logger = logging.getLogger(__name__)


def resolve_student_session_id(request, student):
    """Explicit ``session_id`` query parameter, else the current session"""
    query = SessionQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    session_id = query.validated_data.get("session_id") or student.current_siwes_session_id
    if not session_id:
        raise BusinessError("No active SIWES session. Contact the SIWES unit.")
    return session_id


class StudentLogbookViewSet(viewsets.ViewSet):
    """A student's own weekly entries, diagrams and review requests."""

    permission_classes = [IsAuthenticated, IsStudent]
    lookup_value_regex = r"\d+"
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_student(self):
        return self.request.user.student_profile

    def get_own_week(self, pk):
        week = logbook.get_week_details(pk)
        if week.student_id != self.get_student().pk:
            raise ForbiddenError("Unauthorized: Week does not belong to this student")
        return week

    def list(self, request):
        student = self.get_student()
        session_id = resolve_student_session_id(request, student)
        weeks = logbook.get_logbook_weeks(student.pk, session_id)
        return Response(WeeklyEntryListSerializer(weeks, many=True).data)

    def retrieve(self, request, pk=None):
        week = self.get_own_week(pk)
        return Response(WeeklyEntryDetailSerializer(week).data)

    @action(detail=True, methods=["get"], url_path="lock-status")
    def lock_status(self, request, pk=None):
        """Checked by the editor before it enables the day fields"""
        week = self.get_own_week(pk)
        return Response({"week_id": week.pk, "is_locked": logbook.is_week_locked(week.pk)})

    @action(detail=True, methods=["put", "delete"], url_path=r"days/(?P<day>[a-z]+)")
    def day(self, request, pk=None, day=None):
        student = self.get_student()
        if request.method == "DELETE":
            week = logbook.delete_week_entry(int(pk), student.pk, day)
            action_text = f"Cleared {day} entry of week {week.week_number}"
            category = ActionCategory.DELETE
        else:
            serializer = DayEntrySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            week = logbook.upsert_week_entry(
                int(pk), student.pk, day, serializer.validated_data["content"]
            )
            action_text = f"Updated {day} entry of week {week.week_number}"
            category = ActionCategory.UPDATE

        log_action(request.user, action_text, category, week, {"day": day}, request)
        return Response(WeeklyEntryDetailSerializer(week).data)

    @action(detail=True, methods=["post"], url_path="request-review")
    def request_review(self, request, pk=None):
        review_request = logbook.request_week_review(int(pk), self.get_student().pk)
        log_action(
            request.user,
            f"Requested review of week {review_request.weekly_entry.week_number}",
            ActionCategory.REVIEW,
            review_request,
            request=request,
        )
        return Response(
            ReviewRequestSerializer(review_request).data, status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=["get", "post"])
    def diagrams(self, request, pk=None):
        if request.method == "GET":
            week = self.get_own_week(pk)
            return Response(
                DiagramSerializer(
                    logbook.get_week_diagrams(week.pk),
                    many=True,
                    context={"request": request},
                ).data
            )

        serializer = DiagramUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        diagram = logbook.upload_weekly_diagram(
            int(pk),
            self.get_student().pk,
            serializer.validated_data["file"],
            serializer.validated_data.get("caption", ""),
        )
        log_action(
            request.user,
            f"Uploaded diagram {diagram.file_name}",
            ActionCategory.UPLOAD,
            diagram,
            request=request,
        )
        return Response(
            DiagramSerializer(diagram, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"diagrams/(?P<diagram_id>\d+)",
    )
    def delete_diagram(self, request, pk=None, diagram_id=None):
        logbook.delete_weekly_diagram(int(diagram_id), self.get_student().pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="final-comments")
    def final_comments(self, request):
        student = self.get_student()
        session_id = resolve_student_session_id(request, student)
        comments = review.get_final_comments(student.pk, session_id)
        return Response(
            {
                side: FinalCommentSerializer(comment).data if comment else None
                for side, comment in comments.items()
            }
        )
