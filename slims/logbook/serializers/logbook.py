from rest_framework import serializers
from slims.logbook.models.diagram import Diagram
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.logbook.models.comment import (
    IndustrySupervisorWeeklyComment,
    IndustrySupervisorFinalComment,
)
from slims.logbook.services import review


class DiagramSerializer(serializers.ModelSerializer):
    class Meta:
        model = Diagram
        fields = [
            "id",
            "file",
            "file_name",
            "file_size",
            "mime_type",
            "caption",
            "uploaded_at",
        ]
        read_only_fields = fields


class DiagramUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    caption = serializers.CharField(max_length=255, required=False, allow_blank=True)


class WeeklyCommentSerializer(serializers.Serializer):
    """Serializes either supervisor's weekly comment"""

    id = serializers.IntegerField()
    comment = serializers.CharField()
    commented_at = serializers.DateTimeField()
    supervisor_type = serializers.SerializerMethodField()
    supervisor_name = serializers.SerializerMethodField()

    def _is_industry(self, obj):
        return isinstance(obj, IndustrySupervisorWeeklyComment)

    def get_supervisor_type(self, obj):
        return (
            review.INDUSTRY_SUPERVISOR if self._is_industry(obj) else review.SCHOOL_SUPERVISOR
        )

    def get_supervisor_name(self, obj):
        supervisor = (
            obj.industry_supervisor if self._is_industry(obj) else obj.school_supervisor
        )
        return supervisor.full_name


class WeeklyEntryListSerializer(serializers.ModelSerializer):
    has_entries = serializers.BooleanField(read_only=True)
    has_diagram = serializers.SerializerMethodField()
    comment_count = serializers.SerializerMethodField()

    class Meta:
        model = WeeklyEntry
        fields = [
            "id",
            "week_number",
            "is_locked",
            "locked_by",
            "locked_at",
            "has_entries",
            "has_diagram",
            "comment_count",
            "updated_at",
        ]

    def get_has_diagram(self, obj):
        if hasattr(obj, "diagram_count"):
            return obj.diagram_count > 0
        return obj.diagrams.exists()

    def get_comment_count(self, obj):
        if hasattr(obj, "industry_comment_count"):
            return obj.industry_comment_count + obj.school_comment_count
        return obj.industry_comments.count() + obj.school_comments.count()


class WeeklyEntryDetailSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    matric_number = serializers.CharField(source="student.matric_number", read_only=True)
    session_name = serializers.CharField(source="siwes_session.name", read_only=True)
    has_entries = serializers.BooleanField(read_only=True)
    diagrams = DiagramSerializer(many=True, read_only=True)
    comments = serializers.SerializerMethodField()
    review_status = serializers.SerializerMethodField()

    class Meta:
        model = WeeklyEntry
        fields = [
            "id",
            "student",
            "student_name",
            "matric_number",
            "siwes_session",
            "session_name",
            "week_number",
            *[f"{day}_entry" for day in WeeklyEntry.DAYS],
            "has_entries",
            "is_locked",
            "locked_by",
            "locked_at",
            "diagrams",
            "comments",
            "review_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_comments(self, obj):
        return WeeklyCommentSerializer(review.get_week_comments(obj.pk), many=True).data

    def get_review_status(self, obj):
        latest = obj.review_requests.order_by("-requested_at").first()
        return latest.status if latest else None


class StudentWeeksQuerySerializer(serializers.Serializer):
    student_id = serializers.IntegerField(min_value=1)
    session_id = serializers.IntegerField(min_value=1)


class DayEntrySerializer(serializers.Serializer):
    # Trimming and content checks happen in the logbook service
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class CommentSerializer(serializers.Serializer):
    comment = serializers.CharField(allow_blank=True)


class FinalCommentInputSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    session_id = serializers.IntegerField()
    comment = serializers.CharField(allow_blank=True)
    rating = serializers.IntegerField(required=False, allow_null=True)


class FinalCommentSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    comment = serializers.CharField()
    rating = serializers.IntegerField(allow_null=True)
    commented_at = serializers.DateTimeField()
    supervisor_type = serializers.SerializerMethodField()
    supervisor_name = serializers.SerializerMethodField()

    def get_supervisor_type(self, obj):
        if isinstance(obj, IndustrySupervisorFinalComment):
            return review.INDUSTRY_SUPERVISOR
        return review.SCHOOL_SUPERVISOR

    def get_supervisor_name(self, obj):
        if isinstance(obj, IndustrySupervisorFinalComment):
            return obj.industry_supervisor.full_name
        return obj.school_supervisor.full_name


class ReviewRequestSerializer(serializers.ModelSerializer):
    week_number = serializers.IntegerField(
        source="weekly_entry.week_number", read_only=True
    )
    session_id = serializers.IntegerField(
        source="weekly_entry.siwes_session_id", read_only=True
    )
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    matric_number = serializers.CharField(source="student.matric_number", read_only=True)

    class Meta:
        model = IndustrySupervisorReviewRequest
        fields = [
            "id",
            "weekly_entry",
            "week_number",
            "session_id",
            "student",
            "student_name",
            "matric_number",
            "status",
            "requested_at",
            "reviewed_at",
        ]
        read_only_fields = fields
