from django.contrib import admin
from slims.logbook.models import (
    WeeklyEntry,
    IndustrySupervisorWeeklyComment,
    SchoolSupervisorWeeklyComment,
    IndustrySupervisorFinalComment,
    SchoolSupervisorFinalComment,
    IndustrySupervisorReviewRequest,
    Diagram,
)


class DiagramInline(admin.TabularInline):
    model = Diagram
    extra = 0
    readonly_fields = ("file_name", "file_size", "mime_type", "uploaded_at")


class IndustryCommentInline(admin.TabularInline):
    model = IndustrySupervisorWeeklyComment
    extra = 0
    readonly_fields = ("commented_at",)


class SchoolCommentInline(admin.TabularInline):
    model = SchoolSupervisorWeeklyComment
    extra = 0
    readonly_fields = ("commented_at",)


@admin.register(WeeklyEntry)
class WeeklyEntryAdmin(admin.ModelAdmin):
    list_display = ("student", "siwes_session", "week_number", "is_locked", "locked_by", "locked_at")
    list_filter = ("siwes_session", "is_locked", "locked_by")
    search_fields = ("student__matric_number", "student__user__email")
    readonly_fields = ("created_at", "updated_at")
    inlines = [DiagramInline, IndustryCommentInline, SchoolCommentInline]


@admin.register(IndustrySupervisorReviewRequest)
class ReviewRequestAdmin(admin.ModelAdmin):
    list_display = ("weekly_entry", "student", "industry_supervisor", "status", "requested_at", "reviewed_at")
    list_filter = ("status",)
    search_fields = ("student__matric_number",)


@admin.register(IndustrySupervisorFinalComment, SchoolSupervisorFinalComment)
class FinalCommentAdmin(admin.ModelAdmin):
    list_display = ("student", "siwes_session", "rating", "commented_at")
    list_filter = ("siwes_session", "rating")
    search_fields = ("student__matric_number",)
