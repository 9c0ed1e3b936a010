from django.contrib import admin
from slims.siwes_sessions.models import (
    SiwesSession,
    StudentSessionEnrollment,
    SupervisorSessionEnrollment,
    StudentSupervisorAssignment,
    StudentSiwesDetail,
)


@admin.register(SiwesSession)
class SiwesSessionAdmin(admin.ModelAdmin):
    list_display = ("name", "start_date", "end_date", "total_weeks", "status")
    list_filter = ("status",)
    search_fields = ("name",)


@admin.register(StudentSessionEnrollment)
class StudentSessionEnrollmentAdmin(admin.ModelAdmin):
    list_display = ("student", "siwes_session", "enrolled_at")
    list_filter = ("siwes_session",)
    search_fields = ("student__matric_number",)


@admin.register(SupervisorSessionEnrollment)
class SupervisorSessionEnrollmentAdmin(admin.ModelAdmin):
    list_display = ("school_supervisor", "siwes_session", "enrolled_at")
    list_filter = ("siwes_session",)
    search_fields = ("school_supervisor__staff_id",)


@admin.register(StudentSupervisorAssignment)
class StudentSupervisorAssignmentAdmin(admin.ModelAdmin):
    list_display = ("student", "school_supervisor", "siwes_session", "assignment_method", "assigned_at")
    list_filter = ("siwes_session", "assignment_method")
    search_fields = ("student__matric_number", "school_supervisor__staff_id")


@admin.register(StudentSiwesDetail)
class StudentSiwesDetailAdmin(admin.ModelAdmin):
    list_display = ("student", "siwes_session", "placement_organization", "industry_supervisor")
    list_filter = ("siwes_session",)
    search_fields = ("student__matric_number", "placement_organization__name")
