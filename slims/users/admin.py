from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models.base_user import User
from .models.profiles import Student, SchoolSupervisor, IndustrySupervisor, AdminProfile
from .models.session import SessionToken
from .models.verification import MagicLinkToken


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "user_type", "is_active", "email_verified")
    list_filter = ("user_type", "is_active", "email_verified")
    search_fields = ("username", "email", "first_name", "last_name")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("SLIMS", {"fields": ("user_type", "email_verified")}),
    )


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("matric_number", "user", "department", "level", "is_active")
    list_filter = ("is_active", "level", "department__faculty")
    search_fields = ("matric_number", "user__first_name", "user__last_name", "user__email")
    raw_id_fields = ("user", "department", "current_siwes_session")


@admin.register(SchoolSupervisor)
class SchoolSupervisorAdmin(admin.ModelAdmin):
    list_display = ("staff_id", "user", "department", "is_active")
    list_filter = ("is_active", "department__faculty")
    search_fields = ("staff_id", "user__first_name", "user__last_name", "user__email")
    raw_id_fields = ("user", "department")


@admin.register(IndustrySupervisor)
class IndustrySupervisorAdmin(admin.ModelAdmin):
    list_display = ("user", "placement_organization", "position")
    search_fields = ("user__first_name", "user__last_name", "user__email")
    raw_id_fields = ("user", "placement_organization")


admin.site.register(AdminProfile)


@admin.register(SessionToken)
class SessionTokenAdmin(admin.ModelAdmin):
    list_display = ("user", "device", "browser", "ip_address", "expires_at")
    search_fields = ("user__username", "user__email", "ip_address")
    readonly_fields = ("token",)


@admin.register(MagicLinkToken)
class MagicLinkTokenAdmin(admin.ModelAdmin):
    list_display = ("user", "created_at", "expires_at", "used_at")
    readonly_fields = ("token",)
