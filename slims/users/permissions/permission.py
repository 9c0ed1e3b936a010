from rest_framework.permissions import BasePermission
from slims.users.models.base_user import User

# === BROAD ROLE CHECKS ===


class IsAdmin(BasePermission):
    """SIWES unit administrators"""

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.user_type == User.ADMIN
            and (
                not hasattr(request.user, "admin_profile")
                or request.user.admin_profile.is_active
            )
        )


class IsSuperAdmin(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.user_type == User.ADMIN
            and hasattr(request.user, "admin_profile")
            and request.user.admin_profile.is_super_admin
        )


class IsStudent(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.user_type == User.STUDENT
            and hasattr(request.user, "student_profile")
        )


class IsSchoolSupervisor(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.user_type == User.SCHOOL_SUPERVISOR
            and hasattr(request.user, "school_supervisor_profile")
        )


class IsIndustrySupervisor(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.user_type == User.INDUSTRY_SUPERVISOR
            and hasattr(request.user, "industry_supervisor_profile")
        )
