from rest_framework import serializers
from slims.users.models.base_user import User
from slims.users.models.profiles import (
    Student,
    SchoolSupervisor,
    IndustrySupervisor,
    AdminProfile,
)


class StudentProfileSerializer(serializers.ModelSerializer):
    department_name = serializers.CharField(source="department.name", read_only=True)
    faculty_name = serializers.CharField(
        source="department.faculty.name", read_only=True
    )

    class Meta:
        model = Student
        fields = [
            "id",
            "matric_number",
            "department",
            "department_name",
            "faculty_name",
            "level",
            "current_siwes_session",
            "is_active",
        ]


class SchoolSupervisorProfileSerializer(serializers.ModelSerializer):
    department_name = serializers.CharField(source="department.name", read_only=True)

    class Meta:
        model = SchoolSupervisor
        fields = ["id", "staff_id", "department", "department_name", "phone", "is_active"]


class IndustrySupervisorProfileSerializer(serializers.ModelSerializer):
    organization_name = serializers.CharField(
        source="placement_organization.name", read_only=True
    )

    class Meta:
        model = IndustrySupervisor
        fields = [
            "id",
            "placement_organization",
            "organization_name",
            "phone",
            "position",
        ]


class AdminProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminProfile
        fields = ["id", "is_super_admin", "is_active"]


PROFILE_SERIALIZERS = {
    User.STUDENT: StudentProfileSerializer,
    User.SCHOOL_SUPERVISOR: SchoolSupervisorProfileSerializer,
    User.INDUSTRY_SUPERVISOR: IndustrySupervisorProfileSerializer,
    User.ADMIN: AdminProfileSerializer,
}


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source="get_full_name", read_only=True)
    profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "user_type",
            "user_tag",
            "email_verified",
            "profile",
        ]
        read_only_fields = ["user_type", "user_tag", "email_verified"]

    def get_profile(self, obj):
        profile = obj.profile
        serializer_class = PROFILE_SERIALIZERS.get(obj.user_type)
        if profile is None or serializer_class is None:
            return None
        return serializer_class(profile).data
