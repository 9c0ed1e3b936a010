from rest_framework import serializers
from slims.core.exceptions import ConflictError
from slims.institutions.models.institution import (
    Faculty,
    Department,
    PlacementOrganization,
)


class DepartmentSerializer(serializers.ModelSerializer):
    faculty_name = serializers.CharField(source="faculty.name", read_only=True)
    student_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Department
        fields = [
            "id",
            "faculty",
            "faculty_name",
            "name",
            "code",
            "student_count",
            "created_at",
        ]
        read_only_fields = ["created_at"]
        # Duplicate codes are reported as conflicts in validate()
        validators = []

    def validate(self, data):
        faculty = data.get("faculty", getattr(self.instance, "faculty", None))
        code = data.get("code", getattr(self.instance, "code", "")).strip().upper()
        duplicates = Department.objects.filter(faculty=faculty, code=code)
        if self.instance:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ConflictError(
                f"Department with code {code} already exists in this faculty"
            )
        return data


class FacultySerializer(serializers.ModelSerializer):
    departments = DepartmentSerializer(many=True, read_only=True)

    class Meta:
        model = Faculty
        fields = ["id", "name", "code", "departments", "created_at"]
        read_only_fields = ["created_at"]
        extra_kwargs = {"code": {"validators": []}}

    def validate_code(self, value):
        code = value.strip().upper()
        duplicates = Faculty.objects.filter(code=code)
        if self.instance:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ConflictError(f"Faculty with code {code} already exists")
        return code


class PlacementOrganizationSerializer(serializers.ModelSerializer):
    class Meta:
        model = PlacementOrganization
        fields = [
            "id",
            "name",
            "address",
            "city",
            "state",
            "phone",
            "email",
            "created_at",
        ]
        read_only_fields = ["created_at"]
        extra_kwargs = {"name": {"validators": []}}

    def validate_name(self, value):
        name = value.strip()
        duplicates = PlacementOrganization.objects.filter(name__iexact=name)
        if self.instance:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ConflictError("Organization with this name already exists")
        return name


class OrganizationSearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")
    limit = serializers.IntegerField(required=False, min_value=1, max_value=50, default=10)
