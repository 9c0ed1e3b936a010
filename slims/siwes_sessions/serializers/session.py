from rest_framework import serializers
from slims.siwes_sessions.models.session import (
    SiwesSession,
    StudentSessionEnrollment,
    SupervisorSessionEnrollment,
)
from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment
from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail


class SiwesSessionSerializer(serializers.ModelSerializer):
    student_count = serializers.IntegerField(read_only=True, required=False)
    supervisor_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = SiwesSession
        fields = [
            "id",
            "name",
            "start_date",
            "end_date",
            "total_weeks",
            "status",
            "student_count",
            "supervisor_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["status", "created_at", "updated_at"]
        # Name clashes are reported as conflicts by the session service
        extra_kwargs = {
            "name": {"validators": []},
            "total_weeks": {"required": False, "min_value": 1, "max_value": 52},
        }


class StudentEnrollmentSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    matric_number = serializers.CharField(source="student.matric_number", read_only=True)
    department_name = serializers.CharField(
        source="student.department.name", read_only=True
    )
    session_name = serializers.CharField(source="siwes_session.name", read_only=True)
    session_status = serializers.CharField(source="siwes_session.status", read_only=True)

    class Meta:
        model = StudentSessionEnrollment
        fields = [
            "id",
            "student",
            "student_name",
            "matric_number",
            "department_name",
            "siwes_session",
            "session_name",
            "session_status",
            "enrolled_at",
        ]
        read_only_fields = fields


class SupervisorEnrollmentSerializer(serializers.ModelSerializer):
    supervisor_name = serializers.CharField(
        source="school_supervisor.full_name", read_only=True
    )
    staff_id = serializers.CharField(source="school_supervisor.staff_id", read_only=True)
    department_name = serializers.CharField(
        source="school_supervisor.department.name", read_only=True
    )

    class Meta:
        model = SupervisorSessionEnrollment
        fields = [
            "id",
            "school_supervisor",
            "supervisor_name",
            "staff_id",
            "department_name",
            "siwes_session",
            "enrolled_at",
        ]
        read_only_fields = fields


class EnrollSerializer(serializers.Serializer):
    ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), allow_empty=False
    )


class AssignmentSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    matric_number = serializers.CharField(source="student.matric_number", read_only=True)
    supervisor_name = serializers.CharField(
        source="school_supervisor.full_name", read_only=True
    )
    session_name = serializers.CharField(source="siwes_session.name", read_only=True)

    class Meta:
        model = StudentSupervisorAssignment
        fields = [
            "id",
            "student",
            "student_name",
            "matric_number",
            "school_supervisor",
            "supervisor_name",
            "siwes_session",
            "session_name",
            "assignment_method",
            "assigned_at",
        ]
        read_only_fields = fields


class ManualAssignmentSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    supervisor_id = serializers.IntegerField()
    session_id = serializers.IntegerField()


class AutoAssignmentSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    max_students_per_supervisor = serializers.IntegerField(
        required=False, min_value=1, default=10
    )


class IndustrySupervisorInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    position = serializers.CharField(max_length=100, required=False, allow_blank=True)


class SiwesDetailInputSerializer(serializers.Serializer):
    session_id = serializers.IntegerField(required=False)
    placement_organization_id = serializers.IntegerField()
    training_start_date = serializers.DateField()
    training_end_date = serializers.DateField()
    job_title = serializers.CharField(max_length=150, required=False, allow_blank=True)
    department_at_organization = serializers.CharField(
        max_length=150, required=False, allow_blank=True
    )
    industry_supervisor = IndustrySupervisorInputSerializer()


class SiwesDetailSerializer(serializers.ModelSerializer):
    session_name = serializers.CharField(source="siwes_session.name", read_only=True)
    organization_name = serializers.CharField(
        source="placement_organization.name", read_only=True
    )
    industry_supervisor_name = serializers.CharField(
        source="industry_supervisor.full_name", read_only=True
    )
    industry_supervisor_email = serializers.EmailField(
        source="industry_supervisor.user.email", read_only=True
    )

    class Meta:
        model = StudentSiwesDetail
        fields = [
            "id",
            "siwes_session",
            "session_name",
            "placement_organization",
            "organization_name",
            "industry_supervisor",
            "industry_supervisor_name",
            "industry_supervisor_email",
            "training_start_date",
            "training_end_date",
            "job_title",
            "department_at_organization",
            "updated_at",
        ]
        read_only_fields = fields


class SwitchSessionSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()


class SessionQuerySerializer(serializers.Serializer):
    session_id = serializers.IntegerField(required=False, min_value=1)


class AssignmentQuerySerializer(serializers.Serializer):
    session_id = serializers.IntegerField(min_value=1)


class WorkloadQuerySerializer(serializers.Serializer):
    supervisor_id = serializers.IntegerField(min_value=1)
    session_id = serializers.IntegerField(required=False, min_value=1)
