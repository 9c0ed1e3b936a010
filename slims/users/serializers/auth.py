from django.contrib.auth import authenticate
from rest_framework import serializers
from slims.users.models.base_user import User
from slims.users.models.verification import MagicLinkToken


class LoginSerializer(serializers.Serializer):
    """Password login for students, school supervisors and admins"""

    identifier = serializers.CharField(
        help_text="Email, matric number or staff ID"
    )
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    user_type = serializers.ChoiceField(
        choices=[
            User.STUDENT,
            User.SCHOOL_SUPERVISOR,
            User.ADMIN,
        ],
        required=False,
    )

    def validate(self, data):
        user = authenticate(
            request=self.context.get("request"),
            username=data["identifier"],
            password=data["password"],
        )
        if not user:
            raise serializers.ValidationError("Invalid login credentials")
        if not user.is_active:
            raise serializers.ValidationError("User account is disabled")
        if user.user_type == User.INDUSTRY_SUPERVISOR:
            raise serializers.ValidationError(
                "Industry supervisors sign in with a magic link"
            )
        expected_type = data.get("user_type")
        if expected_type and user.user_type != expected_type:
            raise serializers.ValidationError("Invalid login credentials")

        data["user"] = user
        return data


class MagicLinkRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.strip().lower()


class MagicLinkVerifySerializer(serializers.Serializer):
    token = serializers.CharField()

    def validate(self, data):
        try:
            magic_link = MagicLinkToken.objects.select_related("user").get(
                token=data["token"]
            )
        except MagicLinkToken.DoesNotExist:
            raise serializers.ValidationError("Invalid or expired sign-in link")

        if not magic_link.is_valid() or not magic_link.user.is_active:
            raise serializers.ValidationError("Invalid or expired sign-in link")

        data["magic_link"] = magic_link
        return data


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=8)
    confirm_password = serializers.CharField(write_only=True)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    def validate(self, data):
        if data["new_password"] != data["confirm_password"]:
            raise serializers.ValidationError(
                {"confirm_password": "Passwords do not match"}
            )
        return data
