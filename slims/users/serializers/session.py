from rest_framework import serializers
from slims.users.models.session import SessionToken


class SessionTokenSerializer(serializers.ModelSerializer):
    is_current = serializers.SerializerMethodField()

    class Meta:
        model = SessionToken
        fields = [
            "id",
            "ip_address",
            "device",
            "browser",
            "os",
            "created_at",
            "updated_at",
            "expires_at",
            "is_current",
        ]

    def get_is_current(self, obj):
        request = self.context.get("request")
        return bool(request) and getattr(request, "session_token", None) == obj.token
