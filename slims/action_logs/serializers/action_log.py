from rest_framework import serializers
from slims.action_logs.models.action_log import ActionLog


class ActionLogSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()
    category_display = serializers.CharField(
        source="get_category_display", read_only=True
    )
    affected_model = serializers.CharField(read_only=True)
    affected_object = serializers.CharField(read_only=True)

    class Meta:
        model = ActionLog
        fields = [
            "id",
            "user",
            "user_name",
            "user_tag",
            "user_type",
            "action",
            "category",
            "category_display",
            "ip_address",
            "user_agent",
            "affected_model",
            "object_id",
            "affected_object",
            "metadata",
            "timestamp",
        ]
        read_only_fields = fields

    def get_user_name(self, obj):
        return obj.user.get_full_name() if obj.user else "System"
