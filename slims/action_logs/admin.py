from django.contrib import admin
from slims.action_logs.models.action_log import ActionLog


@admin.register(ActionLog)
class ActionLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "user", "user_type", "category", "action")
    list_filter = ("category", "user_type")
    search_fields = ("action", "user__username", "user__email")
    readonly_fields = [field.name for field in ActionLog._meta.fields]
    date_hierarchy = "timestamp"
