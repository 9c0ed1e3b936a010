from django.apps import AppConfig


class ActionLogsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "slims.action_logs"
    label = "action_logs"
