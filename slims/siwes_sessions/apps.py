from django.apps import AppConfig


class SiwesSessionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "slims.siwes_sessions"
    label = "siwes_sessions"
