from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "slims.core"
    label = "core"

    def ready(self):
        # Registers the settings checks
        from slims.core import checks  # noqa: F401
