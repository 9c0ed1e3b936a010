from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "slims.users"
    label = "users"

    def ready(self):
        from slims.users.signals import session  # noqa: F401
