from django.conf import settings
from django.core.checks import Error, Tags, Warning, register

CSRF_SECRET_MIN_LENGTH = 32


@register(Tags.security, deploy=False)
def check_csrf_secret(app_configs, **kwargs):
    secret = getattr(settings, "CSRF_SECRET", "") or ""
    if len(secret) >= CSRF_SECRET_MIN_LENGTH:
        return []

    message = (
        f"CSRF_SECRET must be at least {CSRF_SECRET_MIN_LENGTH} characters "
        f"(got {len(secret)})."
    )
    if settings.DEBUG:
        return [Warning(message, id="slims.W001")]
    return [Error(message, hint="Set CSRF_SECRET in the environment.", id="slims.E001")]


@register(Tags.security)
def check_session_timing(app_configs, **kwargs):
    errors = []
    expires_in = getattr(settings, "SESSION_EXPIRES_IN", 0)
    update_age = getattr(settings, "SESSION_UPDATE_AGE", 0)
    if expires_in <= 0:
        errors.append(Error("SESSION_EXPIRES_IN must be positive.", id="slims.E002"))
    elif update_age >= expires_in:
        errors.append(
            Warning(
                "SESSION_UPDATE_AGE should be shorter than SESSION_EXPIRES_IN; "
                "sessions will never be refreshed.",
                id="slims.W002",
            )
        )
    return errors
