# slims_main/settings/test.py

from .base import *

DEBUG = False

SECRET_KEY = "slims-test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "slims-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Middleware tests switch this back on with override_settings
CSRF_PROTECTION_ENABLED = False
CSRF_SECRET = "slims-test-csrf-secret-with-enough-length"

ACTION_LOG_ENABLED = False

MEDIA_ROOT = os.path.join(BASE_DIR, "test_media")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "loggers": {"slims": {"handlers": ["null"], "propagate": False}},
}
