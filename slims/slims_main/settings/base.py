from pathlib import Path
from decouple import config
from datetime import timedelta
from celery.schedules import crontab
import os


AUTH_USER_MODEL = "users.User"

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

PROJECT_ROOT = BASE_DIR.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config("SECRET_KEY", default="django-insecure-slims-development-key")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config("DEBUG", default=True, cast=bool)

ALLOWED_HOSTS = []

APP_NAME = config("APP_NAME", default="SLIMS")
APP_URL = config("APP_URL", default="http://localhost:3000")
APP_VERSION = config("APP_VERSION", default="0.1.0")

# CORS Configuration
CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_HEADERS = [
    "accept",
    "authorization",
    "content-type",
    "origin",
    "x-csrf-token",
    "x-requested-with",
]

# Application definition

DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]
PROJECT_APPS = [
    "slims.core",
    "slims.users",
    "slims.institutions",
    "slims.siwes_sessions",
    "slims.logbook",
    "slims.dashboards",
    "slims.action_logs",
    "slims.notifications",
]

THIRD_PARTY_APPS = [
    "rest_framework",
    "rest_framework_simplejwt",
    "rest_framework_simplejwt.token_blacklist",
    "drf_yasg",
    "django_celery_results",
    "django_celery_beat",
    "corsheaders",
    "django_filters",
]

INSTALLED_APPS = DJANGO_APPS + PROJECT_APPS + THIRD_PARTY_APPS

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "slims.users.authentication.CookieSessionAuthentication",
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "DEFAULT_RENDERER_CLASSES": ("slims.core.renderers.EnvelopeJSONRenderer",),
    "DEFAULT_FILTER_BACKENDS": ("django_filters.rest_framework.DjangoFilterBackend",),
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 25,
    "EXCEPTION_HANDLER": "slims.core.exception_handler.api_exception_handler",
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

AUTHENTICATION_BACKENDS = [
    "slims.users.models.base_user.CustomUserModelBackend",
    "django.contrib.auth.backends.ModelBackend",
]

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=60),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
    "ROTATE_REFRESH_TOKENS": True,
    "BLACKLIST_AFTER_ROTATION": True,
    "UPDATE_LAST_LOGIN": True,
    "ALGORITHM": "HS256",
    "SIGNING_KEY": SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "id",
    "USER_ID_CLAIM": "user_id",
}

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "slims.users.middleware.auth.RouteAuthMiddleware",
    "slims.users.middleware.csrf.SignedCsrfMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "slims.action_logs.middleware.action_log.ActionLogMiddleware",
]

ROOT_URLCONF = "slims.slims_main.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "slims.slims_main.wsgi.application"

# Database

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": config("DATABASE_NAME", default="slims"),
        "USER": config("DATABASE_USER", default="admin"),
        "PASSWORD": config("DATABASE_PASSWORD", default="password"),
        "HOST": config("DB_HOST", default="localhost"),
        "PORT": config("DB_PORT", default="5432"),
    }
}

# Session cache (cache-then-database lookups for session tokens)
REDIS_URL = config("REDIS_URL", default="redis://localhost:6379")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

# Password validation

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {
            "min_length": 8,
        },
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# Internationalization

LANGUAGE_CODE = "en-us"

TIME_ZONE = "Africa/Lagos"

USE_I18N = True

USE_TZ = True

# Static files (CSS, JavaScript, Images)

STATIC_URL = "static/"
MEDIA_URL = "/media/"
MEDIA_ROOT = os.path.join(BASE_DIR, "media")

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

SWAGGER_SETTINGS = {
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": 'JWT authorization. Example: "Bearer {token}"',
        }
    },
    "USE_SESSION_AUTH": False,
    "JSON_EDITOR": True,
    "PERSIST_AUTH": True,
    "DEEP_LINKING": True,
}

# Celery Configuration
CELERY_BROKER_URL = config("CELERY_BROKER_URL", default="redis://localhost:6379/0")
CELERY_RESULT_BACKEND = "django-db"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = "Africa/Lagos"
CELERY_ENABLE_UTC = True
CELERY_TASK_TRACK_STARTED = True
CELERY_TASK_TIME_LIMIT = 5 * 60
CELERY_RESULT_EXPIRES = 7 * 24 * 60 * 60

CELERY_BEAT_SCHEDULER = "django_celery_beat.schedulers:DatabaseScheduler"
CELERY_BEAT_SCHEDULE = {
    "cleanup-expired-sessions": {
        "task": "slims.users.tasks.cleanup_expired_sessions",
        "schedule": crontab(hour=2, minute=0),  # Daily at 2:00 AM
    },
    "expire-stale-review-requests": {
        "task": "slims.logbook.tasks.expire_stale_review_requests",
        "schedule": crontab(hour=3, minute=30),
    },
    "cleanup-old-action-logs": {
        "task": "slims.action_logs.tasks.cleanup_old_action_logs",
        "schedule": crontab(hour=4, minute=0, day_of_week=0),
    },
}

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "slims": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django.request": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": True,
        },
    },
}

X_FRAME_OPTIONS = "SAMEORIGIN"

# ============================================================================
# EMAIL CONFIGURATION
# ============================================================================

EMAIL_BACKEND = config("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = config("SMTP_HOST", "smtp.gmail.com")
EMAIL_PORT = config("SMTP_PORT", default=587, cast=int)
EMAIL_USE_TLS = config("SMTP_USE_TLS", default=True, cast=bool)
EMAIL_HOST_USER = config("SMTP_USER", default="")
EMAIL_HOST_PASSWORD = config("SMTP_PASSWORD", default="")
DEFAULT_FROM_EMAIL = config("SMTP_FROM", "SLIMS <noreply@slims.local>")
EMAIL_TIMEOUT = 10  # seconds

# ============================================================================
# SECURITY SETTINGS
# ============================================================================

# Session tokens
SESSION_TOKEN_COOKIE_NAME = config(
    "SESSION_TOKEN_COOKIE_NAME", default="slims.session_token"
)
SESSION_EXPIRES_IN = 60 * 60 * 24 * 7  # 7 days
SESSION_UPDATE_AGE = 60 * 60 * 24  # refresh expiry once a day
SESSION_TOKEN_COOKIE_SECURE = config("SESSION_TOKEN_COOKIE_SECURE", default=False, cast=bool)

MAGIC_LINK_EXPIRY_M = config("MAGIC_LINK_EXPIRY_M", default=15, cast=int)

# Signed double-submit CSRF tokens
CSRF_PROTECTION_ENABLED = True
CSRF_SECRET = config("CSRF_SECRET", default="super-secret-development")
CSRF_TOKEN_COOKIE_NAME = config("CSRF_COOKIE_NAME", default="csrf-token")
CSRF_CLIENT_COOKIE_NAME = config("CSRF_CLIENT_COOKIE_NAME", default="csrf-client-token")
CSRF_TOKEN_EXPIRY_M = config("CSRF_TOKEN_EXPIRY_M", default=60, cast=int)
CSRF_EXEMPT_ROUTES = [
    "/api/auth/*",
    "/api/auth/**",
    "/api/**/callback",
    "/api/webhooks/*",
    "/api/health",
    "/api/health/*",
    "/api/csrf",
    "/api/token/*",
    "/admin/**",
]

# Route-level authentication
AUTH_EXEMPT_ROUTES = [
    "/api/auth/*",
    "/api/auth/**",
    "/api/health",
    "/api/health/*",
    "/",
    "/api/**/test/*",
]
AUTH_PROTECTED_ROUTES = [
    "/api/student/**",
    "/api/school-supervisor/**",
    "/api/industry-supervisor/**",
    "/api/sessions/*",
    "/api/logbook/*",
    "/api/admin/**",
    "/dashboard/*",
]

# Logbook limits
LOGBOOK_ENTRY_MAX_LENGTH = 5000
LOGBOOK_DIAGRAM_MAX_SIZE = 5 * 1024 * 1024
LOGBOOK_DIAGRAM_MIME_TYPES = [
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
]
REVIEW_REQUEST_EXPIRY_DAYS = 14

# Action logging
ACTION_LOG_ENABLED = True
