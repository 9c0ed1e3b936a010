# slims_main/settings/production.py

from .base import *
from decouple import config, Csv

DEBUG = False

ALLOWED_HOSTS = config(
    "DJANGO_ALLOWED_HOSTS",
    default="localhost,127.0.0.1",
    cast=Csv(),
)

SECRET_KEY = config("SECRET_KEY")
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

CSRF_SECRET = config("CSRF_SECRET")

CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS", default=APP_URL, cast=Csv()
)

STATIC_URL = "/static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

SESSION_COOKIE_SECURE = True
SESSION_TOKEN_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=True, cast=bool)
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
