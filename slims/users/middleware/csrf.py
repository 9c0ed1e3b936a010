# slims/users/middleware/csrf.py
import hashlib
import hmac
import json
import logging
import re
import secrets
import time
from django.conf import settings
from django.utils.crypto import constant_time_compare
from slims.core.responses import error_json_response
from slims.core.routing import matches_any

logger = logging.getLogger(__name__)

STATE_CHANGING_METHODS = ("POST", "PUT", "PATCH", "DELETE")
CSRF_HEADER = "HTTP_X_CSRF_TOKEN"
HEX_TOKEN = re.compile(r"^[0-9a-f]{64}$")


def sign_token(token):
    return hmac.new(
        settings.CSRF_SECRET.encode(), token.encode(), hashlib.sha256
    ).hexdigest()


def token_lifetime():
    return settings.CSRF_TOKEN_EXPIRY_M * 60


def generate_csrf_token():
    """New token data ``{token, signature, expiresAt}`` (expiry in ms)"""
    token = secrets.token_hex(32)
    return {
        "token": token,
        "signature": sign_token(token),
        "expiresAt": int((time.time() + token_lifetime()) * 1000),
    }


def parse_csrf_cookie(value):
    """Returns the token data when well formed, correctly signed and unexpired"""
    try:
        data = json.loads(value)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to parse CSRF cookie: {str(e)}")
        return None

    if not isinstance(data, dict):
        return None
    token = data.get("token")
    signature = data.get("signature")
    expires_at = data.get("expiresAt")
    if not token or not signature or not expires_at:
        return None

    if not constant_time_compare(signature, sign_token(str(token))):
        logger.warning("Invalid CSRF token signature detected")
        return None

    try:
        if time.time() * 1000 > float(expires_at):
            return None
    except (TypeError, ValueError):
        return None

    return data


def get_csrf_token(request):
    """Token issued for this request, or the one held in its cookie"""
    issued = getattr(request, "csrf_token_data", None)
    if issued:
        return issued["token"]

    cookie = request.COOKIES.get(settings.CSRF_TOKEN_COOKIE_NAME)
    if not cookie:
        return None
    data = parse_csrf_cookie(cookie)
    return data["token"] if data else None


def validate_csrf_token(request, provided_token):
    cookie = request.COOKIES.get(settings.CSRF_TOKEN_COOKIE_NAME)
    if not cookie or not provided_token:
        return False
    data = parse_csrf_cookie(cookie)
    if not data:
        return False
    return constant_time_compare(data["token"], provided_token)


class SignedCsrfMiddleware:
    """
    Double-submit CSRF protection with an HMAC-signed cookie.

    GET requests get an HttpOnly cookie holding the signed token data and a
    readable cookie holding the raw token. State-changing requests to
    non-exempt routes must echo the token in the X-CSRF-Token header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not settings.CSRF_PROTECTION_ENABLED:
            return self.get_response(request)

        if request.method in STATE_CHANGING_METHODS:
            if not matches_any(request.path_info, settings.CSRF_EXEMPT_ROUTES):
                rejection = self.check_request(request)
                if rejection is not None:
                    return rejection
            return self.get_response(request)

        if request.method != "GET":
            return self.get_response(request)

        existing = request.COOKIES.get(settings.CSRF_TOKEN_COOKIE_NAME)
        token_data = parse_csrf_cookie(existing) if existing else None
        issue_new = token_data is None
        if issue_new:
            token_data = generate_csrf_token()
        request.csrf_token_data = token_data

        response = self.get_response(request)

        if issue_new:
            response.set_cookie(
                settings.CSRF_TOKEN_COOKIE_NAME,
                json.dumps(token_data),
                **self.cookie_options(httponly=True),
            )
            response.set_cookie(
                settings.CSRF_CLIENT_COOKIE_NAME,
                token_data["token"],
                **self.cookie_options(httponly=False),
            )
        elif request.COOKIES.get(settings.CSRF_CLIENT_COOKIE_NAME) != token_data["token"]:
            response.set_cookie(
                settings.CSRF_CLIENT_COOKIE_NAME,
                token_data["token"],
                **self.cookie_options(httponly=False),
            )
        return response

    def cookie_options(self, httponly):
        return {
            "max_age": token_lifetime(),
            "httponly": httponly,
            "secure": not settings.DEBUG,
            "samesite": "Strict",
            "path": "/",
        }

    def check_request(self, request):
        method, path = request.method, request.path_info

        cookie = request.COOKIES.get(settings.CSRF_TOKEN_COOKIE_NAME)
        if not cookie:
            logger.warning(f"CSRF token missing: {method} {path}")
            return error_json_response(
                "CSRF token missing. Please refresh the page and try again.",
                403,
                code="CSRF_TOKEN_MISSING",
            )

        stored = parse_csrf_cookie(cookie)
        if stored is None:
            logger.warning(f"Invalid or expired CSRF token: {method} {path}")
            return error_json_response(
                "Invalid or expired CSRF token. Please refresh the page and try again.",
                403,
                code="CSRF_TOKEN_INVALID",
            )

        header_token = request.META.get(CSRF_HEADER)
        if not header_token:
            logger.warning(f"CSRF token not provided in header: {method} {path}")
            return error_json_response(
                "CSRF token not provided. Please include X-CSRF-Token header.",
                403,
                code="CSRF_TOKEN_NOT_PROVIDED",
            )

        if not HEX_TOKEN.match(header_token):
            logger.warning(f"Malformed CSRF header token: {method} {path}")
            return error_json_response(
                "Invalid CSRF token format.", 403, code="CSRF_TOKEN_INVALID_FORMAT"
            )

        if not constant_time_compare(stored["token"], header_token):
            logger.warning(f"CSRF token mismatch: {method} {path}")
            return error_json_response(
                "CSRF token mismatch. Please refresh the page and try again.",
                403,
                code="CSRF_TOKEN_MISMATCH",
            )

        return None
