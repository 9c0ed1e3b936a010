import logging
from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback
from slims.core.exceptions import AppError

logger = logging.getLogger(__name__)


def error_payload(message, code=None, details=None):
    payload = {"message": message, "code": code}
    if details is not None:
        payload["details"] = details
    return payload


def api_exception_handler(exc, context):
    """
    Map every exception raised inside a DRF view onto the error envelope
    body ``{"message", "code", "details"}``. The renderer adds the outer
    ``success``/``meta`` keys.
    """
    view = context.get("view")
    view_name = view.__class__.__name__ if view else None

    if isinstance(exc, AppError):
        logger.warning(
            f"Business logic error in {view_name}: {exc.message} "
            f"(status={exc.status_code}, code={exc.code})"
        )
        set_rollback()
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.ValidationError):
        set_rollback()
        return Response(
            error_payload("Validation failed", "VALIDATION_ERROR", exc.detail),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, "auth_header", None):
            headers["WWW-Authenticate"] = exc.auth_header
        if getattr(exc, "wait", None):
            headers["Retry-After"] = "%d" % exc.wait

        detail = exc.detail
        codes = exc.get_codes()
        if isinstance(detail, dict):
            message = str(detail.get("detail", "Request failed"))
        elif isinstance(detail, list):
            message = " ".join(str(d) for d in detail)
        else:
            message = str(detail)
        code = codes.upper() if isinstance(codes, str) else exc.default_code.upper()

        set_rollback()
        return Response(
            error_payload(message, code), status=exc.status_code, headers=headers
        )

    logger.exception(f"Unhandled error in {view_name}: {exc}")
    set_rollback()
    return Response(
        error_payload("Internal server error", "INTERNAL_ERROR"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
