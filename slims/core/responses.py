from django.http import JsonResponse
from slims.core.renderers import build_envelope


def error_json_response(message, status, code=None, details=None):
    """Error envelope for code running outside DRF views (middleware)"""
    error = {"message": message, "code": code}
    if details is not None:
        error["details"] = details
    return JsonResponse(build_envelope(error, status), status=status)