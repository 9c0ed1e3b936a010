"""
Application errors for SLIMS.

Services raise these instead of returning error values. The DRF exception
handler in ``slims.core.exception_handler`` maps them onto the JSON error
envelope using ``status_code`` and ``code``.

Usage:
    from slims.core.exceptions import NotFoundError, WeekLockedError

    if week.is_locked:
        raise WeekLockedError()
"""


class AppError(Exception):
    """Base application error"""

    default_message = "Internal server error"
    default_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message=None, status_code=None, code=None, details=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.code = code or self.default_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        data = {"message": self.message, "code": self.code}
        if self.details is not None:
            data["details"] = self.details
        return data


class BusinessError(AppError):
    """Business rule violation (4xx)"""

    default_message = "Request could not be processed"
    default_code = "BUSINESS_ERROR"
    status_code = 400


class NotFoundError(AppError):
    default_message = "Resource not found"
    default_code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(AppError):
    default_message = "Access forbidden"
    default_code = "FORBIDDEN"
    status_code = 403


class ConflictError(AppError):
    default_message = "Resource conflict"
    default_code = "CONFLICT"
    status_code = 409


# ============================================
# Logbook / review errors
# ============================================


class UnauthorizedSupervisorError(ForbiddenError):
    """Supervisor is not linked to the student for this session"""

    default_message = "Unauthorized: You are not the supervisor for this student"
    default_code = "UNAUTHORIZED"


class WeekLockedError(BusinessError):
    default_message = (
        "Cannot edit locked week. Contact your school supervisor to unlock."
    )
    default_code = "WEEK_LOCKED"


class WeekNotLockedError(BusinessError):
    default_message = "Week is not locked"
    default_code = "WEEK_NOT_LOCKED"


class NoEntriesError(BusinessError):
    default_message = (
        "Cannot request review for week with no entries. "
        "Please add at least one day's entry."
    )
    default_code = "NO_ENTRIES"


class ReviewAlreadyRequestedError(ConflictError):
    default_message = "A review has already been requested for this week"
    default_code = "REVIEW_ALREADY_REQUESTED"


class FinalCommentExistsError(ConflictError):
    default_message = "Final comment already submitted"
    default_code = "FINAL_COMMENT_EXISTS"
