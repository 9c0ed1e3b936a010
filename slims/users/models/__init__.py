from .base_user import User  # Make User importable from users.models
from .profiles import Student, SchoolSupervisor, IndustrySupervisor, AdminProfile
from .session import SessionToken
from .verification import MagicLinkToken


__all__ = [
    "User",
    "Student",
    "SchoolSupervisor",
    "IndustrySupervisor",
    "AdminProfile",
    "SessionToken",
    "MagicLinkToken",
]
