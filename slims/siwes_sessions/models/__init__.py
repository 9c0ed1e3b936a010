from .session import SiwesSession, StudentSessionEnrollment, SupervisorSessionEnrollment
from .assignment import StudentSupervisorAssignment
from .siwes_detail import StudentSiwesDetail

__all__ = [
    "SiwesSession",
    "StudentSessionEnrollment",
    "SupervisorSessionEnrollment",
    "StudentSupervisorAssignment",
    "StudentSiwesDetail",
]
