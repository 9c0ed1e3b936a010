from .weekly_entry import WeeklyEntry
from .comment import (
    IndustrySupervisorWeeklyComment,
    SchoolSupervisorWeeklyComment,
    IndustrySupervisorFinalComment,
    SchoolSupervisorFinalComment,
)
from .review_request import IndustrySupervisorReviewRequest
from .diagram import Diagram

__all__ = [
    "WeeklyEntry",
    "IndustrySupervisorWeeklyComment",
    "SchoolSupervisorWeeklyComment",
    "IndustrySupervisorFinalComment",
    "SchoolSupervisorFinalComment",
    "IndustrySupervisorReviewRequest",
    "Diagram",
]
