from django.urls import path, include
from rest_framework.routers import SimpleRouter
from slims.logbook.views.student import StudentLogbookViewSet
from slims.logbook.views.supervisor import (
    SchoolSupervisorWeekViewSet,
    IndustrySupervisorWeekViewSet,
    ReviewRequestViewSet,
)

# Mounted under /api/student/
student_router = SimpleRouter(trailing_slash=False)
student_router.register(r"logbook", StudentLogbookViewSet, basename="student-logbook")

# Mounted under /api/school-supervisor/
school_supervisor_router = SimpleRouter(trailing_slash=False)
school_supervisor_router.register(
    r"weeks", SchoolSupervisorWeekViewSet, basename="school-supervisor-week"
)

# Mounted under /api/industry-supervisor/
industry_supervisor_router = SimpleRouter(trailing_slash=False)
industry_supervisor_router.register(
    r"weeks", IndustrySupervisorWeekViewSet, basename="industry-supervisor-week"
)
industry_supervisor_router.register(
    r"review-requests", ReviewRequestViewSet, basename="review-request"
)

student_urlpatterns = [path("", include(student_router.urls))]
school_supervisor_urlpatterns = [path("", include(school_supervisor_router.urls))]
industry_supervisor_urlpatterns = [path("", include(industry_supervisor_router.urls))]
