from django.urls import path, include
from rest_framework.routers import SimpleRouter
from slims.siwes_sessions.views.admin import SiwesSessionViewSet, AssignmentViewSet
from slims.siwes_sessions.views.student import (
    StudentSessionViewSet,
    StudentSiwesDetailViewSet,
)

# Mounted under /api/admin/
admin_router = SimpleRouter(trailing_slash=False)
admin_router.register(r"sessions", SiwesSessionViewSet, basename="siwes-session")
admin_router.register(r"assignments", AssignmentViewSet, basename="assignment")

# Mounted under /api/student/
student_router = SimpleRouter(trailing_slash=False)
student_router.register(r"sessions", StudentSessionViewSet, basename="student-session")
student_router.register(
    r"siwes-details", StudentSiwesDetailViewSet, basename="student-siwes-detail"
)

admin_urlpatterns = [path("", include(admin_router.urls))]
student_urlpatterns = [path("", include(student_router.urls))]
