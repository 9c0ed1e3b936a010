from django.urls import path
from slims.dashboards.views.admin import AdminDashboardView
from slims.dashboards.views.student import StudentDashboardView
from slims.dashboards.views.supervisor import (
    SchoolSupervisorDashboardView,
    SchoolSupervisorStudentsView,
    IndustrySupervisorDashboardView,
    IndustrySupervisorStudentsView,
)

# Mounted under /api/
urlpatterns = [
    path("student/dashboard", StudentDashboardView.as_view(), name="student-dashboard"),
    path(
        "school-supervisor/dashboard",
        SchoolSupervisorDashboardView.as_view(),
        name="school-supervisor-dashboard",
    ),
    path(
        "school-supervisor/students",
        SchoolSupervisorStudentsView.as_view(),
        name="school-supervisor-students",
    ),
    path(
        "industry-supervisor/dashboard",
        IndustrySupervisorDashboardView.as_view(),
        name="industry-supervisor-dashboard",
    ),
    path(
        "industry-supervisor/students",
        IndustrySupervisorStudentsView.as_view(),
        name="industry-supervisor-students",
    ),
    path("admin/dashboard", AdminDashboardView.as_view(), name="admin-dashboard"),
]
