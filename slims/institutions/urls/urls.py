from django.urls import path, include
from rest_framework.routers import DefaultRouter
from slims.institutions.views.institution import (
    FacultyViewSet,
    DepartmentViewSet,
    PlacementOrganizationViewSet,
)

router = DefaultRouter(trailing_slash=False)
router.register(r"faculties", FacultyViewSet, basename="faculty")
router.register(r"departments", DepartmentViewSet, basename="department")
router.register(
    r"organizations", PlacementOrganizationViewSet, basename="organization"
)

urlpatterns = [
    path("", include(router.urls)),
]
