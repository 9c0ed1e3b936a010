from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework.permissions import AllowAny
from slims.dashboards.urls import urls as dashboard_urls
from slims.logbook.urls import urls as logbook_urls
from slims.siwes_sessions.urls import urls as session_urls
from slims.users.views.auth import csrf_token_view, health_view


schema_view = get_schema_view(
    openapi.Info(
        title="SLIMS API",
        default_version="v1",
        description="API documentation for the SIWES Logbook Information Management System",
    ),
    public=True,
    permission_classes=[AllowAny],
    authentication_classes=[],
)

urlpatterns = [
    # Swagger/Redoc URLs
    path(
        "swagger<format>/", schema_view.without_ui(cache_timeout=0), name="schema-json"
    ),
    path(
        "swagger/",
        schema_view.with_ui("swagger", cache_timeout=0),
        name="schema-swagger-ui",
    ),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    # Admin
    path("admin/", admin.site.urls),
    # API routes with /api/ prefix
    path(
        "api/",
        include(
            [
                # Authentication
                path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
                path(
                    "token/refresh/", TokenRefreshView.as_view(), name="token_refresh"
                ),
                path("auth/", include("slims.users.urls.urls")),
                path("csrf", csrf_token_view, name="csrf-token"),
                path("health", health_view, name="health"),
                # Role dashboards
                path("", include(dashboard_urls.urlpatterns)),
                # Students
                path("student/", include(logbook_urls.student_urlpatterns)),
                path("student/", include(session_urls.student_urlpatterns)),
                # Supervisors
                path(
                    "school-supervisor/",
                    include(logbook_urls.school_supervisor_urlpatterns),
                ),
                path(
                    "industry-supervisor/",
                    include(logbook_urls.industry_supervisor_urlpatterns),
                ),
                # SIWES unit administration
                path("admin/", include("slims.institutions.urls.urls")),
                path("admin/", include(session_urls.admin_urlpatterns)),
                path("logs/", include("slims.action_logs.urls.urls")),
                path("notifications/", include("slims.notifications.urls.urls")),
            ]
        ),
    ),
]
