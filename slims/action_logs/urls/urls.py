from django.urls import path, include
from rest_framework.routers import SimpleRouter
from slims.action_logs.views.action_log import ActionLogViewSet

router = SimpleRouter()
router.register(r"", ActionLogViewSet, basename="action-log")

urlpatterns = [
    path("", include(router.urls)),
]
