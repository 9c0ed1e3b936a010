from django.urls import path, include
from rest_framework.routers import DefaultRouter
from slims.users.views.auth import (
    LoginAPIView,
    MagicLinkRequestAPIView,
    MagicLinkVerifyAPIView,
    logout_view,
    me_view,
    change_password,
)
from slims.users.views.session import SessionTokenViewSet

router = DefaultRouter(trailing_slash=False)
router.register(r"sessions", SessionTokenViewSet, basename="session-token")

urlpatterns = [
    path("login", LoginAPIView.as_view(), name="login"),
    path("logout", logout_view, name="logout"),
    path("me", me_view, name="me"),
    path("magic-link", MagicLinkRequestAPIView.as_view(), name="magic-link"),
    path(
        "magic-link/verify",
        MagicLinkVerifyAPIView.as_view(),
        name="magic-link-verify",
    ),
    path("change-password", change_password, name="change-password"),
    path("", include(router.urls)),
]
