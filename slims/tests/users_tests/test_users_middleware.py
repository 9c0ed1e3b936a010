import json
import time
from django.conf import settings
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from slims.tests.test_helpers import authenticate, create_test_enrolled_student
from slims.users.middleware.csrf import (
    generate_csrf_token,
    parse_csrf_cookie,
    sign_token,
)


class RouteAuthMiddlewareTest(APITestCase):
    def test_protected_route_without_credentials(self):
        response = self.client.get("/api/student/logbook")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["code"], "SESSION_INVALID")

    def test_admin_api_is_protected(self):
        response = self.client.get("/api/admin/sessions")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_exempt_route_passes(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["checks"]["database"], "ok")

    def test_bearer_token_passes_guard_but_is_validated_by_drf(self):
        response = self.client.get(
            "/api/student/logbook", HTTP_AUTHORIZATION="Bearer not-a-jwt"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotEqual(response.json()["error"]["code"], "SESSION_INVALID")

    def test_session_cookie_passes_guard(self):
        student, _ = create_test_enrolled_student()
        authenticate(self.client, student.user)
        response = self.client.get("/api/student/logbook")
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class CsrfTokenTest(TestCase):
    def test_generated_token_parses(self):
        data = generate_csrf_token()
        self.assertRegex(data["token"], r"^[0-9a-f]{64}$")
        self.assertEqual(parse_csrf_cookie(json.dumps(data)), data)

    def test_tampered_signature(self):
        data = generate_csrf_token()
        data["signature"] = sign_token("something else")
        self.assertIsNone(parse_csrf_cookie(json.dumps(data)))

    def test_expired_token(self):
        data = generate_csrf_token()
        data["expiresAt"] = int((time.time() - 1) * 1000)
        self.assertIsNone(parse_csrf_cookie(json.dumps(data)))

    def test_malformed_cookie(self):
        self.assertIsNone(parse_csrf_cookie("not json"))
        self.assertIsNone(parse_csrf_cookie(json.dumps(["a", "b"])))
        self.assertIsNone(parse_csrf_cookie(json.dumps({"token": "abc"})))


@override_settings(CSRF_PROTECTION_ENABLED=True)
class SignedCsrfMiddlewareTest(APITestCase):
    def setUp(self):
        self.student, self.session = create_test_enrolled_student()
        authenticate(self.client, self.student.user)
        self.url = reverse("student-session-switch")

    def issue_token(self):
        self.client.get("/api/health")
        return self.client.cookies[settings.CSRF_CLIENT_COOKIE_NAME].value

    def test_get_issues_both_cookies(self):
        response = self.client.get("/api/health")
        signed = response.cookies[settings.CSRF_TOKEN_COOKIE_NAME]
        readable = response.cookies[settings.CSRF_CLIENT_COOKIE_NAME]
        self.assertTrue(signed["httponly"])
        self.assertFalse(readable["httponly"])
        self.assertEqual(signed["samesite"], "Strict")

    def test_existing_valid_cookie_is_reused(self):
        token = self.issue_token()
        response = self.client.get("/api/health")
        self.assertNotIn(settings.CSRF_TOKEN_COOKIE_NAME, response.cookies)
        self.assertEqual(self.client.cookies[settings.CSRF_CLIENT_COOKIE_NAME].value, token)

    def test_missing_cookie(self):
        response = self.client.post(self.url, {"session_id": self.session.pk})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "CSRF_TOKEN_MISSING")

    def test_invalid_cookie(self):
        self.client.cookies[settings.CSRF_TOKEN_COOKIE_NAME] = "garbage"
        response = self.client.post(self.url, {"session_id": self.session.pk})
        self.assertEqual(response.json()["error"]["code"], "CSRF_TOKEN_INVALID")

    def test_missing_header(self):
        self.issue_token()
        response = self.client.post(self.url, {"session_id": self.session.pk})
        self.assertEqual(response.json()["error"]["code"], "CSRF_TOKEN_NOT_PROVIDED")

    def test_malformed_header(self):
        self.issue_token()
        response = self.client.post(
            self.url, {"session_id": self.session.pk}, HTTP_X_CSRF_TOKEN="xyz"
        )
        self.assertEqual(response.json()["error"]["code"], "CSRF_TOKEN_INVALID_FORMAT")

    def test_mismatched_header(self):
        self.issue_token()
        response = self.client.post(
            self.url, {"session_id": self.session.pk}, HTTP_X_CSRF_TOKEN="a" * 64
        )
        self.assertEqual(response.json()["error"]["code"], "CSRF_TOKEN_MISMATCH")

    def test_matching_header_passes(self):
        token = self.issue_token()
        response = self.client.post(
            self.url, {"session_id": self.session.pk}, HTTP_X_CSRF_TOKEN=token
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_exempt_route_needs_no_token(self):
        response = self.client.post(
            reverse("login"), {"identifier": "nobody", "password": "x"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_csrf_view_returns_issued_token(self):
        response = self.client.get(reverse("csrf-token"), HTTP_ORIGIN=settings.APP_URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data["token"],
            response.cookies[settings.CSRF_CLIENT_COOKIE_NAME].value,
        )
        self.assertEqual(response.data["header_name"], "X-CSRF-Token")

    def test_csrf_view_refuses_foreign_origin(self):
        response = self.client.get(
            reverse("csrf-token"), HTTP_ORIGIN="https://evil.example.com"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "INVALID_ORIGIN")
