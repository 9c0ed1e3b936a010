from django.conf import settings
from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from slims.tests.test_helpers import (
    TEST_PASSWORD,
    IndustrySupervisorFactory,
    StudentFactory,
    UserFactory,
    authenticate,
)
from slims.users.models.base_user import User
from slims.users.models.session import SessionToken
from slims.users.models.verification import MagicLinkToken


class LoginViewTest(APITestCase):
    def setUp(self):
        self.student = StudentFactory()
        self.user = self.student.user
        self.url = reverse("login")

    def test_login_with_email_sets_session_cookie(self):
        response = self.client.post(
            self.url, {"identifier": self.user.email, "password": TEST_PASSWORD}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], self.user.id)
        self.assertEqual(response.data["user"]["profile"]["matric_number"], self.student.matric_number)

        cookie = response.cookies[settings.SESSION_TOKEN_COOKIE_NAME]
        self.assertTrue(cookie["httponly"])
        self.assertTrue(SessionToken.objects.filter(token=cookie.value, user=self.user).exists())

    def test_login_with_username_is_case_insensitive(self):
        response = self.client.post(
            self.url, {"identifier": self.user.username.upper(), "password": TEST_PASSWORD}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password(self):
        response = self.client.post(
            self.url, {"identifier": self.user.email, "password": "wrong-password"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertFalse(SessionToken.objects.exists())

    def test_user_type_mismatch_is_rejected(self):
        response = self.client.post(
            self.url,
            {
                "identifier": self.user.email,
                "password": TEST_PASSWORD,
                "user_type": User.ADMIN,
            },
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_industry_supervisor_cannot_use_password_login(self):
        supervisor = IndustrySupervisorFactory()
        response = self.client.post(
            self.url, {"identifier": supervisor.user.email, "password": TEST_PASSWORD}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_user_cannot_login(self):
        self.user.is_active = False
        self.user.save()
        response = self.client.post(
            self.url, {"identifier": self.user.email, "password": TEST_PASSWORD}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_response_is_enveloped(self):
        response = self.client.post(
            self.url, {"identifier": self.user.email, "password": TEST_PASSWORD}
        )
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["user"]["email"], self.user.email)
        self.assertIn("timestamp", body["meta"])


class MeAndLogoutViewTest(APITestCase):
    def setUp(self):
        self.user = StudentFactory().user

    def test_me_requires_authentication(self):
        response = self.client.get(reverse("me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.json()["success"])

    def test_me_with_session_cookie(self):
        authenticate(self.client, self.user)
        response = self.client.get(reverse("me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], self.user.email)
        self.assertEqual(response.data["user_type"], User.STUDENT)

    def test_unknown_session_cookie_is_rejected(self):
        self.client.cookies[settings.SESSION_TOKEN_COOKIE_NAME] = "not-a-real-token"
        response = self.client.get(reverse("me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "SESSION_INVALID")

    def test_logout_revokes_session(self):
        session = authenticate(self.client, self.user)
        response = self.client.post(reverse("logout"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(SessionToken.objects.filter(pk=session.pk).exists())

        self.client.cookies[settings.SESSION_TOKEN_COOKIE_NAME] = session.token
        response = self.client.get(reverse("me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ChangePasswordViewTest(APITestCase):
    def setUp(self):
        self.user = StudentFactory().user
        self.other_session = authenticate(self.client, self.user)
        self.current_session = authenticate(self.client, self.user)
        self.url = reverse("change-password")

    def test_change_password_signs_out_other_devices(self):
        response = self.client.post(
            self.url,
            {
                "current_password": TEST_PASSWORD,
                "new_password": "a-much-better-password",
                "confirm_password": "a-much-better-password",
            },
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("a-much-better-password"))
        self.assertFalse(SessionToken.objects.filter(pk=self.other_session.pk).exists())
        self.assertTrue(SessionToken.objects.filter(pk=self.current_session.pk).exists())

    def test_wrong_current_password(self):
        response = self.client.post(
            self.url,
            {
                "current_password": "nope",
                "new_password": "a-much-better-password",
                "confirm_password": "a-much-better-password",
            },
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("current_password", response.data["details"])

    def test_mismatched_confirmation(self):
        response = self.client.post(
            self.url,
            {
                "current_password": TEST_PASSWORD,
                "new_password": "a-much-better-password",
                "confirm_password": "something-else-entirely",
            },
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("confirm_password", response.data["details"])


class MagicLinkViewTest(APITestCase):
    def setUp(self):
        self.supervisor = IndustrySupervisorFactory()
        self.user = self.supervisor.user

    def test_request_for_industry_supervisor_sends_link(self):
        response = self.client.post(reverse("magic-link"), {"email": self.user.email.upper()})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        magic_link = MagicLinkToken.objects.get(user=self.user)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(magic_link.token, mail.outbox[0].body)
        self.assertEqual(mail.outbox[0].to, [self.user.email])

    def test_unknown_email_gets_the_same_answer(self):
        response = self.client.post(reverse("magic-link"), {"email": "nobody@example.com"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(MagicLinkToken.objects.exists())
        self.assertEqual(len(mail.outbox), 0)

    def test_students_do_not_get_magic_links(self):
        student_user = UserFactory(user_type=User.STUDENT)
        self.client.post(reverse("magic-link"), {"email": student_user.email})
        self.assertFalse(MagicLinkToken.objects.filter(user=student_user).exists())

    def test_verify_signs_in_once(self):
        magic_link = MagicLinkToken.objects.create(user=self.user)
        url = reverse("magic-link-verify")

        response = self.client.post(url, {"token": magic_link.token})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(settings.SESSION_TOKEN_COOKIE_NAME, response.cookies)
        magic_link.refresh_from_db()
        self.user.refresh_from_db()
        self.assertIsNotNone(magic_link.used_at)
        self.assertTrue(self.user.email_verified)

        response = self.client.post(url, {"token": magic_link.token})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_expired_link_is_rejected(self):
        from datetime import timedelta
        from django.utils import timezone

        magic_link = MagicLinkToken.objects.create(user=self.user)
        MagicLinkToken.objects.filter(pk=magic_link.pk).update(
            expires_at=timezone.now() - timedelta(minutes=1)
        )
        response = self.client.post(reverse("magic-link-verify"), {"token": magic_link.token})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
