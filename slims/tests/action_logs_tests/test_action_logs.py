from datetime import timedelta
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIRequestFactory, APITestCase
from slims.action_logs.models.action_log import ActionCategory, ActionLog
from slims.action_logs.tasks import cleanup_old_action_logs
from slims.action_logs.utils.action_log import SYSTEM_USER_TAG, log_action
from slims.tests.test_helpers import (
    AdminProfileFactory,
    SiwesSessionFactory,
    StudentFactory,
    authenticate,
    create_test_supervised_student,
    get_test_week,
)
from slims.users.models.base_user import User


@override_settings(ACTION_LOG_ENABLED=True)
class LogActionTest(TestCase):
    def setUp(self):
        self.user = AdminProfileFactory().user

    def test_records_user_object_and_request(self):
        session = SiwesSessionFactory()
        request = APIRequestFactory().post(
            "/api/admin/sessions",
            HTTP_USER_AGENT="Mozilla/5.0",
            HTTP_X_FORWARDED_FOR="10.0.0.7, 172.16.0.1",
        )
        log = log_action(
            self.user,
            "Created session",
            ActionCategory.CREATE,
            session,
            {"start": session.start_date, "session": session},
            request,
        )

        self.assertEqual(log.user_tag, self.user.user_tag)
        self.assertEqual(log.user_type, User.ADMIN)
        self.assertEqual(log.ip_address, "10.0.0.7")
        self.assertEqual(log.user_agent, "Mozilla/5.0")
        self.assertEqual(log.object_id, session.pk)
        self.assertEqual(log.affected_model, "SiwesSession")
        self.assertEqual(log.metadata["start"], session.start_date.isoformat())
        self.assertEqual(log.metadata["session"]["id"], session.pk)

    def test_system_actions(self):
        log = log_action(None, "Nightly cleanup", ActionCategory.SYSTEM)
        self.assertEqual(log.user_tag, SYSTEM_USER_TAG)
        self.assertEqual(log.user_type, "")
        self.assertEqual(log.metadata, {})

    def test_unsaved_user_is_ignored(self):
        self.assertIsNone(log_action(User(username="ghost"), "Nothing", ActionCategory.OTHER))
        self.assertFalse(ActionLog.objects.exists())

    @override_settings(ACTION_LOG_ENABLED=False)
    def test_disabled(self):
        self.assertIsNone(log_action(self.user, "Nothing", ActionCategory.OTHER))
        self.assertFalse(ActionLog.objects.exists())


@override_settings(ACTION_LOG_ENABLED=True)
class ActionLogViewSetTest(APITestCase):
    def setUp(self):
        self.admin = AdminProfileFactory().user
        self.student = StudentFactory().user
        self.session = SiwesSessionFactory()
        log_action(self.admin, "Created session", ActionCategory.CREATE, self.session)
        log_action(self.student, "Updated monday entry", ActionCategory.UPDATE)
        log_action(None, "Expired review requests", ActionCategory.SYSTEM)
        authenticate(self.client, self.admin)

    def test_list_and_filter(self):
        response = self.client.get(reverse("action-log-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)

        response = self.client.get(reverse("action-log-list"), {"category": "UPDATE"})
        self.assertEqual(
            [log["action"] for log in response.data["results"]], ["Updated monday entry"]
        )

        response = self.client.get(reverse("action-log-list"), {"search": "session"})
        self.assertEqual(response.data["count"], 1)

    def test_admin_actions_through_the_api_are_logged(self):
        response = self.client.post(
            reverse("faculty-list"), {"name": "Agriculture", "code": "AGR"}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        log = ActionLog.objects.get(action__startswith="Created faculty")
        self.assertEqual(log.user, self.admin)
        self.assertEqual(log.category, ActionCategory.CREATE)

    def test_options(self):
        response = self.client.get(reverse("action-log-model-options"))
        self.assertEqual([o["value"] for o in response.data], ["siwessession"])

        response = self.client.get(reverse("action-log-category-options"))
        self.assertIn(["REVIEW", "Review"], [list(c) for c in response.data])

    def test_stats(self):
        response = self.client.get(reverse("action-log-stats"))
        self.assertEqual(response.data["total_activities"], 3)
        self.assertEqual(
            response.data["by_user_type"], {"ADMIN": 1, "STUDENT": 1, "SYSTEM": 1}
        )
        self.assertEqual(response.data["by_category"]["SYSTEM"], 1)

    def test_admins_only(self):
        self.client.cookies.clear()
        authenticate(self.client, self.student)
        response = self.client.get(reverse("action-log-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


@override_settings(ACTION_LOG_ENABLED=True)
class CleanupOldActionLogsTaskTest(TestCase):
    def test_deletes_only_old_logs(self):
        user = StudentFactory().user
        old = log_action(user, "Old", ActionCategory.LOGIN)
        recent = log_action(user, "Recent", ActionCategory.LOGIN)
        ActionLog.objects.filter(pk=old.pk).update(
            timestamp=timezone.now() - timedelta(days=400)
        )

        result = cleanup_old_action_logs()

        self.assertEqual(result, {"status": "success", "deleted_count": 1})
        self.assertEqual(list(ActionLog.objects.values_list("pk", flat=True)), [recent.pk])


@override_settings(ACTION_LOG_ENABLED=True)
class ActionLogMiddlewareTest(APITestCase):
    def setUp(self):
        self.admin = AdminProfileFactory().user
        authenticate(self.client, self.admin)

    def test_writes_without_a_view_record_are_recorded(self):
        url = reverse("notification-mark-all-as-read")
        response = self.client.post(url, HTTP_USER_AGENT="pytest-agent")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        log = ActionLog.objects.get(action=f"POST {url}")
        self.assertEqual(log.user, self.admin)
        self.assertEqual(log.category, ActionCategory.CREATE)
        self.assertEqual(log.metadata["status_code"], 200)
        self.assertEqual(log.user_agent, "pytest-agent")

    def test_view_recorded_writes_are_logged_once(self):
        response = self.client.post(reverse("organization-list"), {"name": "Initech"})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            list(ActionLog.objects.values_list("action", flat=True)),
            ["Created organization Initech"],
        )

    def test_supervisor_comment_is_logged_once(self):
        student, session, school_supervisor, _ = create_test_supervised_student()
        week = get_test_week(student, session)
        self.client.cookies.clear()
        authenticate(self.client, school_supervisor.user)

        response = self.client.post(
            reverse("school-supervisor-week-comments", args=[week.id]),
            {"comment": "Well documented"},
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        logs = ActionLog.objects.filter(user=school_supervisor.user)
        self.assertEqual(logs.count(), 1)
        self.assertEqual(logs.get().category, ActionCategory.REVIEW)

    def test_reads_and_failures_are_not_recorded(self):
        self.client.get(reverse("organization-list"))
        self.client.post(reverse("organization-list"), {"name": ""})
        self.assertFalse(ActionLog.objects.exists())
