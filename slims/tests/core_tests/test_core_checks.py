from django.test import SimpleTestCase, override_settings
from slims.core.checks import check_csrf_secret, check_session_timing


class CsrfSecretCheckTest(SimpleTestCase):
    @override_settings(CSRF_SECRET="x" * 32)
    def test_long_secret_passes(self):
        self.assertEqual(check_csrf_secret(None), [])

    @override_settings(CSRF_SECRET="short", DEBUG=False)
    def test_short_secret_is_an_error_outside_debug(self):
        messages = check_csrf_secret(None)
        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0].id, "slims.E001")

    @override_settings(CSRF_SECRET="short", DEBUG=True)
    def test_short_secret_is_a_warning_in_debug(self):
        self.assertEqual(check_csrf_secret(None)[0].id, "slims.W001")


class SessionTimingCheckTest(SimpleTestCase):
    @override_settings(SESSION_EXPIRES_IN=3600, SESSION_UPDATE_AGE=600)
    def test_valid_timing(self):
        self.assertEqual(check_session_timing(None), [])

    @override_settings(SESSION_EXPIRES_IN=600, SESSION_UPDATE_AGE=3600)
    def test_update_age_longer_than_lifetime(self):
        self.assertEqual(check_session_timing(None)[0].id, "slims.W002")

    @override_settings(SESSION_EXPIRES_IN=0)
    def test_non_positive_lifetime(self):
        self.assertEqual(check_session_timing(None)[0].id, "slims.E002")
