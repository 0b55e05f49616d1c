"""Tests that validate important runtime settings."""

from django.conf import settings
from django.test import SimpleTestCase

from tams.services.inspections import repair_threshold


class SessionSettingsTests(SimpleTestCase):
    """Ensure the session backend stays cookie-based by default."""

    def test_default_session_engine_is_cookie_based(self):
        self.assertEqual(
            settings.SESSION_ENGINE,
            'django.contrib.sessions.backends.signed_cookies',
        )


class ConditionSettingsTests(SimpleTestCase):
    def test_repair_threshold_is_read_from_settings(self):
        with self.settings(TAMS_REPAIR_THRESHOLD="45.5"):
            self.assertEqual(str(repair_threshold()), "45.5")

    def test_tams_logger_is_configured(self):
        self.assertIn("tams", settings.LOGGING["loggers"])
