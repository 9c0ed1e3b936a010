import os
from django.apps import apps
from django.db.migrations.loader import MigrationLoader
from django.test import SimpleTestCase

PROJECT_APP_LABELS = [
    "core",
    "users",
    "institutions",
    "siwes_sessions",
    "logbook",
    "dashboards",
    "action_logs",
    "notifications",
]

MIGRATED_APP_LABELS = [
    "users",
    "institutions",
    "siwes_sessions",
    "logbook",
    "action_logs",
    "notifications",
]


class ProjectAppsTest(SimpleTestCase):
    def test_apps_resolve_to_their_directories(self):
        for label in PROJECT_APP_LABELS:
            with self.subTest(label=label):
                app_config = apps.get_app_config(label)
                self.assertEqual(app_config.name, f"slims.{label}")
                self.assertTrue(os.path.isfile(os.path.join(app_config.path, "apps.py")))

    def test_apps_with_models_keep_their_migrations(self):
        loader = MigrationLoader(None, ignore_no_migrations=True)
        for label in MIGRATED_APP_LABELS:
            with self.subTest(label=label):
                self.assertIn(label, loader.migrated_apps)
                self.assertIn((label, "0001_initial"), loader.disk_migrations)
