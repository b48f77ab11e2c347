"""
Test suite for sync configuration.
"""
import os
import unittest
from unittest import mock

from chart_sync.application.settings import DEFAULT_SOURCE, SyncSettings


class TestSyncSettings(unittest.TestCase):

    def test_defaults(self):
        settings = SyncSettings()
        self.assertEqual(settings.source, DEFAULT_SOURCE)
        self.assertEqual(settings.heading, "## All Language")
        self.assertEqual(settings.head_count, 50)
        self.assertEqual(settings.description_limit, 100)
        self.assertEqual(settings.date_style, "short")
        self.assertEqual(settings.ignored_paths, ("sync.log",))
        self.assertIsNone(settings.log_file)
        self.assertTrue(settings.commit)
        self.assertFalse(settings.source_is_url)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_from_env_defaults(self):
        self.assertEqual(SyncSettings.from_env(), SyncSettings())

    @mock.patch.dict(
        os.environ, {
            "CLASSIFIED_DATA_PATH": "https://raw.githubusercontent.com/o/r/main/All-Language.md",
            "README_PATH": "docs/README.md",
            "HEAD_COUNT": "25",
            "DATE_STYLE": "iso",
            "SYNC_LOG_FILE": "run.log",
            "SYNC_REPO_ROOT": "/tmp/charts",
        },
        clear=True)
    def test_from_env(self):
        settings = SyncSettings.from_env()
        self.assertTrue(settings.source_is_url)
        self.assertEqual(settings.readme_path, "docs/README.md")
        self.assertEqual(settings.head_count, 25)
        self.assertEqual(settings.date_style, "iso")
        self.assertEqual(settings.log_file, "run.log")
        self.assertEqual(settings.ignored_paths, ("sync.log",))
        self.assertEqual(settings.resolve("README.md"), os.path.join("/tmp/charts", "README.md"))

    @mock.patch.dict(os.environ, {"SYNC_IGNORED_PATHS": "sync.log, CLAUDE.md,,"}, clear=True)
    def test_ignored_paths_list(self):
        self.assertEqual(SyncSettings.from_env().ignored_paths, ("sync.log", "CLAUDE.md"))

    def test_log_file_inside_repository_is_ignored(self):
        settings = SyncSettings(repo_root="/tmp/charts", log_file="/tmp/charts/logs/run.log")
        self.assertEqual(settings.status_ignored_paths(), ("sync.log", "logs/run.log"))

    def test_log_file_outside_repository(self):
        settings = SyncSettings(repo_root="/tmp/charts", log_file="/var/log/run.log")
        self.assertEqual(settings.status_ignored_paths(), ("sync.log",))
        self.assertEqual(SyncSettings(log_file="sync.log").status_ignored_paths(), ("sync.log",))

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            SyncSettings(date_style="long")
        with self.assertRaises(ValueError):
            SyncSettings(head_count=0)
        with self.assertRaises(ValueError):
            SyncSettings(description_limit=0)

    def test_overrides_skip_none(self):
        settings = SyncSettings().with_overrides(source="chart.md", readme_path=None, commit=False)
        self.assertEqual(settings.source, "chart.md")
        self.assertEqual(settings.readme_path, "README.md")
        self.assertFalse(settings.commit)


if __name__ == "__main__":
    unittest.main()
