"""Tests for config persistence and input sanitization.

Theme names round-trip through the JSON file; panel preferences only
accept explicit booleans, and malformed files read as defaults.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymounts import config
from lazymounts.config import Preferences


class ConfigBehaviorTests(unittest.TestCase):
    def test_theme_name_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazymounts.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_preferences(), Preferences())
                config.save_theme_name("  ocean ")
                self.assertEqual(config.load_preferences().theme, "ocean")
                self.assertEqual(config.load_config(), {"theme": "ocean"})

    def test_blank_theme_name_is_not_saved(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazymounts.config.CONFIG_PATH", config_path):
                config.save_theme_name("   ")
                self.assertFalse(config_path.exists())

    def test_saving_theme_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazymounts.config.CONFIG_PATH", config_path):
                config.save_config({"disks_only": True})
                config.save_theme_name("default")
                self.assertEqual(config.load_config(), {"disks_only": True, "theme": "default"})
                self.assertEqual(
                    config.load_preferences(),
                    Preferences(theme="default", disks_only=True),
                )

    def test_boolean_preferences_require_real_booleans(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazymounts.config.CONFIG_PATH", config_path):
                config.save_config({"show_selection_mark": "yes", "disks_only": 1})
                self.assertEqual(config.load_preferences(), Preferences())

                config.save_config({"show_selection_mark": True})
                self.assertTrue(config.load_preferences().show_selection_mark)

    def test_malformed_or_non_object_config_reads_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazymounts.config.CONFIG_PATH", config_path):
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text('{"theme": 7}', encoding="utf-8")
                self.assertIsNone(config.load_preferences().theme)


if __name__ == "__main__":
    unittest.main()
