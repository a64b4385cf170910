"""Tests for persisted JSON preferences."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazytree.navigation import TraversalMode
from lazytree.runtime import config


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def write_raw(self, text: str) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(text, encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_settings(), config.TreeSettings())

    def test_malformed_or_non_object_config_is_ignored(self) -> None:
        self.write_raw("{not json")
        self.assertEqual(config.load_config(), {})

        self.write_raw("[1, 2]")
        self.assertEqual(config.load_config(), {})

    def test_navigation_mode_round_trips_and_keeps_other_keys(self) -> None:
        self.write_raw(json.dumps({"theme": "ocean"}))
        config.save_navigation_mode(TraversalMode.HIERARCHICAL)

        self.assertIs(config.load_navigation_mode(), TraversalMode.HIERARCHICAL)
        data = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(data, {"theme": "ocean", "navigation_mode": "hierarchical"})

    def test_unknown_navigation_mode_falls_back_to_linear(self) -> None:
        self.write_raw(json.dumps({"navigation_mode": "spiral"}))

        self.assertIs(config.load_navigation_mode(), TraversalMode.LINEAR)

    def test_booleans_must_be_json_booleans(self) -> None:
        self.write_raw(
            json.dumps({"show_mini_info": "no", "confirm_delete": False, "xtree_mode": True, "show_hidden": 1})
        )

        settings = config.load_settings()

        self.assertTrue(settings.show_mini_info)
        self.assertFalse(settings.confirm_delete)
        self.assertTrue(settings.xtree_mode)
        self.assertFalse(settings.show_hidden)

    def test_show_hidden_and_theme_are_read_from_file(self) -> None:
        self.write_raw(json.dumps({"show_hidden": True, "theme": "  plain "}))
        self.assertTrue(config.load_show_hidden())
        self.assertEqual(config.load_theme_name(), "plain")

        self.write_raw(json.dumps({"theme": "   "}))
        self.assertIsNone(config.load_theme_name())

    def test_save_failure_is_swallowed(self) -> None:
        blocker = Path(self._tmp.name) / "nested"
        blocker.write_text("file, not a directory", encoding="utf-8")

        config.save_navigation_mode(TraversalMode.HIERARCHICAL)

        self.assertIs(config.load_navigation_mode(), TraversalMode.LINEAR)


if __name__ == "__main__":
    unittest.main()
