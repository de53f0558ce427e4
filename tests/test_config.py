"""Unit tests for settings loading."""

from __future__ import annotations

import logging
import os
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from addressbook.config import DATABASE_NAME, Settings, StoreConfig, get_store_config
from addressbook.logging_setup import configure_logging


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.DATABASE_VERSION, 1)
        self.assertEqual(settings.DATABASE_PATH.name, DATABASE_NAME)
        self.assertEqual(settings.LOG_LEVEL, "INFO")

    def test_environment_overrides(self):
        env = {
            "DATABASE_PATH": "/tmp/elsewhere/book.db",
            "DATABASE_VERSION": "4",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.DATABASE_PATH, Path("/tmp/elsewhere/book.db"))
        self.assertEqual(settings.DATABASE_VERSION, 4)
        self.assertEqual(settings.LOG_LEVEL, "DEBUG")

    def test_version_must_be_positive(self):
        with patch.dict(os.environ, {"DATABASE_VERSION": "0"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_store_config_from_settings(self):
        with patch.dict(os.environ, {"DATABASE_PATH": "/tmp/x.db", "DATABASE_VERSION": "2"}, clear=True):
            config = get_store_config(Settings(_env_file=None))
        self.assertEqual(config, StoreConfig(path=Path("/tmp/x.db"), version=2, busy_timeout=5.0))


class TestConfigureLogging(unittest.TestCase):
    def test_explicit_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("WARNING")
            self.assertEqual(root.level, logging.WARNING)
        finally:
            root.setLevel(previous)


if __name__ == "__main__":
    unittest.main()
