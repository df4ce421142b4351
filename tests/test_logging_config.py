"""Unit tests for pointsboard.core.logging_config."""

import logging
import time
import unittest
from unittest.mock import MagicMock, patch

from pointsboard.core.logging_config import LOG_DATEFMT, configure_logging


class TestConfigureLogging(unittest.TestCase):
    """Timestamps carry a Z suffix, so they are rendered in UTC."""

    def setUp(self) -> None:
        original = logging.Formatter.converter
        self.addCleanup(setattr, logging.Formatter, "converter", original)

    def _settings(self, debug: bool = False, level: str = "INFO") -> MagicMock:
        settings = MagicMock()
        settings.DEBUG = debug
        settings.LOG_LEVEL = level
        return settings

    def test_timestamps_are_utc(self) -> None:
        with patch("logging.basicConfig"):
            configure_logging(self._settings())
        self.assertIs(logging.Formatter.converter, time.gmtime)
        self.assertTrue(LOG_DATEFMT.endswith("Z"))

        record = logging.makeLogRecord({"created": 0.0, "msecs": 0.0})
        formatter = logging.Formatter("%(asctime)s", datefmt=LOG_DATEFMT)
        self.assertEqual(formatter.format(record), "1970-01-01T00:00:00Z")

    def test_level_from_settings(self) -> None:
        with patch("logging.basicConfig") as basic:
            configure_logging(self._settings(level="WARNING"))
        self.assertEqual(basic.call_args.kwargs["level"], logging.WARNING)

    def test_debug_forces_debug_level(self) -> None:
        with patch("logging.basicConfig") as basic:
            configure_logging(self._settings(debug=True, level="ERROR"))
        self.assertEqual(basic.call_args.kwargs["level"], logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
