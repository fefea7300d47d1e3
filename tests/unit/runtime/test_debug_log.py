"""Tests for opt-in debug logging."""

from __future__ import annotations

import logging
import logging.handlers
import tempfile
import unittest
from pathlib import Path

from fzfcd import debug_log


class DebugLogTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger(debug_log.LOGGER_NAME)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    def test_disabled_by_default(self) -> None:
        self.assertFalse(debug_log.debug_log_enabled({}))
        logger = debug_log.configure_logging({})
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)

    def test_truthy_values_enable_logging(self) -> None:
        for value in ("1", "true", "YES", " on "):
            self.assertTrue(debug_log.debug_log_enabled({debug_log.DEBUG_LOG_ENV: value}), msg=value)
        self.assertFalse(debug_log.debug_log_enabled({debug_log.DEBUG_LOG_ENV: "0"}))

    def test_enabled_logging_writes_rotating_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "logs" / "debug.log"
            env = {debug_log.DEBUG_LOG_ENV: "1", debug_log.DEBUG_LOG_FILE_ENV: str(path)}

            logger = debug_log.configure_logging(env)
            logging.getLogger("fzfcd.widget").debug("hello %s", "world")
            for handler in logger.handlers:
                handler.flush()

            self.assertEqual(debug_log.debug_log_path(env), path)
            self.assertIsInstance(logger.handlers[0], logging.handlers.RotatingFileHandler)
            self.assertIn("fzfcd.widget: hello world", path.read_text(encoding="utf-8"))

    def test_reconfiguring_replaces_handlers(self) -> None:
        debug_log.configure_logging({})
        logger = debug_log.configure_logging({})
        self.assertEqual(len(logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
