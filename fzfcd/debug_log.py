"""Opt-in debug logging.

The widget's stdout is evaluated by the shell, so nothing may be logged there.
``FZFCD_DEBUG_LOG=1`` sends verbose records to a rotating file instead.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_log_dir

DEBUG_LOG_ENV = "FZFCD_DEBUG_LOG"
DEBUG_LOG_FILE_ENV = "FZFCD_DEBUG_LOG_FILE"
LOGGER_NAME = "fzfcd"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def debug_log_enabled(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return str(env.get(DEBUG_LOG_ENV, "0")).strip().lower() in ("1", "true", "yes", "on")


def debug_log_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(DEBUG_LOG_FILE_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_log_dir(LOGGER_NAME, appauthor=False)) / "debug.log"


def configure_logging(environ: Mapping[str, str] | None = None) -> logging.Logger:
    """Attach handlers to the package logger once per process.

    Without the debug toggle a ``NullHandler`` keeps the logger silent. A log
    file that cannot be created also degrades to silence.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = []
    logger.propagate = False
    if not debug_log_enabled(environ):
        logger.addHandler(logging.NullHandler())
        return logger

    path = debug_log_path(environ)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        logger.addHandler(logging.NullHandler())
        return logger
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.debug("debug logging enabled (%s)", path)
    return logger
