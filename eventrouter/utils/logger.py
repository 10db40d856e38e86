"""
Logging setup for the event router command line.

Library modules only create module loggers; handlers are installed here,
once, by whoever owns the process.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "EVENTROUTER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def default_log_level() -> str:
    """
    Log level from EVENTROUTER_LOG_LEVEL, falling back to INFO when unset
    or not one of LOG_LEVELS.
    """
    level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Send log records to stderr at the given level.

    Existing root handlers are replaced so repeated calls do not
    duplicate output.
    """
    level_name = (level or default_log_level()).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    return logging.getLogger("eventrouter")
