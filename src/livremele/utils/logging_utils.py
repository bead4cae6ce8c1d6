"""
Logging utilities for the command-line front end.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "livremele"


class ConsoleLogHandler(logging.StreamHandler):
    """
    A stream handler that prints bare messages for INFO/DEBUG and
    prefixes warnings and errors with their level.
    """

    def __init__(self, stream: Optional[TextIO] = None, level: int = logging.INFO):
        super().__init__(stream or sys.stderr)
        self.setLevel(level)
        self.setFormatter(logging.Formatter("%(message)s"))

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {message}"
        return message


def verbosity_to_level(verbosity: int) -> int:
    """0 -> WARNING, 1 -> INFO, 2+ -> DEBUG."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0, stream: Optional[TextIO] = None) -> ConsoleLogHandler:
    """
    Attach a ConsoleLogHandler to the package logger.

    Args:
        verbosity: Count of -v flags
        stream: Output stream (stderr by default)

    Returns:
        The attached handler (for later removal).
    """
    level = verbosity_to_level(verbosity)
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = ConsoleLogHandler(stream, level)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def detach_handler(handler: logging.Handler) -> None:
    """Remove a handler attached by configure_logging()."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
