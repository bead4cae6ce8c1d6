"""
Tests for console logging setup.
"""

import io
import logging

import pytest

from livremele.utils.logging_utils import (
    PACKAGE_LOGGER,
    configure_logging,
    detach_handler,
    verbosity_to_level,
)


class TestLoggingUtils:
    """Tests for configure_logging() and ConsoleLogHandler."""

    @pytest.mark.parametrize(
        "verbosity,level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_verbosity_when_counted_then_level(self, verbosity, level):
        assert verbosity_to_level(verbosity) == level

    def test_configure_when_info_then_warnings_prefixed(self):
        stream = io.StringIO()
        handler = configure_logging(1, stream)
        try:
            logger = logging.getLogger(f"{PACKAGE_LOGGER}.ingest.test")
            logger.debug("hidden detail")
            logger.info("Collected 3 files")
            logger.warning("Skipping asset logo.png")
        finally:
            detach_handler(handler)

        assert stream.getvalue().splitlines() == [
            "Collected 3 files",
            "WARNING: Skipping asset logo.png",
        ]

    def test_detach_when_called_then_logger_restored(self):
        handler = configure_logging(2, io.StringIO())

        detach_handler(handler)

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert handler not in package_logger.handlers
        assert package_logger.level == logging.NOTSET
