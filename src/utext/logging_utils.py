"""Logging helpers for applications that want to see utext's log output."""
# src/utext/logging_utils.py

import logging
import sys
import time

LOGGER_NAME = "utext"


class ConsoleFormatter(logging.Formatter):
    """A compact console formatter tagged with the utext version."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the library version.

        Args:
            version: The utext version, included in every line.

        """
        super().__init__(
            fmt=f"%(asctime)s | utext - {version} | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt, ct) if datefmt else time.strftime(self.default_time_format, ct)
        microseconds = int((record.created - int(record.created)) * 1_000_000)
        return f"{s}.{microseconds:06d}Z"


def setup_logging(version: str, *, debug: bool = False) -> logging.Logger:
    """
    Attach a console handler to the ``utext`` logger.

    The library itself never configures handlers; this is for host
    applications and interactive sessions. Calling it again replaces the
    handler installed by the previous call.

    Args:
        version: The utext version, included in console logs.
        debug: If True, log at DEBUG level (pattern compilation, encoding
            changes). Otherwise only warnings and above are shown.

    Returns:
        The configured ``utext`` logger.

    """
    package_logger = logging.getLogger(LOGGER_NAME)
    if package_logger.handlers:
        package_logger.handlers.clear()

    level = logging.DEBUG if debug else logging.WARNING
    package_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter(version))
    package_logger.addHandler(console_handler)
    package_logger.propagate = False

    if debug:
        package_logger.debug("Debug logging enabled for %s", LOGGER_NAME)
    return package_logger
