"""
Logging utilities.

This module provides the application logger and the handler/formatter setup
shared by the compile and apply phases.
"""

import logging
import sys

LOG_FILE = "sysconfig-network.log"
DEFAULT_LOGGER_NAME = "sysconfig-network"


class LogFormatter(logging.Formatter):
    """Formatter with the application's default record layout."""

    # Default log format used by this formatter
    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)-8s - %(process)d - %(message)s - (%(pathname)s:%(lineno)d)->%(funcName)s"

    def __init__(self, fmt: str | None = None) -> None:
        """Initialize with default format if none provided."""
        if fmt is None:
            fmt = self.DEFAULT_FORMAT
        super().__init__(fmt)


def get_logging_level() -> int:
    """
    Get the logging level from settings.

    Returns:
        int: The logging level (defaults to INFO if not set or invalid).
    """
    # Import here to avoid circular dependency at module load time
    from sysconfig_network.settings import settings

    level = settings.LOGGING_LEVEL
    return getattr(logging, str(level).upper(), logging.INFO) if level else logging.INFO


def add_log_file_handler(logger: logging.Logger, filename: str) -> logging.FileHandler:
    """
    Add a file handler to the logger.

    Args:
        logger: The logger instance to add the handler to.
        filename: The path to the log file.

    Returns:
        logging.FileHandler: The created file handler.
    """
    fh = logging.FileHandler(filename)
    fh.setFormatter(LogFormatter())
    logger.addHandler(fh)
    return fh


def add_stream_handler(logger: logging.Logger) -> None:
    """
    Add a stderr stream handler to the logger.

    Args:
        logger: The logger instance to add the handler to.
    """
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(LogFormatter())
    logger.addHandler(ch)


# Export a module-level logger with a safe default name to avoid circular imports.
# Configuration should be done by calling configure_logging() after settings are ready.
log = logging.getLogger(DEFAULT_LOGGER_NAME)


def configure_logging() -> logging.Logger:
    """
    Configure logging after settings are available.

    This sets the logger name and level and attaches a stream handler, plus a
    file handler when LOG_TO_FILE is enabled. Importing settings here avoids
    circular imports at module load time.

    Returns:
        logging.Logger: The configured application logger.
    """
    # Import inside function to avoid circular dependency
    from sysconfig_network.settings import settings

    logger_name = settings.LOGGER_NAME or DEFAULT_LOGGER_NAME
    target_logger = logging.getLogger(logger_name)

    # Reset handlers to prevent duplicates on reconfiguration
    for handler in target_logger.handlers:
        handler.close()
    target_logger.handlers = []

    target_logger.setLevel(get_logging_level())

    if settings.LOG_TO_FILE:
        add_log_file_handler(target_logger, LOG_FILE)

    add_stream_handler(target_logger)

    # Ensure modules using `from ...logger import log` get the configured logger
    global log  # pylint: disable=global-statement
    log = target_logger
    return target_logger
