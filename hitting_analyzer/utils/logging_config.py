"""Logging setup for the command line.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are attached here, once, by the entry point.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.Logger:
    """Configure the root logger with a stderr handler and an optional file.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...).
        log_file: Also write to this file when given.
        log_format: Record format.
        date_format: Timestamp format.

    Returns:
        The root logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(log_format, date_format)

    # stdout carries the JSON result, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    root_logger.debug("Logging configured: level=%s, file=%s", level, log_file)
    return root_logger
