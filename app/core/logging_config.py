"""Logging configuration for the image description API."""

import logging
import sys

# Track if logging has been set up to prevent duplicate handlers
_logging_configured = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure console logging on the root logger.

    Args:
        level: Logging level name (e.g. "INFO", "DEBUG")

    Returns:
        Configured root logger
    """
    global _logging_configured

    root_logger = logging.getLogger()

    # Prevent adding duplicate handlers on repeated calls
    if _logging_configured:
        return root_logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler(stream=sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger.setLevel(level.upper())
    root_logger.addHandler(console_handler)

    _logging_configured = True
    return root_logger
