"""Logging configuration for bucket-index."""

import logging
import sys

LOGGER_NAME = "bucket_index"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Set up service logging to stderr.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG"

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    # Remove any existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.propagate = False

    return logger
