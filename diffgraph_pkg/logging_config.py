"""Logging setup for DiffGraph.

All package loggers live under the ``diffgraph`` namespace so a single call to
``setup_logging`` controls them. Library code never configures handlers on
import; only entry points (CLI, Streamlit page) call ``setup_logging``.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "diffgraph"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``diffgraph``."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path; when given, records also go to this file

    Returns:
        The configured root package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Replace handlers from a previous call instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
