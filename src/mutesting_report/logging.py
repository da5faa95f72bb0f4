"""Logging setup shared by all mutesting_report modules."""

from __future__ import annotations

import logging
import sys

_ROOT_LOGGER_NAME = "mutesting_report"
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.WARNING,
    format_string: str | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach a single handler to the package root logger.

    Only the first call has an effect; use ``reset_logging`` to start over.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)
    # Propagate so pytest's caplog sees our records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of the package root logger."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package root logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def reset_logging() -> None:
    """Drop the package handler so the next call reconfigures it."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
