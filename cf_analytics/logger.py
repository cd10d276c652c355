"""Logging setup for the analytics client."""

import logging
import os
from typing import Optional

LOGGER_NAME = "cf-analytics"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return logging.getLogger(LOGGER_NAME)


def _level_from_env() -> int:
    env_level = os.environ.get("CF_ANALYTICS_LOG_LEVEL", "").upper()
    if env_level in _LEVELS:
        return _LEVELS[env_level]
    if os.environ.get("CF_ANALYTICS_DEBUG", "").lower() == "true":
        return logging.INFO
    return logging.WARNING


def configure_logging() -> None:
    """Set up the package logger at import time.

    Only the cf-analytics logger is touched; the posthog logger belongs to
    the host application unless set_log_level() is called.
    """
    get_logger().setLevel(_level_from_env())


def set_log_level(level: Optional[int] = None) -> None:
    """Set the logging level for the analytics and posthog loggers.

    When no level is given, CF_ANALYTICS_LOG_LEVEL is consulted. If that is
    unset or unrecognised the level is INFO while CF_ANALYTICS_DEBUG is
    "true" and WARNING otherwise, so debug lines only show up on request.

    Args:
        level: The logging level to set (overrides environment variables if provided)
    """
    if level is None:
        level = _level_from_env()

    for logger_name in (LOGGER_NAME, "posthog"):
        logging.getLogger(logger_name).setLevel(level)
