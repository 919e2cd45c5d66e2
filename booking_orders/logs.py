"""Logging setup shared by the store, client and notifier."""

import logging
import os
from typing import Optional, Union

import structlog

LOG_LEVEL_ENV = "ORDERS_LOG_LEVEL"


def resolve_level(level: Union[int, str, None] = None) -> int:
    """Resolve a numeric log level from an int, a level name or the environment."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        return logging.INFO
    return resolved


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure structlog with JSON rendering and ISO timestamps."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
