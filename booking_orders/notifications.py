"""Transient user notifications (toasts) raised by order operations."""

from typing import Protocol

import structlog

logger = structlog.get_logger()


class Notifier(Protocol):
    """Anything that can show a short success or error message."""

    def show_success(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes notifications to the structured log."""

    def show_success(self, message: str) -> None:
        logger.info("notify_success", message=message)

    def show_error(self, message: str) -> None:
        logger.warning("notify_error", message=message)
