"""User-visible feedback for item updates."""

from __future__ import annotations

import logging
from typing import Protocol

_LOGGER = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Receives fire-and-forget feedback messages."""

    def show_toast(self, message: str) -> None:
        """Show an informational message."""

    def show_error_toast(self, message: str) -> None:
        """Show an error message."""


class LoggingNotificationSink:
    """Sink that writes feedback to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the sink."""
        self._logger = logger or _LOGGER

    def show_toast(self, message: str) -> None:
        """Log an informational message."""
        self._logger.info(message)

    def show_error_toast(self, message: str) -> None:
        """Log an error message."""
        self._logger.error(message)


class CollectingNotificationSink:
    """Sink that keeps messages in memory, e.g. for a UI to poll."""

    def __init__(self) -> None:
        """Initialize the sink."""
        self.messages: list[str] = []
        self.errors: list[str] = []

    def show_toast(self, message: str) -> None:
        """Store an informational message."""
        self.messages.append(message)

    def show_error_toast(self, message: str) -> None:
        """Store an error message."""
        self.errors.append(message)
