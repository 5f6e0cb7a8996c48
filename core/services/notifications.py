"""Notification Service - user-facing toast messages.

The cart never raises for recoverable conditions; it reports them through a
Notifier instead. The UI layer plugs in whatever renders toasts.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.logging import get_logger

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    """Toast severity."""
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str


class Notifier:
    """Base notifier. Subclasses implement notify()."""

    def notify(self, level: NotificationLevel, message: str) -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self.notify(NotificationLevel.SUCCESS, message)

    def info(self, message: str) -> None:
        self.notify(NotificationLevel.INFO, message)

    def error(self, message: str) -> None:
        self.notify(NotificationLevel.ERROR, message)


class LoggingNotifier(Notifier):
    """Default notifier: writes toasts to the application log."""

    def notify(self, level: NotificationLevel, message: str) -> None:
        if level == NotificationLevel.ERROR:
            logger.warning(f"[toast:{level.value}] {message}")
        else:
            logger.info(f"[toast:{level.value}] {message}")


class RecordingNotifier(Notifier):
    """Keeps every notification in memory (tests, server-rendered flashes)."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def messages(self, level: Optional[NotificationLevel] = None) -> List[str]:
        """Messages, optionally filtered by level, oldest first."""
        return [
            n.message for n in self.notifications
            if level is None or n.level == level
        ]

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()
