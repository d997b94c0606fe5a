"""
User-facing notifications.

The core reports outcomes through a Notifier and never waits on it.
The Streamlit front-end supplies a toast-based implementation.
"""

from enum import Enum
from typing import List, Protocol, Tuple

from .logger import get_logger

logger = get_logger(__name__)


class NotificationKind(Enum):
    """Severity of a notification."""
    INFO = "info"
    ERROR = "error"


class Notifier(Protocol):
    """Fire-and-forget notification sink."""

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        ...


class LoggingNotifier:
    """Notifier that writes to the log; the default when no UI is attached."""

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        if kind is NotificationKind.ERROR:
            logger.error(f"{title}: {message}")
        else:
            logger.info(f"{title}: {message}")


class RecordingNotifier:
    """Notifier that keeps every notification, for tests and batch use."""

    def __init__(self):
        self.notifications: List[Tuple[NotificationKind, str, str]] = []

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        self.notifications.append((kind, title, message))

    @property
    def titles(self) -> List[str]:
        return [title for _, title, _ in self.notifications]

    def errors(self) -> List[Tuple[NotificationKind, str, str]]:
        return [n for n in self.notifications if n[0] is NotificationKind.ERROR]
