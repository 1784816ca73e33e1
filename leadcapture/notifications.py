"""
Notification sinks.

The workflow reports outcomes through any object with a
`notify(Notification)` method. Delivery is fire-and-forget.
"""

import logging
from typing import List, Protocol

from leadcapture.models import Notification, NotificationKind


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the log (errors for destructive ones)."""

    def __init__(self, name: str = "leadcapture.toast"):
        self._logger = logging.getLogger(name)

    def notify(self, notification: Notification) -> None:
        if notification.kind == NotificationKind.DESTRUCTIVE:
            self._logger.error(f"❌ {notification.title}: {notification.description}")
        else:
            self._logger.info(f"✅ {notification.title}: {notification.description}")


class NotificationLog:
    """Keeps every notification in order (history panels, tests)."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def titles(self) -> List[str]:
        return [n.title for n in self.notifications]

    @property
    def errors(self) -> List[Notification]:
        return [n for n in self.notifications if n.kind == NotificationKind.DESTRUCTIVE]
