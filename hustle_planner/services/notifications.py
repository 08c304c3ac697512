"""
Notification dispatch.

Showing an OS notification (and asking the user for permission to) is
an external capability. The core only calls Notifier.notify().
"""

from abc import ABC, abstractmethod

import structlog


class Notifier(ABC):
    """Something that can show a notification to the user."""

    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        pass


class LoggingNotifier(Notifier):
    """Default notifier: writes the notification to the structured log."""

    def __init__(self):
        self._logger = structlog.get_logger(__name__)

    def notify(self, title: str, body: str) -> None:
        self._logger.info("notification", title=title, body=body)
