"""Notification collaborators.

Fire-and-forget notices emitted when an exchange completes. The session
never reads a return value and a notifier must not raise.
"""

import logging
from abc import ABC, abstractmethod


class Notifier(ABC):
    """Receives success and failure notices from a chat session."""

    @abstractmethod
    def notify_success(self, message: str) -> None:
        """Report a completed exchange."""

    @abstractmethod
    def notify_failure(self, message: str) -> None:
        """Report a failed exchange."""


class NullNotifier(Notifier):
    """Discards every notice."""

    def notify_success(self, message: str) -> None:
        pass

    def notify_failure(self, message: str) -> None:
        pass


class LoggingNotifier(Notifier):
    """Writes notices to the application log."""

    def __init__(self, name: str = "tickerchat.notifications"):
        self._logger = logging.getLogger(name)

    def notify_success(self, message: str) -> None:
        self._logger.info(message)

    def notify_failure(self, message: str) -> None:
        self._logger.error(message)
