from __future__ import annotations

import logging

from venuebook.application.ports.notifier import NotificationPort

_LEVELS = {"success": logging.INFO, "info": logging.INFO, "error": logging.WARNING}


class LogNotifier(NotificationPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def notify(self, level: str, text: str) -> None:
        self._logger.log(_LEVELS.get(level, logging.INFO), "Notification", extra={"level_name": level, "text": text})


class CollectingNotifier(NotificationPort):
    """Keeps notifications in memory so a client can poll them."""

    def __init__(self, limit: int = 50) -> None:
        self.messages: list[tuple[str, str]] = []
        self._limit = limit

    def notify(self, level: str, text: str) -> None:
        self.messages.append((level, text))
        if len(self.messages) > self._limit:
            self.messages = self.messages[-self._limit :]

    def drain(self) -> list[tuple[str, str]]:
        drained, self.messages = self.messages, []
        return drained
