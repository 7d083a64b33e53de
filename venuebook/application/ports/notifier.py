from abc import ABC, abstractmethod


class NotificationPort(ABC):
    @abstractmethod
    def notify(self, level: str, text: str) -> None:
        """Show a transient user-facing notification. level is "success", "info" or "error"."""
        raise NotImplementedError
