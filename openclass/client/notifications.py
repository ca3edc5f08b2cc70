# openclass/client/notifications.py
from dataclasses import dataclass
from typing import List
import logging

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class Notifier:
    """Collects user-facing notifications and logs each one."""

    def __init__(self):
        self.history: List[Notification] = []

    def notify(self, level: str, message: str) -> Notification:
        notification = Notification(level, message)
        self.history.append(notification)
        if level == ERROR:
            logger.warning(f"Notification: {message}")
        else:
            logger.info(f"Notification: {message}")
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.notify(ERROR, message)

    @property
    def last(self):
        return self.history[-1] if self.history else None

    def clear(self):
        self.history.clear()
