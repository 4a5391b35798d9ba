# ui/notifications.py
import logging
from typing import Callable, List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    level: str  # "success" | "error" | "info"
    message: str


class Notifier:
    """Collects toast messages for the presentation layer to display."""

    def __init__(self, on_message: Optional[Callable[[Notification], None]] = None):
        self.messages: List[Notification] = []
        self.on_message = on_message

    def _push(self, level: str, message: str):
        notification = Notification(level=level, message=message)
        self.messages.append(notification)
        if self.on_message is not None:
            self.on_message(notification)
        return notification

    def success(self, message: str):
        logger.info(message)
        return self._push("success", message)

    def info(self, message: str):
        logger.info(message)
        return self._push("info", message)

    def error(self, message: str):
        logger.error(message)
        return self._push("error", message)
