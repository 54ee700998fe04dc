"""Transient user-facing notifications."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List

from ..models.timestamps import utcnow, to_iso

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """A short message surfaced to the user after an action."""
    level: str  # success, info, warning, error
    title: str
    message: str = ""
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "level": self.level,
            "title": self.title,
            "message": self.message,
            "created_at": to_iso(self.created_at),
        }


class NotificationFeed:
    """Bounded feed of recent notifications; oldest entries drop off."""

    def __init__(self, max_items: int = 50):
        self._items: Deque[Notification] = deque(maxlen=max_items)

    def push(self, level: str, title: str, message: str = "") -> Notification:
        notification = Notification(level=level, title=title, message=message)
        self._items.append(notification)
        log_level = logging.ERROR if level == "error" else logging.INFO
        logger.log(log_level, f"{title}: {message}" if message else title)
        return notification

    def success(self, title: str, message: str = "") -> Notification:
        return self.push("success", title, message)

    def error(self, title: str, message: str = "") -> Notification:
        return self.push("error", title, message)

    def recent(self, limit: int = 10) -> List[Notification]:
        """Most recent notifications, newest first."""
        return list(reversed(self._items))[:limit]

    def drain(self) -> List[Notification]:
        """Return all notifications in arrival order and clear the feed."""
        items = list(self._items)
        self._items.clear()
        return items
