"""
Notification storage backends
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, List

from rescuelink.core.exceptions import NotFound
from rescuelink.notifications.models import Notification


class NotificationStore(ABC):
    """Persistence for notification records."""

    @abstractmethod
    def add(self, notification: Notification) -> Notification:
        """Persist one notification."""

    @abstractmethod
    def list_for_ngo(self, ngo_id: str, unread_only: bool = False) -> List[Notification]:
        """Notifications addressed to an NGO, newest first."""

    @abstractmethod
    def mark_read(self, notification_id: str, ngo_id: str) -> Notification:
        """Set read=True. Raises NotFound for unknown ids or another NGO's notification."""


class InMemoryNotificationStore(NotificationStore):
    """Dict-backed store."""

    def __init__(self):
        self._notifications: Dict[str, Notification] = {}
        self._lock = threading.Lock()

    def add(self, notification: Notification) -> Notification:
        with self._lock:
            self._notifications[notification.id] = replace(notification)
        return replace(notification)

    def list_for_ngo(self, ngo_id: str, unread_only: bool = False) -> List[Notification]:
        with self._lock:
            items = [
                replace(n) for n in reversed(list(self._notifications.values()))
                if n.target_ngo_id == ngo_id and not (unread_only and n.read)
            ]
        items.sort(key=lambda n: n.created_at, reverse=True)
        return items

    def mark_read(self, notification_id: str, ngo_id: str) -> Notification:
        with self._lock:
            notification = self._notifications.get(notification_id)
            if notification is None or notification.target_ngo_id != ngo_id:
                raise NotFound(f"Notification {notification_id} not found")
            notification.read = True
            return replace(notification)

    def all(self) -> List[Notification]:
        with self._lock:
            return [replace(n) for n in self._notifications.values()]

    def __len__(self) -> int:
        return len(self._notifications)
