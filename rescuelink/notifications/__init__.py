"""
RescueLink - Notifications Module
Per-NGO notification records and the fan-out engine that writes them.
"""

from rescuelink.notifications.models import Notification, NotificationType
from rescuelink.notifications.store import NotificationStore, InMemoryNotificationStore
from rescuelink.notifications.fanout import (
    FanOutEngine,
    DeliveryResult,
    ReportCreated,
    AdoptionSubmitted,
    VolunteerSubmitted,
    delivered_count,
)

__all__ = [
    "Notification",
    "NotificationType",
    "NotificationStore",
    "InMemoryNotificationStore",
    "FanOutEngine",
    "DeliveryResult",
    "ReportCreated",
    "AdoptionSubmitted",
    "VolunteerSubmitted",
    "delivered_count",
]
