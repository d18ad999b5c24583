"""
RescueLink - Notification Fan-out
Turns creation events into one notification record per recipient NGO.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from rescuelink.core.exceptions import StorageFailure
from rescuelink.ngos.directory import NgoDirectory
from rescuelink.notifications.models import Notification, NotificationType
from rescuelink.notifications.store import NotificationStore

logger = logging.getLogger(__name__)

DEFAULT_REPORT_MESSAGE = "New animal rescue report submitted"


@dataclass(frozen=True)
class ReportCreated:
    """A new rescue report was persisted. Audience: every registered NGO."""
    report_id: str


@dataclass(frozen=True)
class AdoptionSubmitted:
    """An adoption application was filed with one NGO."""
    pet_name: str
    ngo_id: str


@dataclass(frozen=True)
class VolunteerSubmitted:
    """A volunteer application was filed with one NGO."""
    full_name: str
    ngo_id: str


FanOutEvent = Union[ReportCreated, AdoptionSubmitted, VolunteerSubmitted]


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of writing one recipient's notification."""
    ngo_id: str
    notification: Optional[Notification] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ngo_id": self.ngo_id,
            "ok": self.ok,
            "notification_id": self.notification.id if self.notification else None,
            "error": self.error,
        }


def delivered_count(results: Sequence[DeliveryResult]) -> int:
    """Number of notifications actually written."""
    return sum(1 for r in results if r.ok)


class FanOutEngine:
    """
    Writes notifications for creation events.

    Writes are independent: a failed write is recorded in that recipient's
    result and the remaining writes still run. Nothing is rolled back.
    """

    def __init__(
        self,
        directory: NgoDirectory,
        store: NotificationStore,
        report_message: str = DEFAULT_REPORT_MESSAGE,
    ):
        self.directory = directory
        self.store = store
        self.report_message = report_message

    def fan_out(self, event: FanOutEvent) -> List[DeliveryResult]:
        """
        Write one notification per recipient of the event.

        Args:
            event: ReportCreated, AdoptionSubmitted or VolunteerSubmitted

        Returns:
            One DeliveryResult per recipient, in write order

        Raises:
            StorageFailure: the NGO directory could not be read
        """
        notification_type, message, recipients = self._resolve(event)

        results = [
            self._write(ngo_id, notification_type, message)
            for ngo_id in recipients
        ]

        failed = len(results) - delivered_count(results)
        logger.info(
            f"Fan-out {type(event).__name__}: {len(results) - failed}/{len(results)} "
            f"{notification_type.value} notifications written"
        )
        return results

    def _resolve(self, event: FanOutEvent):
        if isinstance(event, ReportCreated):
            # Snapshot: NGOs registered after this read are not notified
            ngo_ids = [ngo.id for ngo in self.directory.list_all()]
            return NotificationType.REPORT, self.report_message, ngo_ids

        if isinstance(event, AdoptionSubmitted):
            message = f"New adoption application for {event.pet_name}"
            return NotificationType.ADOPTION, message, [event.ngo_id]

        if isinstance(event, VolunteerSubmitted):
            message = f"New volunteer application from {event.full_name}"
            return NotificationType.VOLUNTEER, message, [event.ngo_id]

        raise TypeError(f"Unsupported fan-out event: {event!r}")

    def _write(
        self,
        ngo_id: str,
        notification_type: NotificationType,
        message: str,
    ) -> DeliveryResult:
        notification = Notification(
            type=notification_type,
            message=message,
            target_ngo_id=ngo_id,
        )
        try:
            stored = self.store.add(notification)
        except StorageFailure as e:
            logger.warning(f"Notification write failed for NGO {ngo_id}: {e}")
            return DeliveryResult(ngo_id=ngo_id, error=str(e))

        return DeliveryResult(ngo_id=ngo_id, notification=stored)
