"""
RescueLink - Dispatch
Boundary operations: each one is a single store operation plus, for
creation events, one fan-out call.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from rescuelink.applications.intake import (
    AdoptionApplication,
    ApplicationStore,
    VolunteerApplication,
)
from rescuelink.core.exceptions import StorageFailure
from rescuelink.core.geo_utils import BoundingBox
from rescuelink.ngos.directory import Ngo
from rescuelink.notifications.fanout import (
    AdoptionSubmitted,
    DeliveryResult,
    FanOutEngine,
    ReportCreated,
    VolunteerSubmitted,
    delivered_count,
)
from rescuelink.notifications.models import Notification
from rescuelink.reports.models import Report, StatusUpdateResult
from rescuelink.reports.report_handler import ReportHandler

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Dispatched(Generic[T]):
    """A persisted record and the notifications written for it."""
    record: T
    deliveries: List[DeliveryResult] = field(default_factory=list)

    @property
    def notified(self) -> int:
        return delivered_count(self.deliveries)

    @property
    def failed_deliveries(self) -> List[DeliveryResult]:
        return [d for d in self.deliveries if not d.ok]


class RescueDispatch:
    """Composes the report handler, fan-out engine and application intake."""

    def __init__(
        self,
        reports: ReportHandler,
        fanout: FanOutEngine,
        applications: ApplicationStore,
    ):
        self.reports = reports
        self.fanout = fanout
        self.applications = applications

    @property
    def directory(self):
        return self.fanout.directory

    def submit_report(
        self,
        photo_ref: str,
        description: str,
        longitude: Any,
        latitude: Any,
    ) -> Dispatched[Report]:
        """
        Persist a pending report, then notify every registered NGO.

        The report is stored before fan-out starts. Fan-out problems never
        fail the submission; they show up in the returned deliveries.
        """
        report = self.reports.create_report(photo_ref, description, longitude, latitude)
        deliveries = self._fan_out_safely(ReportCreated(report_id=report.id))
        return Dispatched(record=report, deliveries=deliveries)

    def update_report_status(self, report_id: str, status: Any, acting_ngo: Ngo) -> StatusUpdateResult:
        return self.reports.update_status(report_id, status, acting_ngo)

    def list_reports(self, limit: Optional[int] = None) -> List[Report]:
        return self.reports.list_reports(limit)

    def get_report(self, report_id: str) -> Report:
        return self.reports.get_report(report_id)

    def find_nearby(self, longitude: Any, latitude: Any, radius_km: float) -> List[Tuple[Report, float]]:
        return self.reports.find_nearby(longitude, latitude, radius_km)

    def reports_in_area(self, west: Any, south: Any, east: Any, north: Any) -> List[Report]:
        return self.reports.get_reports_in_area(BoundingBox.from_values(west, south, east, north))

    def report_statistics(self) -> Dict[str, Any]:
        return self.reports.get_statistics()

    def storage_status(self) -> Dict[str, Any]:
        """Backend name of the report store and whether it answers."""
        store = self.reports.store
        return {"storage": store.backend, "available": store.is_available()}

    def submit_adoption(self, **fields) -> Dispatched[AdoptionApplication]:
        """Persist an adoption application and notify the NGO it names."""
        application = self.applications.add_adoption(AdoptionApplication(**fields))
        deliveries = self._fan_out_safely(
            AdoptionSubmitted(pet_name=application.pet_name, ngo_id=application.ngo_id)
        )
        return Dispatched(record=application, deliveries=deliveries)

    def submit_volunteer(self, **fields) -> Dispatched[VolunteerApplication]:
        """Persist a volunteer application and notify the NGO it names."""
        application = self.applications.add_volunteer(VolunteerApplication(**fields))
        deliveries = self._fan_out_safely(
            VolunteerSubmitted(full_name=application.full_name, ngo_id=application.ngo_id)
        )
        return Dispatched(record=application, deliveries=deliveries)

    def list_notifications(self, ngo: Ngo, unread_only: bool = False) -> List[Notification]:
        return self.fanout.store.list_for_ngo(ngo.id, unread_only=unread_only)

    def mark_notification_read(self, ngo: Ngo, notification_id: str) -> Notification:
        return self.fanout.store.mark_read(notification_id, ngo.id)

    def _fan_out_safely(self, event) -> List[DeliveryResult]:
        try:
            return self.fanout.fan_out(event)
        except StorageFailure:
            logger.exception(f"Fan-out aborted for {event!r}; record stays persisted")
            return []
