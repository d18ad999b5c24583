"""
Report lifecycle handler
Validates new rescue reports and drives the pending -> in-progress ->
completed state machine. Completion deletes the record.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from rescuelink.core.exceptions import NotFound, ValidationError
from rescuelink.core.geo_utils import BoundingBox, GeoLocation
from rescuelink.ngos.directory import Ngo
from rescuelink.reports.models import (
    ActiveReport,
    CompletedReport,
    Report,
    ReportStatus,
    StatusUpdateResult,
    new_id,
)
from rescuelink.reports.store import ReportStore

logger = logging.getLogger(__name__)


def _required_text(name: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value).strip()


class ReportHandler:
    """
    Handles rescue reports from the public.

    Claims are last-writer-wins unless exclusive_claims is set, in which
    case only a pending report (or its current assignee) can be claimed.
    """

    def __init__(self, store: ReportStore, exclusive_claims: bool = False):
        """
        Initialize report handler.

        Args:
            store: Backend holding report records
            exclusive_claims: Reject claims on reports another NGO holds
        """
        self.store = store
        self.exclusive_claims = exclusive_claims

        logger.info(f"ReportHandler initialized (exclusive_claims={exclusive_claims})")

    def create_report(
        self,
        photo_ref: str,
        description: str,
        longitude: Any,
        latitude: Any,
    ) -> Report:
        """
        Create a new pending report.

        Args:
            photo_ref: Reference to the already-stored photo
            description: What the reporter saw
            longitude: Report longitude
            latitude: Report latitude

        Returns:
            The persisted Report

        Raises:
            ValidationError: empty photo/description or invalid coordinates
        """
        report = Report(
            id=new_id(),
            photo_ref=_required_text("photo_ref", photo_ref),
            description=_required_text("description", description),
            location=GeoLocation.from_values(longitude, latitude),
        )

        report = self.store.add(report)

        logger.info(
            f"New report created: {report.id} at "
            f"({report.location.longitude}, {report.location.latitude})"
        )
        return report

    def get_report(self, report_id: str) -> Report:
        report = self.store.get(report_id)
        if report is None:
            raise NotFound(f"Report {report_id} not found")
        return report

    def list_reports(self, limit: Optional[int] = None) -> List[Report]:
        """All live reports, most recent first."""
        return self.store.list_recent(limit)

    def update_status(
        self,
        report_id: str,
        new_status: Any,
        acting_ngo: Ngo,
    ) -> StatusUpdateResult:
        """
        Apply a status change requested by an NGO.

        Args:
            report_id: Report ID
            new_status: Target status (enum or its string value)
            acting_ngo: NGO performing the update

        Returns:
            ActiveReport with the updated record, or CompletedReport when
            the report was completed and removed

        Raises:
            ValidationError: unknown status value
            NotFound: no report with this ID
            ClaimConflict: exclusive claims enabled and another NGO holds it
        """
        status = ReportStatus.parse(new_status)

        if status == ReportStatus.COMPLETED:
            if not self.store.delete(report_id):
                raise NotFound(f"Report {report_id} not found")
            logger.info(f"Report {report_id} completed by {acting_ngo.id} and removed")
            return CompletedReport(report_id=report_id)

        if status == ReportStatus.IN_PROGRESS:
            report = self.store.claim(report_id, acting_ngo, only_if_pending=self.exclusive_claims)
        else:
            report = self.store.set_status(report_id, status)

        if report is None:
            raise NotFound(f"Report {report_id} not found")

        logger.info(f"Report {report_id} status -> {status.value} (by {acting_ngo.id})")
        return ActiveReport(report=report)

    def find_nearby(
        self,
        longitude: Any,
        latitude: Any,
        radius_km: float,
    ) -> List[Tuple[Report, float]]:
        """
        Find reports within radius_km of a point, nearest first.

        Returns:
            List of (report, distance_km) pairs
        """
        if radius_km is None or radius_km <= 0:
            raise ValidationError("radius_km must be positive")

        center = GeoLocation.from_values(longitude, latitude)
        return self.store.within_radius(center, radius_km)

    def get_reports_in_area(self, bbox: BoundingBox) -> List[Report]:
        return [r for r in self.store.list_recent() if bbox.contains(r.location)]

    def get_statistics(self) -> Dict[str, Any]:
        """Get report statistics."""
        reports = self.store.list_recent()

        by_status: Dict[str, int] = {}
        for report in reports:
            by_status[report.status.value] = by_status.get(report.status.value, 0) + 1

        return {
            "total_reports": len(reports),
            "by_status": by_status,
            "claimed": sum(1 for r in reports if r.is_claimed),
        }
