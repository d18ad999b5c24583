"""
Report storage backends
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from rescuelink.core.exceptions import ClaimConflict
from rescuelink.core.geo_utils import GeoLocation
from rescuelink.ngos.directory import Ngo
from rescuelink.reports.models import Report, ReportStatus


class ReportStore(ABC):
    """
    Persistence for report records.

    Every method touches a single record; there is no multi-record
    transaction.
    """

    backend = "memory"

    def is_available(self) -> bool:
        """Whether the backing storage currently answers."""
        return True

    @abstractmethod
    def add(self, report: Report) -> Report:
        """Persist a new report."""

    @abstractmethod
    def get(self, report_id: str) -> Optional[Report]:
        """Return the report or None."""

    @abstractmethod
    def list_recent(self, limit: Optional[int] = None) -> List[Report]:
        """Return reports ordered by created_at, newest first."""

    @abstractmethod
    def set_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        """Change status only. Returns None when the report does not exist."""

    @abstractmethod
    def claim(self, report_id: str, ngo: Ngo, only_if_pending: bool = False) -> Optional[Report]:
        """
        Move the report to in-progress and stamp the claiming NGO.

        With only_if_pending the update is a compare-and-swap on
        status == pending (the current assignee may re-claim); a lost swap
        raises ClaimConflict. Returns None when the report does not exist.
        """

    @abstractmethod
    def delete(self, report_id: str) -> bool:
        """Remove the report. Returns False when it did not exist."""

    @abstractmethod
    def within_radius(self, location: GeoLocation, radius_km: float) -> List[Tuple[Report, float]]:
        """Return (report, distance_km) pairs within radius, nearest first."""


class InMemoryReportStore(ReportStore):
    """Dict-backed store. Records are copied in and out."""

    def __init__(self):
        self._reports: Dict[str, Report] = {}
        self._lock = threading.Lock()

    def add(self, report: Report) -> Report:
        with self._lock:
            self._reports[report.id] = replace(report)
        return replace(report)

    def get(self, report_id: str) -> Optional[Report]:
        with self._lock:
            report = self._reports.get(report_id)
            return replace(report) if report else None

    def list_recent(self, limit: Optional[int] = None) -> List[Report]:
        with self._lock:
            # reversed() first so equal timestamps keep newest-inserted first
            reports = [replace(r) for r in reversed(list(self._reports.values()))]
        reports.sort(key=lambda r: r.created_at, reverse=True)
        return reports[:limit] if limit else reports

    def set_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        with self._lock:
            report = self._reports.get(report_id)
            if report is None:
                return None
            report.status = status
            return replace(report)

    def claim(self, report_id: str, ngo: Ngo, only_if_pending: bool = False) -> Optional[Report]:
        with self._lock:
            report = self._reports.get(report_id)
            if report is None:
                return None
            if (
                only_if_pending
                and report.status != ReportStatus.PENDING
                and report.assigned_ngo_id != ngo.id
            ):
                raise ClaimConflict(
                    f"Report {report_id} already claimed by {report.assigned_ngo_name or report.assigned_ngo_id}"
                )
            report.status = ReportStatus.IN_PROGRESS
            report.assigned_ngo_id = ngo.id
            report.assigned_ngo_name = ngo.name
            return replace(report)

    def delete(self, report_id: str) -> bool:
        with self._lock:
            return self._reports.pop(report_id, None) is not None

    def within_radius(self, location: GeoLocation, radius_km: float) -> List[Tuple[Report, float]]:
        with self._lock:
            reports = [replace(r) for r in self._reports.values()]

        matches = []
        for report in reports:
            distance = location.distance_km(report.location)
            if distance <= radius_km:
                matches.append((report, distance))

        matches.sort(key=lambda pair: pair[1])
        return matches

    def __len__(self) -> int:
        return len(self._reports)
