"""
Report records and status-update results
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from rescuelink.core.exceptions import ValidationError
from rescuelink.core.geo_utils import GeoLocation


class ReportStatus(str, Enum):
    """Triage status of a rescue report."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: Union[str, "ReportStatus"]) -> "ReportStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(f"Invalid status {value!r}; expected one of: {allowed}")


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Report:
    """
    Animal rescue report submitted by a member of the public.

    The assignment fields stay null until an NGO claims the report by
    moving it to in-progress.
    """
    id: str
    photo_ref: str
    description: str
    location: GeoLocation
    status: ReportStatus = ReportStatus.PENDING
    assigned_ngo_id: Optional[str] = None
    assigned_ngo_name: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_claimed(self) -> bool:
        return self.assigned_ngo_id is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "photo_ref": self.photo_ref,
            "description": self.description,
            "location": self.location.to_geojson(),
            "status": self.status.value,
            "assigned_ngo_id": self.assigned_ngo_id,
            "assigned_ngo_name": self.assigned_ngo_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ActiveReport:
    """Status update left the report in storage."""
    report: Report

    completed = False


@dataclass(frozen=True)
class CompletedReport:
    """Status update completed the report, which removes it from storage."""
    report_id: str

    completed = True

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.report_id, "completed": True}


StatusUpdateResult = Union[ActiveReport, CompletedReport]
