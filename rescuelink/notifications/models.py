"""
Notification records
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from rescuelink.reports.models import new_id, utcnow


class NotificationType(str, Enum):
    """What kind of work item the notification announces."""
    REPORT = "report"
    ADOPTION = "adoption"
    VOLUNTEER = "volunteer"


@dataclass
class Notification:
    """Notification addressed to one NGO. Consumers poll for these."""
    type: NotificationType
    message: str
    target_ngo_id: Optional[str]
    id: str = field(default_factory=new_id)
    read: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "message": self.message,
            "target_ngo_id": self.target_ngo_id,
            "read": self.read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
