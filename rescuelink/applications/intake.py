"""
Adoption and volunteer application intake

Applications are persisted as-is; the only side effect the core adds is a
single notification to the NGO the application names.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from rescuelink.core.exceptions import ValidationError
from rescuelink.reports.models import new_id, utcnow


def _require(name: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value).strip()


@dataclass
class AdoptionApplication:
    """Application to adopt an animal listed by an NGO."""
    ngo_id: str
    pet_name: str
    full_name: Optional[str] = None
    pet_id: Optional[str] = None
    pet_breed: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    housing_type: Optional[str] = None
    has_yard: Optional[str] = None
    had_pets: Optional[str] = None
    pet_experience: Optional[str] = None
    has_current_pets: Optional[str] = None
    current_pets: Optional[str] = None
    hours_alone: Optional[float] = None
    adoption_reason: Optional[str] = None
    has_breeding_experience: Optional[str] = None
    breeding_experience: Optional[str] = None
    status: str = "pending"
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.ngo_id = _require("ngo_id", self.ngo_id)
        self.pet_name = _require("pet_name", self.pet_name)

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in self.__dict__.items()}
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data


@dataclass
class VolunteerApplication:
    """Offer to volunteer with an NGO."""
    ngo_id: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    reason: Optional[str] = None
    status: str = "pending"
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.ngo_id = _require("ngo_id", self.ngo_id)
        self.full_name = _require("full_name", self.full_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ngo_id": self.ngo_id,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "reason": self.reason,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class ApplicationStore(ABC):
    """Persistence for adoption and volunteer applications."""

    @abstractmethod
    def add_adoption(self, application: AdoptionApplication) -> AdoptionApplication:
        """Persist an adoption application."""

    @abstractmethod
    def add_volunteer(self, application: VolunteerApplication) -> VolunteerApplication:
        """Persist a volunteer application."""


class InMemoryApplicationStore(ApplicationStore):

    def __init__(self):
        self.adoptions: List[AdoptionApplication] = []
        self.volunteers: List[VolunteerApplication] = []
        self._lock = threading.Lock()

    def add_adoption(self, application: AdoptionApplication) -> AdoptionApplication:
        with self._lock:
            self.adoptions.append(replace(application))
        return replace(application)

    def add_volunteer(self, application: VolunteerApplication) -> VolunteerApplication:
        with self._lock:
            self.volunteers.append(replace(application))
        return replace(application)
