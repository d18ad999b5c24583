"""
NGO directory

Read access to the rescue organisations registered through the external
signup service. Fan-out takes a snapshot of this directory per event.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from rescuelink.core.exceptions import NotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ngo:
    """A registered rescue organisation."""
    id: str
    name: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}


class NgoDirectory(ABC):
    """Read-only view of registered NGOs."""

    @abstractmethod
    def list_all(self) -> List[Ngo]:
        """Return every registered NGO as a point-in-time list."""

    @abstractmethod
    def get(self, ngo_id: str) -> Ngo:
        """Return one NGO or raise NotFound."""


class InMemoryNgoDirectory(NgoDirectory):
    """
    Directory kept in process memory.

    `register` is the hook used by the registration service (and tests)
    to populate it.
    """

    def __init__(self, ngos: Optional[Iterable[Ngo]] = None):
        self._ngos: Dict[str, Ngo] = {}
        self._lock = threading.Lock()
        for ngo in ngos or []:
            self.register(ngo)

    def register(self, ngo: Ngo) -> Ngo:
        with self._lock:
            self._ngos[ngo.id] = ngo
        logger.info(f"NGO registered in directory: {ngo.id} ({ngo.name})")
        return ngo

    def list_all(self) -> List[Ngo]:
        with self._lock:
            return list(self._ngos.values())

    def get(self, ngo_id: str) -> Ngo:
        with self._lock:
            ngo = self._ngos.get(ngo_id)
        if ngo is None:
            raise NotFound(f"NGO {ngo_id} not found")
        return ngo

    def __len__(self) -> int:
        return len(self._ngos)
