"""
Purpose: In-memory registries for hospitals, emergency calls and ambulances.
What it does:
- Owns the records keyed by id (insertion ordered).
- Provides get / list / upsert plus the few domain updates the dashboard needs.
- Serializes writes behind a lock. Records are frozen, so list() hands out a
  snapshot that later writes cannot change underneath a reader.

Any durable store can replace these classes as long as it keeps the same
method names and returns snapshots (sequences), never live views.

Rule: Repositories own state; ranking and dispatch logic live elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
import threading
from typing import Dict, Generic, List, Optional, TypeVar

from .models import Ambulance, EmergencyCall, Hospital

RecordT = TypeVar("RecordT")


class StoreUnavailableError(Exception):
    """Raised when the backing store cannot be read."""
    pass


class RecordNotFoundError(LookupError):
    """Raised when an id does not exist in a repository."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


@dataclass
class InMemoryRepository(Generic[RecordT]):
    """
    Thread-safe id -> record map.
    """
    _records: Dict[str, RecordT] = field(default_factory=dict)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    kind = "record"

    # --- Public API ---

    def get(self, record_id: str) -> Optional[RecordT]:
        with self._lock:
            return self._records.get(record_id)

    def require(self, record_id: str) -> RecordT:
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.kind, record_id)
        return record

    def list(self) -> List[RecordT]:
        with self._lock:
            return list(self._records.values())

    def upsert(self, record: RecordT) -> RecordT:
        with self._lock:
            self._records[record.id] = record
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class HospitalRepository(InMemoryRepository[Hospital]):
    kind = "Hospital"

    def list_available(self) -> List[Hospital]:
        return [hospital for hospital in self.list() if hospital.available]

    def update_availability(
        self,
        hospital_id: str,
        available: bool,
        now: Optional[datetime] = None,
    ) -> Optional[Hospital]:
        """
        Returns the updated hospital, or None when the id is unknown.
        """
        with self._lock:
            hospital = self._records.get(hospital_id)
            if hospital is None:
                return None
            updated = replace(hospital, available=available, last_updated=now or datetime.now())
            self._records[hospital_id] = updated
            return updated


class EmergencyCallRepository(InMemoryRepository[EmergencyCall]):
    kind = "Emergency call"

    def list_active(self) -> List[EmergencyCall]:
        return [call for call in self.list() if call.is_active]


class AmbulanceRepository(InMemoryRepository[Ambulance]):
    kind = "Ambulance"
