"""
Purpose: Core data models for the hospitals / emergency domain.
What it does:
Defines Hospital, EmergencyCall and Ambulance records and their enums without
relying on Django ORM constraints.

Records are frozen. Updates produce a new instance via dataclasses.replace,
so a list of records read from a repository is always a consistent snapshot.

Rule: No ranking, no traffic math. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple
import uuid

LatLon = Tuple[float, float]


class HospitalType(str, Enum):
    MULTI_SPECIALTY = "multi_specialty"
    GOVERNMENT = "government"
    PRIVATE = "private"


class EmergencyLevel(str, Enum):
    LEVEL_1_TRAUMA = "level_1_trauma"
    LEVEL_2 = "level_2"
    BASIC = "basic"


class Capacity(str, Enum):
    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CostTier(str, Enum):
    FREE = "free"
    MODERATE = "moderate"
    EXPENSIVE = "expensive"


class EmergencyType(str, Enum):
    """
    Known emergency types. Callers may pass any string; unknown values get no
    priority adjustment and are never rejected.
    """
    MEDICAL = "medical"
    TRAUMA = "trauma"


class CallPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class CallStatus(str, Enum):
    ACTIVE = "active"
    DISPATCHED = "dispatched"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AmbulanceStatus(str, Enum):
    AVAILABLE = "available"
    EN_ROUTE = "en_route"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True)
class Hospital:
    """
    A hospital at a fixed location.
    Only the availability flag (and last_updated) changes after seeding.
    """
    id: str
    name: str
    lat: float
    lng: float
    type: HospitalType
    emergency_level: EmergencyLevel
    capacity: Capacity
    specialties: FrozenSet[str] = frozenset()
    cost: Optional[CostTier] = None
    phone: Optional[str] = None
    available: bool = True
    last_updated: Optional[datetime] = None

    @property
    def location(self) -> LatLon:
        return (self.lat, self.lng)

    @classmethod
    def new(
        cls,
        hospital_id: str,
        name: str,
        lat: float,
        lng: float,
        type: str | HospitalType = HospitalType.MULTI_SPECIALTY,
        emergency_level: str | EmergencyLevel = EmergencyLevel.BASIC,
        capacity: str | Capacity = Capacity.MEDIUM,
        specialties: Iterable[str] = (),
        cost: str | CostTier | None = None,
        phone: Optional[str] = None,
        available: bool = True,
        last_updated: Optional[datetime] = None,
    ) -> Hospital:
        return cls(
            id=hospital_id,
            name=name,
            lat=float(lat),
            lng=float(lng),
            type=HospitalType(type),
            emergency_level=EmergencyLevel(emergency_level),
            capacity=Capacity(capacity),
            specialties=frozenset(specialties or ()),
            cost=CostTier(cost) if cost else None,
            phone=phone,
            available=bool(available),
            last_updated=last_updated or datetime.now(),
        )


@dataclass(frozen=True)
class EmergencyCall:
    """
    An emergency filed by an operator (or an upstream automation).
    selected_hospital_id / estimated_time / distance are filled at dispatch.
    """
    id: str
    location: str
    latitude: float
    longitude: float
    emergency_type: str
    priority: CallPriority
    status: CallStatus = CallStatus.ACTIVE
    selected_hospital_id: Optional[str] = None
    estimated_time: Optional[int] = None  # minutes
    distance: Optional[float] = None  # km
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_active(self) -> bool:
        return self.status in (CallStatus.ACTIVE, CallStatus.DISPATCHED)

    @staticmethod
    def new(
        location: str,
        latitude: float,
        longitude: float,
        emergency_type: str,
        priority: str | CallPriority,
        status: str | CallStatus = CallStatus.ACTIVE,
        now: Optional[datetime] = None,
    ) -> EmergencyCall:
        now = now or datetime.now()
        return EmergencyCall(
            id=str(uuid.uuid4()),
            location=location,
            latitude=float(latitude),
            longitude=float(longitude),
            emergency_type=str(emergency_type),
            priority=CallPriority(priority),
            status=CallStatus(status),
            created_at=now,
            updated_at=now,
        )


@dataclass(frozen=True)
class Ambulance:
    id: str
    status: AmbulanceStatus
    current_latitude: Optional[float] = None
    current_longitude: Optional[float] = None
    emergency_call_id: Optional[str] = None
    last_updated: datetime = field(default_factory=datetime.now)
