"""
Hospitals domain package.

Public API:
- Domain models: Hospital, EmergencyCall, Ambulance and their enums
- Repositories: HospitalRepository, EmergencyCallRepository, AmbulanceRepository
- Seed loading: load_hospitals, build_hospital_repository, build_ambulance_repository
"""
from .models import (
    Ambulance,
    AmbulanceStatus,
    CallPriority,
    CallStatus,
    Capacity,
    CostTier,
    EmergencyCall,
    EmergencyLevel,
    EmergencyType,
    Hospital,
    HospitalType,
)
from .repository import (
    AmbulanceRepository,
    EmergencyCallRepository,
    HospitalRepository,
    RecordNotFoundError,
    StoreUnavailableError,
)
from .data_loader import build_ambulance_repository, build_hospital_repository, load_hospitals

__all__ = ["Ambulance",
           "AmbulanceStatus",
           "CallPriority",
           "CallStatus",
           "Capacity",
           "CostTier",
           "EmergencyCall",
           "EmergencyLevel",
           "EmergencyType",
           "Hospital",
           "HospitalType",
           "AmbulanceRepository",
           "EmergencyCallRepository",
           "HospitalRepository",
           "RecordNotFoundError",
           "StoreUnavailableError",
           "build_ambulance_repository",
           "build_hospital_repository",
           "load_hospitals",
           ]
