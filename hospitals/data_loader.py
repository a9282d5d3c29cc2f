"""
Purpose: Seed the in-memory registries.
What it does:
- Reads hospital records from a JSON file ({"hospitals": [...]}) or a CSV file
  (one row per hospital, specialties separated by ';').
- Builds the default ambulance fleet scattered around the city center.

Any read/parse failure is raised as StoreUnavailableError so callers can tell
"no data" apart from "no hospitals".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
import random
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .models import Ambulance, AmbulanceStatus, Hospital
from .repository import AmbulanceRepository, HospitalRepository, StoreUnavailableError

logger = logging.getLogger(__name__)

CHENNAI_CENTER = (13.0827, 80.2707)

AMBULANCE_IDS = ["AMB001", "AMB002", "AMB003", "AMB004", "AMB005", "AMB006", "AMB007", "AMB008"]
AVAILABLE_AMBULANCE_COUNT = 6
AMBULANCE_SCATTER_DEGREES = 0.1


def hospital_from_record(record: Dict[str, Any]) -> Hospital:
    """
    Accepts both lat/lng and latitude/longitude keys.
    """
    lat = record["lat"] if "lat" in record else record["latitude"]
    lng = record["lng"] if "lng" in record else record["longitude"]

    specialties = record.get("specialties") or []
    if isinstance(specialties, str):
        specialties = [part.strip() for part in specialties.split(";") if part.strip()]

    available = record.get("available", True)
    if isinstance(available, str):
        available = available.strip().lower() in ("true", "1", "yes")

    return Hospital.new(
        hospital_id=str(record["id"]),
        name=record["name"],
        lat=lat,
        lng=lng,
        type=record["type"],
        emergency_level=record["emergency_level"],
        capacity=record["capacity"],
        specialties=specialties,
        cost=record.get("cost") or None,
        phone=record.get("phone") or None,
        available=bool(available),
    )


def _read_records(path: Path) -> List[Dict[str, Any]]:
    if path.suffix.lower() == ".csv":
        frame = pd.read_csv(path, dtype={"id": str, "phone": str})
        # NaN -> None so optional fields stay optional
        frame = frame.astype(object).where(pd.notnull(frame), None)
        return frame.to_dict(orient="records")

    with open(path, "r", encoding="utf-8") as file:
        payload = json.load(file)
    if isinstance(payload, dict):
        return payload.get("hospitals", [])
    return payload


def load_hospitals(path: str | Path) -> List[Hospital]:
    path = Path(path)
    try:
        records = _read_records(path)
        hospitals = [hospital_from_record(record) for record in records]
    except (OSError, ValueError, KeyError, TypeError) as error:
        logger.error(f"Failed to load hospital data from {path}: {error}")
        raise StoreUnavailableError(f"Cannot read hospital data from {path}") from error

    logger.info(f"Loaded {len(hospitals)} hospitals from {path}")
    return hospitals


def build_hospital_repository(path: str | Path) -> HospitalRepository:
    repository = HospitalRepository()
    for hospital in load_hospitals(path):
        repository.upsert(hospital)
    return repository


def default_ambulances(
    rng: Optional[random.Random] = None,
    ambulance_ids: Iterable[str] = AMBULANCE_IDS,
) -> List[Ambulance]:
    """
    The default fleet: the first six are available, the rest en route.
    """
    rng = rng or random.Random()
    center_lat, center_lng = CHENNAI_CENTER

    ambulances = []
    for index, ambulance_id in enumerate(ambulance_ids):
        status = AmbulanceStatus.AVAILABLE if index < AVAILABLE_AMBULANCE_COUNT else AmbulanceStatus.EN_ROUTE
        ambulances.append(
            Ambulance(
                id=ambulance_id,
                status=status,
                current_latitude=center_lat + (rng.random() - 0.5) * AMBULANCE_SCATTER_DEGREES,
                current_longitude=center_lng + (rng.random() - 0.5) * AMBULANCE_SCATTER_DEGREES,
            )
        )
    return ambulances


def build_ambulance_repository(rng: Optional[random.Random] = None) -> AmbulanceRepository:
    repository = AmbulanceRepository()
    for ambulance in default_ambulances(rng):
        repository.upsert(ambulance)
    return repository
