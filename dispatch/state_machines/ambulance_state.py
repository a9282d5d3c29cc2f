from dataclasses import replace
from datetime import datetime
from typing import Optional

from hospitals.models import Ambulance, AmbulanceStatus


class AmbulanceStateException(Exception):
    """Raised when an invalid ambulance transition is attempted."""
    pass


def handle_ambulance_assignment(
    ambulance: Ambulance,
    emergency_call_id: str,
    now: Optional[datetime] = None,
) -> Ambulance:
    """
    Called when an ambulance is committed to an emergency call.
    Ambulances in maintenance cannot be assigned. Re-assigning an ambulance
    that is already en route moves it to the new call.
    """
    if ambulance.status == AmbulanceStatus.MAINTENANCE:
        raise AmbulanceStateException(f"Ambulance {ambulance.id} is in maintenance and cannot be assigned")

    # frozen dataclass: return a new instance
    return replace(
        ambulance,
        status=AmbulanceStatus.EN_ROUTE,
        emergency_call_id=emergency_call_id,
        last_updated=now or datetime.now(),
    )


def handle_location_update(
    ambulance: Ambulance,
    latitude: float,
    longitude: float,
    now: Optional[datetime] = None,
) -> Ambulance:
    return replace(
        ambulance,
        current_latitude=latitude,
        current_longitude=longitude,
        last_updated=now or datetime.now(),
    )
