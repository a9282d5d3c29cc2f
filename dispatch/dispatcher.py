"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Reads snapshots from the hospital / call / ambulance repositories, runs the
ranking engine, applies lifecycle transitions and broadcasts every change to
connected dashboards through an injected notifier.

Store failures (StoreUnavailableError) propagate unmodified; no retries here.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
import logging
import random
from typing import Any, Callable, Dict, List, Optional

from hospitals.data_loader import build_ambulance_repository, build_hospital_repository
from hospitals.models import (
    Ambulance,
    AmbulanceStatus,
    CallPriority,
    CallStatus,
    EmergencyCall,
    Hospital,
)
from hospitals.repository import (
    AmbulanceRepository,
    EmergencyCallRepository,
    HospitalRepository,
    RecordNotFoundError,
)
from routing.geo import validate_coordinate
from routing.geofence import TrafficZone
from routing.route_service import RouteEstimate
from routing.traffic import zone_status

from . import config
from .policy import RankingPolicy, default_ranking_policy
from .ranking import RankedHospital, estimate_hospital_route, rank_hospitals
from .state_machines.ambulance_state import handle_ambulance_assignment, handle_location_update
from .state_machines.call_state import mark_call_dispatched, transition_call

logger = logging.getLogger(__name__)

# Placeholder until response times are recorded per call
AVERAGE_RESPONSE_TIME_MINUTES = 6.2


class InvalidCallUpdateError(ValueError):
    """Raised when an emergency call update names a field that cannot change."""
    pass


UPDATABLE_CALL_FIELDS = ("location", "priority", "selected_hospital_id", "estimated_time", "distance")


class LoggingNotifier:
    """
    Default notifier: writes each broadcast to the log.
    A websocket / push adapter only needs the same broadcast() method.
    """

    def broadcast(self, event_type: str, payload: Dict[str, Any]) -> None:
        logger.info(f"broadcast {event_type}: {payload}")


@dataclass(frozen=True)
class EmergencyIntake:
    """
    Result of filing an emergency: the stored call plus the nearest hospitals.
    """
    call: EmergencyCall
    nearest_hospitals: List[RankedHospital]

    @property
    def recommended_hospital(self) -> Optional[RankedHospital]:
        return self.nearest_hospitals[0] if self.nearest_hospitals else None

    @property
    def estimated_dispatch_time(self) -> Optional[int]:
        recommended = self.recommended_hospital
        return recommended.estimated_time if recommended else None


@dataclass(frozen=True)
class SystemStatus:
    hospitals_total: int
    hospitals_available: int
    availability_percentage: int
    ambulances_total: int
    ambulances_available: int
    ambulances_en_route: int
    ambulances_maintenance: int
    active_emergencies: int
    average_response_time: float
    timestamp: datetime


class Dispatcher:
    """
    Coordinates hospital ranking, emergency calls and ambulance assignment.
    """
    def __init__(
        self,
        hospitals: HospitalRepository,
        calls: Optional[EmergencyCallRepository] = None,
        ambulances: Optional[AmbulanceRepository] = None,
        policy: Optional[RankingPolicy] = None,
        notifier=None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.hospitals = hospitals
        self.calls = calls if calls is not None else EmergencyCallRepository()
        self.ambulances = ambulances if ambulances is not None else AmbulanceRepository()
        self.policy = policy or default_ranking_policy()
        self.notifier = notifier or LoggingNotifier()
        self.clock = clock or datetime.now
        self.rng = rng

    # --- Hospitals ---

    def list_hospitals(self) -> List[Hospital]:
        return self.hospitals.list()

    def rank_nearest_hospitals(
        self,
        lat: float,
        lng: float,
        emergency_type: str,
        limit: Optional[int] = None,
        *,
        suitable_only: Optional[bool] = None,
    ) -> List[RankedHospital]:
        """
        Rank against a snapshot of the currently available hospitals.
        """
        snapshot = self.hospitals.list_available()

        policy = self.policy
        if suitable_only is not None and suitable_only != policy.suitable_only:
            policy = replace(policy, suitable_only=suitable_only)

        return rank_hospitals(
            snapshot,
            lat,
            lng,
            emergency_type,
            limit,
            policy=policy,
            now=self.clock(),
            rng=self.rng,
        )

    def estimate_route_to(self, hospital_id: str, lat: float, lng: float) -> tuple[Hospital, RouteEstimate]:
        """
        Single-hospital route re-check. Works for unavailable hospitals too.
        """
        hospital = self.hospitals.require(hospital_id)
        route = estimate_hospital_route(
            lat,
            lng,
            hospital,
            policy=self.policy,
            now=self.clock(),
            rng=self.rng,
        )
        return hospital, route

    def traffic_status(self, lat: float, lng: float) -> tuple[Optional[TrafficZone], str]:
        """
        Congestion zone (if any) and light / moderate / heavy label for a point, right now.
        """
        return zone_status(
            lat,
            lng,
            self.clock(),
            zones=self.policy.traffic_zones,
            windows=self.policy.traffic_windows,
        )

    def update_hospital_availability(self, hospital_id: str, available: bool, reason: Optional[str] = None) -> Hospital:
        hospital = self.hospitals.update_availability(hospital_id, available, now=self.clock())
        if hospital is None:
            raise RecordNotFoundError(self.hospitals.kind, hospital_id)

        logger.info(f"Hospital {hospital_id} availability set to {available}" + (f" ({reason})" if reason else ""))
        self.notifier.broadcast(
            "hospital_availability_update",
            {"hospitalId": hospital_id, "available": available, "reason": reason},
        )
        return hospital

    # --- Emergency calls ---

    def create_emergency_call(
        self,
        location: str,
        latitude: float,
        longitude: float,
        emergency_type: str,
        priority: str | CallPriority,
    ) -> EmergencyCall:
        latitude, longitude = validate_coordinate(latitude, longitude)
        call = EmergencyCall.new(location, latitude, longitude, emergency_type, priority, now=self.clock())
        call = self.calls.upsert(call)

        logger.info(f"Emergency call {call.id} ({call.emergency_type}, {call.priority.value}) filed at {call.location}")
        self.notifier.broadcast("new_emergency_call", {"emergencyCallId": call.id})
        return call

    def file_emergency(
        self,
        location: str,
        latitude: float,
        longitude: float,
        emergency_type: str,
        priority: str | CallPriority,
        limit: Optional[int] = None,
    ) -> EmergencyIntake:
        """
        Intake flow: store the call, then rank the nearest hospitals for it.
        """
        call = self.create_emergency_call(location, latitude, longitude, emergency_type, priority)
        nearest = self.rank_nearest_hospitals(
            call.latitude,
            call.longitude,
            call.emergency_type,
            config.INTAKE_RESULT_LIMIT if limit is None else limit,
        )
        return EmergencyIntake(call=call, nearest_hospitals=nearest)

    def get_emergency_call(self, call_id: str) -> EmergencyCall:
        return self.calls.require(call_id)

    def list_active_emergency_calls(self) -> List[EmergencyCall]:
        return self.calls.list_active()

    def update_emergency_call(self, call_id: str, **updates: Any) -> EmergencyCall:
        """
        Partial update. status changes go through the call state machine.
        """
        call = self.calls.require(call_id)

        unknown = set(updates) - set(UPDATABLE_CALL_FIELDS) - {"status"}
        if unknown:
            raise InvalidCallUpdateError(f"Cannot update emergency call fields: {', '.join(sorted(unknown))}")

        now = self.clock()
        status = updates.pop("status", None)
        if status is not None:
            call = transition_call(call, CallStatus(status), now)

        if "priority" in updates:
            updates["priority"] = CallPriority(updates["priority"])

        call = self.calls.upsert(replace(call, updated_at=now, **updates))
        self.notifier.broadcast("emergency_call_update", {"emergencyCallId": call.id, "status": call.status.value})
        return call

    def dispatch(self, call_id: str, hospital_id: str, ambulance_id: Optional[str] = None) -> EmergencyCall:
        """
        Commit a hospital (and optionally an ambulance) to an emergency call.

        All lookups and transitions are checked before anything is written.
        """
        call = self.calls.require(call_id)
        hospital = self.hospitals.require(hospital_id)
        now = self.clock()

        ambulance: Optional[Ambulance] = None
        if ambulance_id:
            ambulance = handle_ambulance_assignment(self.ambulances.require(ambulance_id), call_id, now)

        route = estimate_hospital_route(
            call.latitude,
            call.longitude,
            hospital,
            policy=self.policy,
            now=now,
            rng=self.rng,
        )
        dispatched = mark_call_dispatched(call, hospital.id, route.eta_minutes, route.distance_km, now)

        self.calls.upsert(dispatched)
        if ambulance is not None:
            self.ambulances.upsert(ambulance)

        if not hospital.available:
            logger.warning(f"Emergency call {call_id} dispatched to unavailable hospital {hospital_id}")
        logger.info(
            f"Emergency call {call_id} dispatched to {hospital.name} "
            f"(eta {route.eta_minutes} min, ambulance {ambulance_id or 'none'})"
        )
        self.notifier.broadcast(
            "ambulance_dispatched",
            {"emergencyCallId": call_id, "hospitalId": hospital_id, "ambulanceId": ambulance_id},
        )
        return dispatched

    # --- Ambulances ---

    def list_ambulances(self) -> List[Ambulance]:
        return self.ambulances.list()

    def update_ambulance_location(self, ambulance_id: str, latitude: float, longitude: float) -> Ambulance:
        latitude, longitude = validate_coordinate(latitude, longitude)
        ambulance = self.ambulances.require(ambulance_id)
        ambulance = self.ambulances.upsert(handle_location_update(ambulance, latitude, longitude, self.clock()))

        self.notifier.broadcast(
            "ambulance_location_update",
            {"ambulanceId": ambulance_id, "latitude": latitude, "longitude": longitude},
        )
        return ambulance

    def assign_ambulance(self, ambulance_id: str, emergency_call_id: str) -> Ambulance:
        ambulance = self.ambulances.require(ambulance_id)
        self.calls.require(emergency_call_id)

        ambulance = self.ambulances.upsert(handle_ambulance_assignment(ambulance, emergency_call_id, self.clock()))

        logger.info(f"Ambulance {ambulance_id} assigned to emergency call {emergency_call_id}")
        self.notifier.broadcast(
            "ambulance_assigned",
            {"ambulanceId": ambulance_id, "emergencyCallId": emergency_call_id},
        )
        return ambulance

    # --- Status ---

    def system_status(self) -> SystemStatus:
        hospitals = self.hospitals.list()
        ambulances = self.ambulances.list()

        available_hospitals = sum(1 for hospital in hospitals if hospital.available)
        percentage = round(available_hospitals / len(hospitals) * 100) if hospitals else 0

        return SystemStatus(
            hospitals_total=len(hospitals),
            hospitals_available=available_hospitals,
            availability_percentage=percentage,
            ambulances_total=len(ambulances),
            ambulances_available=sum(1 for a in ambulances if a.status == AmbulanceStatus.AVAILABLE),
            ambulances_en_route=sum(1 for a in ambulances if a.status == AmbulanceStatus.EN_ROUTE),
            ambulances_maintenance=sum(1 for a in ambulances if a.status == AmbulanceStatus.MAINTENANCE),
            active_emergencies=len(self.calls.list_active()),
            average_response_time=AVERAGE_RESPONSE_TIME_MINUTES,
            timestamp=self.clock(),
        )


def build_dispatcher(
    hospital_data_path: Optional[str] = None,
    *,
    policy: Optional[RankingPolicy] = None,
    notifier=None,
) -> Dispatcher:
    """
    Dispatcher wired to the seed hospital file and the default ambulance fleet.
    """
    return Dispatcher(
        hospitals=build_hospital_repository(hospital_data_path or config.HOSPITAL_DATA_PATH),
        calls=EmergencyCallRepository(),
        ambulances=build_ambulance_repository(),
        policy=policy,
        notifier=notifier,
    )
