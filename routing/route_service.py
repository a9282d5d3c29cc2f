#Purpose: Route computation for downstream use.
#Returns the "route" information needed by:
#map display (cosmetic 3-point polyline: origin, jittered midpoint, destination)
#distance / ETA / traffic breakdown for a single origin -> destination pair
#coarse text instructions for the ambulance crew
#There is no road graph here: distance is great-circle and the polyline is decoration.

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import List, Optional, Sequence

from routing.eta_service import DEFAULT_AVERAGE_SPEED_KMH, DEFAULT_MIN_ETA_MINUTES, estimate_eta_minutes
from routing.geo import LatLon, distance_km
from routing.geofence import CHENNAI_TRAFFIC_ZONES, TrafficZone, congestion_factor

DEFAULT_JITTER_DEGREES = 0.005

# Midpoint bands used for instruction hints
ANNA_SALAI_LNG_BAND = (80.24, 80.26)
T_NAGAR_LAT_BAND = (13.04, 13.06)
ARTERIAL_ROAD_MIN_KM = 5


@dataclass(frozen=True)
class RouteEstimate:
    """
    Output of a single origin -> destination estimate.

    traffic_factor is the time-of-day multiplier applied; congestion_factor is the
    zone multiplier at the destination. eta_minutes already includes both.
    """
    distance_km: float  # rounded to 2 decimals
    eta_minutes: int
    traffic_factor: float
    congestion_factor: float
    polyline: List[LatLon]


def build_polyline(
    origin: LatLon,
    destination: LatLon,
    *,
    jitter_degrees: float = DEFAULT_JITTER_DEGREES,
    rng: Optional[random.Random] = None,
) -> List[LatLon]:
    """
    [origin, midpoint +/- jitter, destination]. Display only.
    Pass a seeded rng for reproducible geometry.
    """
    rng = rng or random
    mid_lat = (origin[0] + destination[0]) / 2
    mid_lng = (origin[1] + destination[1]) / 2

    return [
        (origin[0], origin[1]),
        (
            mid_lat + (rng.random() - 0.5) * 2 * jitter_degrees,
            mid_lng + (rng.random() - 0.5) * 2 * jitter_degrees,
        ),
        (destination[0], destination[1]),
    ]


def estimate_route(
    origin: LatLon,
    destination: LatLon,
    *,
    time_multiplier: float = 1.0,
    zones: Sequence[TrafficZone] = CHENNAI_TRAFFIC_ZONES,
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH,
    min_eta_minutes: int = DEFAULT_MIN_ETA_MINUTES,
    jitter_degrees: float = DEFAULT_JITTER_DEGREES,
    rng: Optional[random.Random] = None,
) -> RouteEstimate:
    """
    Distance, traffic-adjusted ETA and display polyline from origin to destination.

    Congestion is looked up at the destination, not the origin.
    """
    raw_distance = distance_km(origin[0], origin[1], destination[0], destination[1])
    zone_factor = congestion_factor(destination[0], destination[1], zones)

    eta = estimate_eta_minutes(
        raw_distance,
        time_multiplier,
        zone_factor,
        average_speed_kmh=average_speed_kmh,
        min_eta_minutes=min_eta_minutes,
    )

    return RouteEstimate(
        distance_km=round(raw_distance, 2),
        eta_minutes=eta,
        traffic_factor=time_multiplier,
        congestion_factor=zone_factor,
        polyline=build_polyline(origin, destination, jitter_degrees=jitter_degrees, rng=rng),
    )


def generate_route_instructions(origin: LatLon, destination: LatLon, hospital_name: str) -> List[str]:
    """
    Coarse, direction-only guidance. Not turn-by-turn.
    """
    instructions: List[str] = []

    lat_diff = destination[0] - origin[0]
    lng_diff = destination[1] - origin[1]

    if abs(lat_diff) > abs(lng_diff):
        instructions.append("Head north" if lat_diff > 0 else "Head south")
    else:
        instructions.append("Head east" if lng_diff > 0 else "Head west")

    if distance_km(origin[0], origin[1], destination[0], destination[1]) > ARTERIAL_ROAD_MIN_KM:
        instructions.append("Take main arterial road")

    mid_lat = (origin[0] + destination[0]) / 2
    mid_lng = (origin[1] + destination[1]) / 2

    if ANNA_SALAI_LNG_BAND[0] < mid_lng < ANNA_SALAI_LNG_BAND[1]:
        instructions.append("Continue on Anna Salai")

    if T_NAGAR_LAT_BAND[0] < mid_lat < T_NAGAR_LAT_BAND[1]:
        instructions.append("Navigate through T. Nagar area - expect traffic")

    instructions.append(f"Arrive at {hospital_name}")
    return instructions
