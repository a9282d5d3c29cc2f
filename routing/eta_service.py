#Purpose: ETA estimation policy.
#Converts a straight-line distance into whole ETA minutes used by:
#hospital ranking (sort key)
#dispatch decisions (estimated dispatch time on the emergency call)
#Typical responsibilities:
#base travel time at a constant average city speed
#apply time-of-day and congestion multipliers
#round half up to whole minutes with a minimum trip time
#Keeps ETA math separate from route geometry (route_service.py).

import math

DEFAULT_AVERAGE_SPEED_KMH = 40.0
DEFAULT_MIN_ETA_MINUTES = 3


def round_half_up(value: float) -> int:
    # builtin round() is banker's rounding, 2.5 -> 2
    return int(math.floor(value + 0.5))


def base_travel_minutes(distance_km: float, average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH) -> float:
    """
    Minutes to cover distance_km at a constant average speed, no traffic.
    """
    return distance_km / average_speed_kmh * 60


def estimate_eta_minutes(
        distance_km: float,
        traffic_factor: float = 1.0,
        congestion_factor: float = 1.0,
        *,
        average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH,
        min_eta_minutes: int = DEFAULT_MIN_ETA_MINUTES,
) -> int:
    """
    Traffic-adjusted ETA in whole minutes, never below min_eta_minutes.

    eta = max(round(distance / speed * 60 * traffic_factor * congestion_factor), floor)
    """
    adjusted = base_travel_minutes(distance_km, average_speed_kmh) * traffic_factor * congestion_factor
    return max(round_half_up(adjusted), min_eta_minutes)
