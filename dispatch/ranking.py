"""
Purpose: Hospital ranking engine (pure algorithm).
What it does:
Accepts a snapshot of hospitals plus an emergency location/type, and returns
the hospitals ordered by traffic-adjusted ETA, bounded by a limit.

Pipeline:
1) build_base_candidates: drop unavailable hospitals (hard rule)
2) estimate_hospital_route per candidate: distance, ETA, traffic, polyline
3) type priority per candidate (scoring.py)
4) stable sort by ETA (ties keep input order), truncate to limit

It does NOT read from or write to any store. The caller hands in a sequence,
never a live view, so a concurrent availability update cannot be half-seen.
The time-of-day multiplier is evaluated once per call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
import random
from typing import List, Optional, Sequence

from hospitals.models import Hospital
from routing.geo import LatLon
from routing.route_service import RouteEstimate, estimate_route
from routing.traffic import time_of_day_multiplier

from .candidate_filter import build_base_candidates
from .policy import RankingPolicy, default_ranking_policy
from .scoring import recommendation_tier, sort_key, type_priority

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedHospital:
    """
    A hospital with routing metrics attached. Valid only for the call that
    produced it; never stored.
    """
    hospital: Hospital
    distance: float  # km, 2 decimals
    estimated_time: int  # minutes, >= policy.min_eta_minutes
    traffic_factor: float  # time-of-day multiplier applied
    route_coordinates: List[LatLon]
    type_priority: float = 1.0

    @property
    def id(self) -> str:
        return self.hospital.id

    @property
    def recommendation(self) -> str:
        return recommendation_tier(self.estimated_time, self.hospital.capacity)


def estimate_hospital_route(
    origin_lat: float,
    origin_lng: float,
    hospital: Hospital,
    *,
    policy: Optional[RankingPolicy] = None,
    now: Optional[datetime] = None,
    time_multiplier: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> RouteEstimate:
    """
    Distance, ETA, traffic factor and polyline from an origin to one hospital.

    Usable on its own for a single-hospital re-check. Availability is not
    checked here. Pass time_multiplier to reuse one already computed for this call.
    """
    policy = policy or default_ranking_policy()
    if time_multiplier is None:
        time_multiplier = time_of_day_multiplier(now, policy.traffic_windows)

    return estimate_route(
        (origin_lat, origin_lng),
        hospital.location,
        time_multiplier=time_multiplier,
        zones=policy.traffic_zones,
        average_speed_kmh=policy.average_speed_kmh,
        min_eta_minutes=policy.min_eta_minutes,
        jitter_degrees=policy.route_jitter_degrees,
        rng=rng,
    )


def rank_hospitals(
    hospitals: Sequence[Hospital],
    origin_lat: float,
    origin_lng: float,
    emergency_type: str,
    limit: Optional[int] = None,
    *,
    policy: Optional[RankingPolicy] = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[RankedHospital]:
    """
    Rank hospitals for an emergency at (origin_lat, origin_lng).

    Args:
        hospitals: snapshot of hospital records (any availability)
        origin_lat / origin_lng: emergency location, assumed valid
        emergency_type: "medical", "trauma" or any other string
        limit: max results (policy.default_limit when None); <= 0 gives []
        policy: RankingPolicy (speed, floor, priorities, traffic config)
        now: clock override for the time-of-day multiplier
        rng: random source for the decorative polyline

    Returns:
        List[RankedHospital], ascending estimated_time, length <= limit.
    """
    policy = policy or default_ranking_policy()
    if limit is None:
        limit = policy.default_limit

    #non-positive limit: nothing to return
    if limit <= 0:
        return []

    candidates = build_base_candidates(hospitals, emergency_type, suitable_only=policy.suitable_only)
    if not candidates:
        logger.debug(f"No available hospitals to rank ({len(hospitals)} in snapshot)")
        return []

    multiplier = time_of_day_multiplier(now, policy.traffic_windows)

    ranked: List[RankedHospital] = []
    for hospital in candidates:
        route = estimate_hospital_route(
            origin_lat,
            origin_lng,
            hospital,
            policy=policy,
            time_multiplier=multiplier,
            rng=rng,
        )
        ranked.append(
            RankedHospital(
                hospital=hospital,
                distance=route.distance_km,
                estimated_time=route.eta_minutes,
                traffic_factor=route.traffic_factor,
                route_coordinates=route.polyline,
                type_priority=type_priority(hospital, emergency_type, policy),
            )
        )

    # list.sort is stable: equal keys keep snapshot order
    ranked.sort(key=lambda entry: sort_key(entry.estimated_time, entry.type_priority, policy))

    logger.debug(
        f"Ranked {len(ranked)} of {len(hospitals)} hospitals for {emergency_type} "
        f"at ({origin_lat}, {origin_lng}), multiplier {multiplier}"
    )
    return ranked[:limit]
