"""
Purpose: Central configuration for hospital ranking (single source of truth).
What it does:

Stores all tunable thresholds/caps:

AVERAGE_SPEED_KMH = 40

MIN_ETA_MINUTES = 3

DEFAULT_LIMIT = 5

TRAUMA_CENTER_PRIORITY = 0.8, FREE_COST_PRIORITY = 0.9

ROUTE_JITTER_DEGREES = 0.005

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from routing.geofence import CHENNAI_TRAFFIC_ZONES, TrafficZone
from routing.traffic import CHENNAI_TRAFFIC_WINDOWS, TrafficWindow

from . import config


@dataclass(frozen=True)
class RankingPolicy:
    """
    Central configuration for hospital ranking.

    Notes:
    - ETA = max(round(distance / average_speed_kmh * 60 * time multiplier * zone factor), min_eta_minutes)
    - type priority (trauma centre / free hospital preference) is computed for
      every candidate but only affects ordering when use_priority_tiebreak is on.
      Default off: ordering is by ETA alone.
    """

    # --- Travel time model ---
    # Constant city speed assumption.
    average_speed_kmh: float = 40.0

    # No trip is quoted below this many minutes.
    min_eta_minutes: int = 3

    # --- Result size ---
    default_limit: int = config.DEFAULT_RESULT_LIMIT

    # --- Type priority multipliers (lower = preferred) ---
    trauma_center_priority: float = 0.8
    free_cost_priority: float = 0.9

    # Use type priority to order hospitals with equal ETA.
    use_priority_tiebreak: bool = False

    # --- Candidate filtering ---
    # Drop hospitals lacking the specialties for the emergency type.
    suitable_only: bool = False

    # --- Display ---
    # Max midpoint offset (degrees, each axis) of the decorative polyline.
    route_jitter_degrees: float = 0.005

    # --- Traffic configuration ---
    traffic_windows: Tuple[TrafficWindow, ...] = CHENNAI_TRAFFIC_WINDOWS
    traffic_zones: Tuple[TrafficZone, ...] = CHENNAI_TRAFFIC_ZONES

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be > 0")

        if self.min_eta_minutes < 0:
            raise ValueError("min_eta_minutes must be >= 0")

        if self.default_limit < 0:
            raise ValueError("default_limit must be >= 0")

        if self.trauma_center_priority <= 0 or self.free_cost_priority <= 0:
            raise ValueError("priority multipliers must be > 0")

        if self.route_jitter_degrees < 0:
            raise ValueError("route_jitter_degrees must be >= 0")

        for zone in self.traffic_zones:
            if zone.radius_km < 0 or zone.factor <= 0:
                raise ValueError(f"invalid traffic zone {zone.name}")

        for window in self.traffic_windows:
            if window.start_hour > window.end_hour:
                raise ValueError(f"traffic window {window.label} starts after it ends")


def default_ranking_policy() -> RankingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = RankingPolicy()
    p.validate()
    return p


def trauma_tiebreak_policy() -> RankingPolicy:
    """
    Same as default, but equal-ETA hospitals are ordered by type priority,
    so trauma centres and free hospitals come first among ties.
    """
    p = RankingPolicy(use_priority_tiebreak=True)
    p.validate()
    return p
