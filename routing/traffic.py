"""
Purpose: Clock-driven traffic model.
What it does:
- Matches a wall-clock time against the city's rush-hour windows and returns
  the travel-time multiplier for that moment (first matching window wins).
- Combines that multiplier with the static congestion zones to classify how
  busy a point is right now (light / moderate / heavy).

Times are compared as decimal hours (hour + minute / 60), both ends inclusive.
Seconds are ignored, so 10:30:59 still counts as 10:30.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Tuple

from routing.geofence import CHENNAI_TRAFFIC_ZONES, TrafficZone, find_zone

SATURDAY = 5  # datetime.weekday()


@dataclass(frozen=True)
class TrafficWindow:
    """
    A daily time window with a travel-time multiplier.
    weekday restricts the window to one day of the week (Monday == 0).
    """
    start_hour: float
    end_hour: float
    multiplier: float
    label: str
    weekday: Optional[int] = None

    def matches(self, now: datetime) -> bool:
        if self.weekday is not None and now.weekday() != self.weekday:
            return False
        time_decimal = now.hour + now.minute / 60
        return self.start_hour <= time_decimal <= self.end_hour


# Precedence order matters: evening rush shadows the Saturday window until 21:00.
CHENNAI_TRAFFIC_WINDOWS: Tuple[TrafficWindow, ...] = (
    TrafficWindow(start_hour=8.0, end_hour=10.5, multiplier=1.8, label="morning rush"),
    TrafficWindow(start_hour=18.0, end_hour=21.0, multiplier=2.2, label="evening rush"),
    TrafficWindow(start_hour=12.5, end_hour=14.0, multiplier=1.4, label="lunch rush"),
    TrafficWindow(start_hour=19.0, end_hour=22.0, multiplier=1.6, label="weekend evening", weekday=SATURDAY),
)

# Classification thresholds for zone_status
HEAVY_TRAFFIC_THRESHOLD = 2.0
MODERATE_TRAFFIC_THRESHOLD = 1.3


def active_window(
    now: datetime,
    windows: Sequence[TrafficWindow] = CHENNAI_TRAFFIC_WINDOWS,
) -> Optional[TrafficWindow]:
    for window in windows:
        if window.matches(now):
            return window
    return None


def time_of_day_multiplier(
    now: Optional[datetime] = None,
    windows: Sequence[TrafficWindow] = CHENNAI_TRAFFIC_WINDOWS,
) -> float:
    """
    Travel-time multiplier for the given moment (defaults to the local clock).
    Returns 1.0 outside every window.
    """
    now = now or datetime.now()
    window = active_window(now, windows)
    if window is None:
        return 1.0
    return window.multiplier


def zone_status(
    lat: float,
    lng: float,
    now: Optional[datetime] = None,
    *,
    zones: Sequence[TrafficZone] = CHENNAI_TRAFFIC_ZONES,
    windows: Sequence[TrafficWindow] = CHENNAI_TRAFFIC_WINDOWS,
) -> Tuple[Optional[TrafficZone], str]:
    """
    Classify a point as light / moderate / heavy traffic.

    Points outside every congestion zone are always "light", whatever the time.
    Inside a zone, the zone factor times the current multiplier decides.
    """
    zone = find_zone(lat, lng, zones)
    if zone is None:
        return None, "light"

    total_factor = zone.factor * time_of_day_multiplier(now, windows)
    if total_factor >= HEAVY_TRAFFIC_THRESHOLD:
        return zone, "heavy"
    if total_factor >= MODERATE_TRAFFIC_THRESHOLD:
        return zone, "moderate"
    return zone, "light"
