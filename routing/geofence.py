#Purpose: Static congestion-zone geofencing.
#A congestion zone is a fixed circle (center + radius km) with a traffic multiplier
#that does not depend on time of day.
#Typical responsibilities:
#hold the seeded city zones (configuration, not derived data)
#find the first zone containing a point (declaration order wins on overlap)
#return the congestion factor for a point (1.0 outside every zone)
#Output: zone lookups consumed by the traffic model and ETA policy.

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from routing.geo import distance_km


@dataclass(frozen=True) #immutable, zones never change at runtime
class TrafficZone:
    """
    A circular congestion area.
    radius_km is compared against the great-circle distance from the center.
    """

    lat: float
    lng: float
    radius_km: float
    factor: float
    name: str

    def contains(self, lat: float, lng: float) -> bool:
        return distance_km(lat, lng, self.lat, self.lng) <= self.radius_km


# Chennai congestion zones, in precedence order
CHENNAI_TRAFFIC_ZONES: Tuple[TrafficZone, ...] = (
    TrafficZone(lat=13.0418, lng=80.2341, radius_km=2.0, factor=1.5, name="T. Nagar Commercial Area"),
    TrafficZone(lat=13.0605, lng=80.2496, radius_km=1.5, factor=1.3, name="Anna Salai Corridor"),
    TrafficZone(lat=13.0493, lng=80.2137, radius_km=1.0, factor=1.2, name="Vadapalani Junction"),
    TrafficZone(lat=12.9915, lng=80.2207, radius_km=2.5, factor=1.4, name="Guindy Industrial Area"),
    TrafficZone(lat=13.0358, lng=80.1565, radius_km=3.0, factor=1.3, name="Porur IT Corridor"),
)


def find_zone(
        lat: float,
        lng: float,
        zones: Sequence[TrafficZone] = CHENNAI_TRAFFIC_ZONES,
) -> Optional[TrafficZone]:
    """
    First zone (in declaration order) whose radius covers the point, else None.
    """
    for zone in zones:
        if zone.contains(lat, lng):
            return zone
    return None


def congestion_factor(
        lat: float,
        lng: float,
        zones: Sequence[TrafficZone] = CHENNAI_TRAFFIC_ZONES,
) -> float:
    """
    Congestion multiplier for a point: the first matching zone's factor, or 1.0.
    """
    zone = find_zone(lat, lng, zones)
    if zone is None:
        return 1.0
    return zone.factor
