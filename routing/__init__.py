#Marks routing as a package.
#Re-exports the public geo / traffic / route APIs so other modules import from routing
#without knowing internal file names.
#No business logic.

from .geo import InvalidCoordinateError, LatLon, distance_km, validate_coordinate
from .geofence import CHENNAI_TRAFFIC_ZONES, TrafficZone, congestion_factor, find_zone
from .traffic import CHENNAI_TRAFFIC_WINDOWS, TrafficWindow, time_of_day_multiplier, zone_status
from .eta_service import estimate_eta_minutes
from .route_service import RouteEstimate, build_polyline, estimate_route, generate_route_instructions

__all__ = [
    "InvalidCoordinateError",
    "LatLon",
    "distance_km",
    "validate_coordinate",
    "CHENNAI_TRAFFIC_ZONES",
    "TrafficZone",
    "congestion_factor",
    "find_zone",
    "CHENNAI_TRAFFIC_WINDOWS",
    "TrafficWindow",
    "time_of_day_multiplier",
    "zone_status",
    "estimate_eta_minutes",
    "RouteEstimate",
    "build_polyline",
    "estimate_route",
    "generate_route_instructions",
]
