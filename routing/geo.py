#Purpose: Great-circle geometry shared by ranking and traffic zones.
#Haversine distance in kilometers between two (lat, lon) points.
#No routing graph, no projections. Straight-line only.
#Coordinate range checks are a caller precondition: distance_km never validates,
#callers that accept user input use validate_coordinate first.

from typing import Tuple
import math

#internal coordinate type :(lat,lon)
LatLon = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0


class InvalidCoordinateError(ValueError):
    """Raised when a latitude/longitude pair is outside the valid range."""
    pass


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine great-circle distance in kilometers.

    Symmetric in its two points and exactly 0.0 for identical points.
    Any finite input is accepted.
    """
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(delta_lon / 2) ** 2
    )
    # rounding can push a just past 1 for near-antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def validate_coordinate(lat: float, lng: float) -> LatLon:
    """
    Returns (lat, lng) as floats, or raises InvalidCoordinateError.
    """
    lat = float(lat)
    lng = float(lng)
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinateError(f"latitude {lat} is outside [-90, 90]")
    if not -180.0 <= lng <= 180.0:
        raise InvalidCoordinateError(f"longitude {lng} is outside [-180, 180]")
    return lat, lng
