import math
import random
from datetime import datetime

import pytest

from routing.eta_service import estimate_eta_minutes, round_half_up
from routing.geo import InvalidCoordinateError, distance_km, validate_coordinate
from routing.geofence import CHENNAI_TRAFFIC_ZONES, TrafficZone, congestion_factor, find_zone
from routing.traffic import active_window, time_of_day_multiplier, zone_status

T_NAGAR = (13.0418, 80.2341)
VADAPALANI = (13.0493, 80.2137)
CITY_CENTER = (13.0827, 80.2707)

# 2024-01-10 is a Wednesday, 2024-01-13 a Saturday
WEDNESDAY = (2024, 1, 10)
SATURDAY = (2024, 1, 13)


def at(day, hour, minute=0, second=0):
    return datetime(*day, hour, minute, second)


# --- Distance ---

def test_distance_is_zero_for_identical_points():
    assert distance_km(13.0827, 80.2707, 13.0827, 80.2707) == 0.0


def test_distance_is_symmetric():
    forward = distance_km(*CITY_CENTER, *T_NAGAR)
    backward = distance_km(*T_NAGAR, *CITY_CENTER)
    assert forward == pytest.approx(backward)
    assert forward > 0


def test_distance_along_a_meridian_matches_the_arc_length():
    lat, lng = CITY_CENTER
    north = lat + math.degrees(10 / 6371)
    assert distance_km(lat, lng, north, lng) == pytest.approx(10.0, abs=1e-6)


def test_distance_between_near_antipodal_points_is_half_the_circumference():
    half_circumference = math.pi * 6371.0

    distance = distance_km(69.51232454868148, 86.5812282599507, -69.51232454868148, -93.4187717400493)

    assert distance == pytest.approx(half_circumference)


def test_distance_is_finite_and_symmetric_for_antipodal_pairs():
    rng = random.Random(2024)
    half_circumference = math.pi * 6371.0

    for _ in range(500):
        lat = rng.uniform(-90, 90)
        lng = rng.uniform(-180, 180)
        antipode = (-lat, lng - 180 if lng > 0 else lng + 180)

        forward = distance_km(lat, lng, *antipode)
        backward = distance_km(*antipode, lat, lng)

        assert math.isfinite(forward)
        assert forward == pytest.approx(backward)
        assert forward == pytest.approx(half_circumference, rel=1e-6)


def test_validate_coordinate_rejects_out_of_range_values():
    assert validate_coordinate("13.08", 80.27) == (13.08, 80.27)

    with pytest.raises(InvalidCoordinateError):
        validate_coordinate(91, 80.0)
    with pytest.raises(InvalidCoordinateError):
        validate_coordinate(13.0, -180.5)

    # still a ValueError for generic handlers
    with pytest.raises(ValueError):
        validate_coordinate(-95, 0)


# --- Time-of-day multiplier ---

@pytest.mark.parametrize(
    "moment, expected",
    [
        (at(WEDNESDAY, 3), 1.0),
        (at(WEDNESDAY, 8), 1.8),
        (at(WEDNESDAY, 9), 1.8),
        (at(WEDNESDAY, 10, 30, 59), 1.8),  # seconds ignored, 10:30 is inclusive
        (at(WEDNESDAY, 10, 31), 1.0),
        (at(WEDNESDAY, 12, 29), 1.0),
        (at(WEDNESDAY, 12, 30), 1.4),
        (at(WEDNESDAY, 14), 1.4),
        (at(WEDNESDAY, 18), 2.2),
        (at(WEDNESDAY, 21), 2.2),
        (at(WEDNESDAY, 21, 30), 1.0),
        (at(SATURDAY, 19, 30), 2.2),  # evening rush shadows the weekend window
        (at(SATURDAY, 21, 30), 1.6),
        (at(SATURDAY, 22, 1), 1.0),
    ],
)
def test_time_of_day_multiplier(moment, expected):
    assert time_of_day_multiplier(moment) == expected


def test_active_window_is_none_off_peak():
    assert active_window(at(WEDNESDAY, 3)) is None
    assert active_window(at(SATURDAY, 21, 30)).label == "weekend evening"


# --- Congestion zones ---

def test_congestion_factor_inside_and_outside_zones():
    assert congestion_factor(*T_NAGAR) == 1.5
    assert congestion_factor(*VADAPALANI) == 1.2
    assert congestion_factor(*CITY_CENTER) == 1.0


def test_first_declared_zone_wins_on_overlap():
    zones = (
        TrafficZone(lat=13.0, lng=80.0, radius_km=2.0, factor=1.7, name="first"),
        TrafficZone(lat=13.0, lng=80.0, radius_km=5.0, factor=1.1, name="second"),
    )
    assert find_zone(13.0, 80.0, zones).name == "first"
    assert congestion_factor(13.0, 80.0, zones) == 1.7


def test_zone_contains_points_within_its_radius():
    zone = CHENNAI_TRAFFIC_ZONES[0]
    assert zone.contains(zone.lat, zone.lng)
    just_outside = zone.lat + math.degrees((zone.radius_km + 0.01) / 6371)
    assert not zone.contains(just_outside, zone.lng)


def test_zone_status_levels():
    assert zone_status(*CITY_CENTER, at(WEDNESDAY, 9)) == (None, "light")

    zone, level = zone_status(*T_NAGAR, at(WEDNESDAY, 3))
    assert zone.name == "T. Nagar Commercial Area"
    assert level == "moderate"

    # 1.5 * 1.8 = 2.7
    assert zone_status(*T_NAGAR, at(WEDNESDAY, 9))[1] == "heavy"

    # 1.2 below the moderate threshold when there is no rush
    zone, level = zone_status(*VADAPALANI, at(WEDNESDAY, 3))
    assert zone.name == "Vadapalani Junction"
    assert level == "light"


# --- ETA ---

def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12


def test_eta_applies_multipliers_and_floor():
    assert estimate_eta_minutes(10.0) == 15
    assert estimate_eta_minutes(10.0, 1.8) == 27
    assert estimate_eta_minutes(10.0, 1.8, 1.5) == 41  # 40.5 rounds up
    assert estimate_eta_minutes(0.0) == 3
    assert estimate_eta_minutes(1.0, 2.2, 1.5) == 5
    assert estimate_eta_minutes(0.5) == 3


def test_eta_uses_the_configured_speed_and_floor():
    assert estimate_eta_minutes(20.0, average_speed_kmh=60.0) == 20
    assert estimate_eta_minutes(0.1, min_eta_minutes=0) == 0
