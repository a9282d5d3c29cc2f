import os
import random
from datetime import datetime

import pytest

from dispatch.dispatcher import Dispatcher
from hospitals.data_loader import build_ambulance_repository
from hospitals.models import Hospital
from hospitals.repository import HospitalRepository

# Wednesday
QUIET_TIME = datetime(2024, 1, 10, 3, 0)
MORNING_RUSH = datetime(2024, 1, 10, 9, 0)

CHENNAI_CENTER = (13.0827, 80.2707)


def pytest_configure(config):
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.dispatch_backend.settings")

    import django
    django.setup()


def make_hospital(hospital_id, lat, lng, **overrides):
    fields = dict(
        type="multi_specialty",
        emergency_level="level_2",
        capacity="medium",
        specialties=("emergency",),
        cost="moderate",
    )
    fields.update(overrides)
    return Hospital.new(hospital_id, f"Hospital {hospital_id}", lat, lng, **fields)


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def broadcast(self, event_type, payload):
        self.events.append((event_type, payload))


@pytest.fixture
def hospitals():
    """
    Four hospitals north of the city center (outside every congestion zone)
    plus one unavailable hospital sitting right on the center.
    """
    lat, lng = CHENNAI_CENTER
    return [
        make_hospital("far", lat + 0.09, lng, capacity="high"),
        make_hospital("near", lat + 0.018, lng, capacity="high",
                      emergency_level="level_1_trauma", specialties=("emergency", "trauma")),
        make_hospital("mid", lat + 0.045, lng, cost="free", type="government"),
        make_hospital("closed", lat, lng, available=False, capacity="very_high"),
    ]


@pytest.fixture
def hospital_repository(hospitals):
    repository = HospitalRepository()
    for hospital in hospitals:
        repository.upsert(hospital)
    return repository


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dispatcher(hospital_repository, notifier):
    return Dispatcher(
        hospitals=hospital_repository,
        ambulances=build_ambulance_repository(random.Random(7)),
        notifier=notifier,
        clock=lambda: QUIET_TIME,
        rng=random.Random(42),
    )
