from dataclasses import replace

import pytest

from conftest import CHENNAI_CENTER, QUIET_TIME
from dispatch import config
from dispatch.dispatcher import Dispatcher, InvalidCallUpdateError, build_dispatcher
from dispatch.state_machines.ambulance_state import AmbulanceStateException
from dispatch.state_machines.call_state import CallStateException, transition_call
from hospitals.models import AmbulanceStatus, CallStatus
from hospitals.repository import HospitalRepository, RecordNotFoundError, StoreUnavailableError
from routing.geo import InvalidCoordinateError


def file_call(dispatcher, emergency_type="medical", priority="critical"):
    lat, lng = CHENNAI_CENTER
    return dispatcher.create_emergency_call("Central Station", lat, lng, emergency_type, priority)


class BrokenHospitalRepository(HospitalRepository):
    def list(self):
        raise StoreUnavailableError("hospital store offline")


# --- Hospitals ---

def test_rank_nearest_uses_only_available_hospitals(dispatcher):
    ranked = dispatcher.rank_nearest_hospitals(*CHENNAI_CENTER, "medical")
    assert [entry.id for entry in ranked] == ["near", "mid", "far"]


def test_rank_nearest_suitable_only_override(dispatcher):
    ranked = dispatcher.rank_nearest_hospitals(*CHENNAI_CENTER, "trauma", suitable_only=True)
    assert [entry.id for entry in ranked] == ["near"]

    # the stored policy is untouched
    assert dispatcher.policy.suitable_only is False
    assert len(dispatcher.rank_nearest_hospitals(*CHENNAI_CENTER, "trauma")) == 3


def test_availability_update_is_seen_by_the_next_ranking(dispatcher, notifier):
    dispatcher.update_hospital_availability("near", False, reason="ER full")

    ranked = dispatcher.rank_nearest_hospitals(*CHENNAI_CENTER, "medical")
    assert [entry.id for entry in ranked] == ["mid", "far"]
    assert notifier.events[-1] == (
        "hospital_availability_update",
        {"hospitalId": "near", "available": False, "reason": "ER full"},
    )


def test_availability_update_for_unknown_hospital(dispatcher):
    with pytest.raises(RecordNotFoundError):
        dispatcher.update_hospital_availability("missing", True)


def test_route_check_works_for_an_unavailable_hospital(dispatcher):
    hospital, route = dispatcher.estimate_route_to("closed", CHENNAI_CENTER[0] + 0.09, CHENNAI_CENTER[1])

    assert hospital.id == "closed"
    assert route.eta_minutes == 15
    assert route.polyline[-1] == hospital.location


def test_traffic_status_outside_every_zone(dispatcher):
    assert dispatcher.traffic_status(*CHENNAI_CENTER) == (None, "light")


def test_store_failure_propagates():
    dispatcher = Dispatcher(hospitals=BrokenHospitalRepository())

    with pytest.raises(StoreUnavailableError):
        dispatcher.rank_nearest_hospitals(*CHENNAI_CENTER, "medical")


# --- Emergency calls ---

def test_create_emergency_call(dispatcher, notifier):
    call = file_call(dispatcher)

    assert call.status == CallStatus.ACTIVE
    assert dispatcher.get_emergency_call(call.id) == call
    assert dispatcher.list_active_emergency_calls() == [call]
    assert notifier.events[-1] == ("new_emergency_call", {"emergencyCallId": call.id})


def test_invalid_coordinates_are_rejected_before_storing(dispatcher):
    with pytest.raises(InvalidCoordinateError):
        dispatcher.create_emergency_call("Nowhere", 95.0, 80.0, "medical", "high")

    assert dispatcher.list_active_emergency_calls() == []


def test_file_emergency_returns_the_three_nearest(dispatcher):
    lat, lng = CHENNAI_CENTER
    intake = dispatcher.file_emergency("Central Station", lat, lng, "medical", "high")

    assert intake.call.status == CallStatus.ACTIVE
    assert [entry.id for entry in intake.nearest_hospitals] == ["near", "mid", "far"]
    assert intake.recommended_hospital.id == "near"
    assert intake.estimated_dispatch_time == 3


def test_file_emergency_with_nothing_available(dispatcher):
    for hospital_id in ("near", "mid", "far"):
        dispatcher.update_hospital_availability(hospital_id, False)

    intake = dispatcher.file_emergency("Central Station", *CHENNAI_CENTER, "medical", "high")

    assert intake.nearest_hospitals == []
    assert intake.recommended_hospital is None
    assert intake.estimated_dispatch_time is None


def test_unknown_call_id(dispatcher):
    with pytest.raises(RecordNotFoundError):
        dispatcher.get_emergency_call("nope")


def test_update_emergency_call_fields_and_status(dispatcher):
    call = file_call(dispatcher)

    updated = dispatcher.update_emergency_call(call.id, location="Platform 4", priority="medium")
    assert updated.location == "Platform 4"
    assert updated.priority.value == "medium"

    cancelled = dispatcher.update_emergency_call(call.id, status="cancelled")
    assert cancelled.status == CallStatus.CANCELLED
    assert dispatcher.list_active_emergency_calls() == []


def test_update_emergency_call_rejects_bad_changes(dispatcher):
    call = file_call(dispatcher)

    with pytest.raises(InvalidCallUpdateError):
        dispatcher.update_emergency_call(call.id, id="other")

    # active calls must be dispatched before they complete
    with pytest.raises(CallStateException):
        dispatcher.update_emergency_call(call.id, status="completed")


def test_call_lifecycle_transitions(dispatcher):
    call = file_call(dispatcher)

    dispatched = transition_call(call, CallStatus.DISPATCHED)
    completed = transition_call(dispatched, CallStatus.COMPLETED)
    assert completed.status == CallStatus.COMPLETED

    with pytest.raises(CallStateException):
        transition_call(completed, CallStatus.ACTIVE)


# --- Dispatch ---

def test_dispatch_records_hospital_eta_and_ambulance(dispatcher, notifier):
    call = file_call(dispatcher)

    dispatched = dispatcher.dispatch(call.id, "far", ambulance_id="AMB001")

    assert dispatched.status == CallStatus.DISPATCHED
    assert dispatched.selected_hospital_id == "far"
    assert dispatched.estimated_time == 15
    assert dispatched.distance == 10.01
    assert dispatcher.get_emergency_call(call.id) == dispatched

    ambulance = dispatcher.ambulances.require("AMB001")
    assert ambulance.status == AmbulanceStatus.EN_ROUTE
    assert ambulance.emergency_call_id == call.id

    assert notifier.events[-1] == (
        "ambulance_dispatched",
        {"emergencyCallId": call.id, "hospitalId": "far", "ambulanceId": "AMB001"},
    )


def test_dispatch_to_unknown_hospital_changes_nothing(dispatcher):
    call = file_call(dispatcher)

    with pytest.raises(RecordNotFoundError):
        dispatcher.dispatch(call.id, "missing", ambulance_id="AMB001")

    assert dispatcher.get_emergency_call(call.id).status == CallStatus.ACTIVE
    assert dispatcher.ambulances.require("AMB001").status == AmbulanceStatus.AVAILABLE


def test_dispatch_with_ambulance_in_maintenance_changes_nothing(dispatcher):
    call = file_call(dispatcher)
    ambulance = dispatcher.ambulances.require("AMB002")
    dispatcher.ambulances.upsert(replace(ambulance, status=AmbulanceStatus.MAINTENANCE))

    with pytest.raises(AmbulanceStateException):
        dispatcher.dispatch(call.id, "near", ambulance_id="AMB002")

    assert dispatcher.get_emergency_call(call.id).status == CallStatus.ACTIVE


def test_dispatch_of_a_closed_call_is_rejected(dispatcher):
    call = file_call(dispatcher)
    dispatcher.update_emergency_call(call.id, status="cancelled")

    with pytest.raises(CallStateException):
        dispatcher.dispatch(call.id, "near")


def test_redispatch_replaces_the_selection(dispatcher):
    call = file_call(dispatcher)
    dispatcher.dispatch(call.id, "far")

    redispatched = dispatcher.dispatch(call.id, "near")
    assert redispatched.selected_hospital_id == "near"
    assert redispatched.estimated_time == 3


# --- Ambulances ---

def test_default_fleet(dispatcher):
    ambulances = dispatcher.list_ambulances()

    assert [ambulance.id for ambulance in ambulances] == [f"AMB00{i}" for i in range(1, 9)]
    assert [ambulance.status for ambulance in ambulances].count(AmbulanceStatus.AVAILABLE) == 6


def test_assign_ambulance(dispatcher, notifier):
    call = file_call(dispatcher)

    ambulance = dispatcher.assign_ambulance("AMB003", call.id)

    assert ambulance.status == AmbulanceStatus.EN_ROUTE
    assert ambulance.emergency_call_id == call.id
    assert notifier.events[-1][0] == "ambulance_assigned"


def test_assign_ambulance_to_unknown_call(dispatcher):
    with pytest.raises(RecordNotFoundError):
        dispatcher.assign_ambulance("AMB003", "nope")


def test_update_ambulance_location(dispatcher):
    ambulance = dispatcher.update_ambulance_location("AMB004", 13.05, 80.25)

    assert (ambulance.current_latitude, ambulance.current_longitude) == (13.05, 80.25)
    assert dispatcher.ambulances.require("AMB004") == ambulance

    with pytest.raises(InvalidCoordinateError):
        dispatcher.update_ambulance_location("AMB004", 13.05, 200.0)


# --- Status ---

def test_system_status(dispatcher):
    file_call(dispatcher)

    status = dispatcher.system_status()

    assert status.hospitals_total == 4
    assert status.hospitals_available == 3
    assert status.availability_percentage == 75
    assert status.ambulances_total == 8
    assert status.ambulances_available == 6
    assert status.ambulances_en_route == 2
    assert status.ambulances_maintenance == 0
    assert status.active_emergencies == 1


def test_system_status_without_hospitals():
    status = Dispatcher(hospitals=HospitalRepository()).system_status()

    assert status.hospitals_total == 0
    assert status.availability_percentage == 0


# --- Clock ---

def test_timestamps_follow_the_dispatcher_clock(dispatcher):
    call = file_call(dispatcher)
    assert call.created_at == call.updated_at == QUIET_TIME

    dispatched = dispatcher.dispatch(call.id, "near", ambulance_id="AMB001")
    assert dispatched.updated_at == QUIET_TIME
    assert dispatcher.ambulances.require("AMB001").last_updated == QUIET_TIME

    updated = dispatcher.update_emergency_call(call.id, location="Platform 2", status="completed")
    assert updated.updated_at == QUIET_TIME

    assert dispatcher.update_hospital_availability("mid", False).last_updated == QUIET_TIME
    assert dispatcher.update_ambulance_location("AMB005", 13.05, 80.25).last_updated == QUIET_TIME
    assert dispatcher.assign_ambulance("AMB006", call.id).last_updated == QUIET_TIME


# --- Wiring ---

def test_build_dispatcher_from_seed_file():
    dispatcher = build_dispatcher(config.HOSPITAL_DATA_PATH)

    assert len(dispatcher.list_hospitals()) == 11
    assert len(dispatcher.list_ambulances()) == 8
    assert dispatcher.list_active_emergency_calls() == []
