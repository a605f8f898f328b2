"""
Unit tests for `app/services/mappers.py` - upstream payload to RoomDevice mapping.

Covers the hub entity mapping (fixed AC type, power derived from the state
string), capability-based type inference and field precedence for cloud
registry devices, and the rule that missing capabilities produce absent
fields rather than nulls.
"""

from datetime import datetime, timezone

import pytest

from app.schemas.rooms import DeviceType
from app.services.mappers import (
    as_number,
    infer_device_type,
    map_device_status,
    map_device_summary,
    map_entity_state,
)
from fakes import ENTITY_ID, ac_status, build_settings, st_device

NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


def test_hub_example_entity_maps_to_single_ac():
    payload = {"state": "cool", "attributes": {"temperature": 24, "current_temperature": 26}}
    device = map_entity_state(ENTITY_ID, payload, build_settings(), NOW)

    out = device.to_payload()
    assert out["id"] == ENTITY_ID
    assert out["type"] == "ac"
    assert out["power"] is True
    assert out["mode"] == "cool"
    assert out["tempSet"] == 24
    assert out["tempCur"] == 26
    assert out["updatedAt"].startswith("2026-10-19T08:30:00")


def test_hub_off_state_means_power_false():
    device = map_entity_state(ENTITY_ID, {"state": "off", "attributes": {}}, build_settings(), NOW)
    assert device.power is False
    assert device.mode == "off"


@pytest.mark.parametrize("state", ["heat", "dry", "fan_only", "auto", "unavailable", "Off"])
def test_hub_any_other_state_means_power_true(state):
    device = map_entity_state(ENTITY_ID, {"state": state}, build_settings(), NOW)
    assert device.power is True


def test_hub_missing_attributes_leave_temperatures_absent():
    device = map_entity_state(ENTITY_ID, {"state": "cool"}, build_settings(), NOW)
    out = device.to_payload()
    assert "tempSet" not in out
    assert "tempCur" not in out


def test_hub_uses_friendly_name_then_defaults():
    settings = build_settings(DEFAULT_ROOM_NAME="Living room", DEFAULT_DEVICE_NAME="AC")
    named = map_entity_state(
        ENTITY_ID, {"state": "cool", "attributes": {"friendly_name": "Big AC"}}, settings, NOW
    )
    unnamed = map_entity_state(ENTITY_ID, {"state": "cool"}, settings, NOW)

    assert named.name == "Big AC"
    assert unnamed.name == "AC"
    assert unnamed.room == "Living room"


@pytest.mark.parametrize("value, expected", [
    (24, 24),
    (23.5, 23.5),
    ("24", None),
    (True, None),
    (None, None),
    (float("nan"), None),
    (float("inf"), None),
    (10 ** 400, None),
])
def test_as_number_only_accepts_finite_numbers(value, expected):
    assert as_number(value) == expected


def test_registry_ac_device_maps_all_fields():
    device = st_device("ac-1", label="Bedroom AC", room="Bedroom")
    out = map_device_status(device, ac_status(), build_settings(), NOW).to_payload()

    assert out == {
        "id": "ac-1",
        "type": "ac",
        "name": "Bedroom AC",
        "room": "Bedroom",
        "power": True,
        "mode": "cool",
        "tempSet": 24,
        "tempCur": 26,
        "updatedAt": out["updatedAt"],
    }


def test_registry_switch_off_means_power_false():
    out = map_device_status(st_device("ac-1"), ac_status(switch="off"), build_settings(), NOW)
    assert out.power is False


@pytest.mark.parametrize("component, expected", [
    ({"airConditionerMode": {"airConditionerMode": {"value": "cool"}}}, DeviceType.AC),
    ({"airPurifierFanMode": {"airPurifierFanMode": {"value": "auto"}}}, DeviceType.PURIFIER),
    ({"dustSensor": {"dustLevel": {"value": 12}}}, DeviceType.PURIFIER),
    ({"switch": {"switch": {"value": "on"}}}, DeviceType.DEVICE),
    ({}, DeviceType.DEVICE),
])
def test_type_inference_from_capabilities(component, expected):
    assert infer_device_type(component) == expected


def test_every_mapped_type_is_enumerated():
    statuses = [
        ac_status(),
        {"components": {"main": {"dustSensor": {"fineDustLevel": {"value": 3}}}}},
        {"components": {"main": {"switch": {"switch": {"value": "off"}}}}},
        {"components": {}},
        {},
    ]
    for status in statuses:
        device = map_device_status(st_device("d"), status, build_settings(), NOW)
        assert device.to_payload()["type"] in {"ac", "purifier", "device"}


def test_device_without_climate_capabilities_has_absent_fields():
    status = {"components": {"main": {"healthCheck": {"DeviceWatch-Enroll": {"value": {}}}}}}
    out = map_device_status(st_device("plug-1"), status, build_settings(), NOW).to_payload()

    assert out["type"] == "device"
    for key in ("power", "mode", "tempSet", "tempCur"):
        assert key not in out


def test_mode_precedence_prefers_ac_mode_then_thermostat_then_operation():
    main = {
        "airConditionerMode": {"airConditionerMode": {"value": "dry"}},
        "thermostatMode": {"thermostatMode": {"value": "heat"}},
        "operationMode": {"value": "eco"},
    }
    settings = build_settings()
    device = st_device("d")

    assert map_device_status(device, {"components": {"main": main}}, settings, NOW).mode == "dry"
    del main["airConditionerMode"]
    assert map_device_status(device, {"components": {"main": main}}, settings, NOW).mode == "heat"
    del main["thermostatMode"]
    assert map_device_status(device, {"components": {"main": main}}, settings, NOW).mode == "eco"


def test_setpoint_precedence_and_non_numeric_values_dropped():
    main = {
        "thermostatCoolingSetpoint": {"coolingSetpoint": {"value": 22}},
        "thermostatSetpoint": {"thermostatSetpoint": {"value": 20}},
        "temperatureMeasurement": {"temperature": {"value": "warm"}},
    }
    settings = build_settings()

    device = map_device_status(st_device("d"), {"components": {"main": main}}, settings, NOW)
    assert device.temp_set == 22
    assert device.temp_cur is None

    del main["thermostatCoolingSetpoint"]
    device = map_device_status(st_device("d"), {"components": {"main": main}}, settings, NOW)
    assert device.temp_set == 20


def test_non_numeric_cooling_setpoint_does_not_fall_through():
    main = {
        "thermostatCoolingSetpoint": {"coolingSetpoint": {"value": "24"}},
        "thermostatSetpoint": {"thermostatSetpoint": {"value": 20}},
    }
    device = map_device_status(st_device("d"), {"components": {"main": main}}, build_settings(), NOW)

    assert device.temp_set is None
    assert "tempSet" not in device.to_payload()


def test_oversized_integers_are_absent_not_errors():
    huge = 10 ** 400
    main = {
        "thermostatCoolingSetpoint": {"coolingSetpoint": {"value": huge}},
        "temperatureMeasurement": {"temperature": {"value": huge}},
    }
    registry_device = map_device_status(st_device("d"), {"components": {"main": main}}, build_settings(), NOW)
    hub_device = map_entity_state(
        ENTITY_ID, {"state": "cool", "attributes": {"temperature": huge}}, build_settings(), NOW
    )

    assert registry_device.temp_set is None
    assert registry_device.temp_cur is None
    assert hub_device.temp_set is None


def test_registry_name_and_room_fallbacks():
    settings = build_settings(DEFAULT_ROOM_NAME="Home", DEFAULT_DEVICE_NAME="Gadget")

    labelled = map_device_status(st_device("a", label="Label"), {}, settings, NOW)
    raw_named = map_device_status(st_device("b"), {}, settings, NOW)
    nameless = map_device_status({"deviceId": "c"}, {}, settings, NOW)

    assert labelled.name == "Label"
    assert raw_named.name == "raw-b"
    assert nameless.name == "Gadget"
    assert nameless.room == "Home"
    assert map_device_status({"deviceId": "c"}, {}, build_settings(), NOW).room == ""


def test_summary_uses_profile_then_ocf_type():
    settings = build_settings()
    with_profile = st_device("a", room="Den", profile={"id": "p1", "name": "Samsung AC"})
    with_ocf = st_device("b", ocf={"deviceType": "oic.d.airpurifier"})
    plain = st_device("c")

    assert map_device_summary(with_profile, settings).type == "Samsung AC"
    assert map_device_summary(with_profile, settings).room == "Den"
    assert map_device_summary(with_ocf, settings).type == "oic.d.airpurifier"
    assert map_device_summary(plain, settings).type == "device"
