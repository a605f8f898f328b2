"""Pure mapping from upstream payloads to RoomDevice records.

Both upstreams describe climate devices differently: the local hub exposes a
single entity with a state string and attributes, the cloud registry exposes
capability status objects per component. Missing capabilities always map to
absent fields.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional

from app.core.config import Settings
from app.schemas.rooms import DeviceSnapshot, DeviceType, RoomDevice

# Errors a malformed upstream document can raise while being mapped
MAPPING_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError)


def as_number(value: Any) -> Optional[float]:
    """Return value if it is a finite int/float (bools excluded), else None.

    Integers too large for a float count as non-numbers.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return value


def _capability_value(component: Dict[str, Any], capability: str, attribute: str) -> Any:
    """Read component[capability][attribute]["value"], tolerating gaps"""
    cap = component.get(capability)
    if not isinstance(cap, dict):
        return None
    attr = cap.get(attribute)
    if not isinstance(attr, dict):
        return None
    return attr.get("value")


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _first_not_none(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def map_entity_state(entity_id: str, payload: Dict[str, Any], settings: Settings,
                     now: datetime) -> RoomDevice:
    """Map a hub entity state to the single AC record it represents"""
    state = payload.get("state")
    attributes = payload.get("attributes") or {}
    if not isinstance(attributes, dict):
        attributes = {}

    return RoomDevice(
        id=entity_id,
        type=DeviceType.AC,
        name=attributes.get("friendly_name") or settings.DEFAULT_DEVICE_NAME,
        room=settings.DEFAULT_ROOM_NAME,
        power=state != "off",
        mode=state,
        temp_set=as_number(attributes.get("temperature")),
        temp_cur=as_number(attributes.get("current_temperature")),
        updated_at=now,
    )


def infer_device_type(component: Dict[str, Any]) -> DeviceType:
    if component.get("airConditionerMode"):
        return DeviceType.AC
    if component.get("airPurifierFanMode") or component.get("dustSensor"):
        return DeviceType.PURIFIER
    return DeviceType.DEVICE


def _display_name(device: Dict[str, Any], settings: Settings) -> str:
    return device.get("label") or device.get("name") or settings.DEFAULT_DEVICE_NAME


def _room_name(device: Dict[str, Any], settings: Settings) -> str:
    room = device.get("room")
    name = room.get("name") if isinstance(room, dict) else None
    return name or settings.DEFAULT_ROOM_NAME or ""


def map_device_status(device: Dict[str, Any], status: Dict[str, Any], settings: Settings,
                      now: datetime) -> RoomDevice:
    """Map a registry device and its status document to a RoomDevice.

    Only the ``main`` component is read. Mode precedence is air conditioner
    mode, then thermostat mode, then a generic operation mode; setpoint
    precedence is cooling setpoint, then the generic thermostat setpoint; the
    first setpoint present wins even when it is not a number (then absent).
    """
    components = status.get("components") if isinstance(status, dict) else None
    main = components.get("main") if isinstance(components, dict) else None
    if not isinstance(main, dict):
        main = {}

    switch = _capability_value(main, "switch", "switch")
    operation_mode = main.get("operationMode")
    if isinstance(operation_mode, dict) and "value" in operation_mode:
        generic_mode = operation_mode.get("value")
    else:
        generic_mode = _capability_value(main, "operationMode", "operationMode")

    mode = _first_present(
        _capability_value(main, "airConditionerMode", "airConditionerMode"),
        _capability_value(main, "thermostatMode", "thermostatMode"),
        generic_mode,
    )

    return RoomDevice(
        id=device["deviceId"],
        type=infer_device_type(main),
        name=_display_name(device, settings),
        room=_room_name(device, settings),
        power=(switch == "on") if switch is not None else None,
        mode=str(mode) if mode is not None else None,
        temp_set=as_number(_first_not_none(
            _capability_value(main, "thermostatCoolingSetpoint", "coolingSetpoint"),
            _capability_value(main, "thermostatSetpoint", "thermostatSetpoint"),
        )),
        temp_cur=as_number(_capability_value(main, "temperatureMeasurement", "temperature")),
        updated_at=now,
    )


def map_device_summary(device: Dict[str, Any], settings: Settings) -> DeviceSnapshot:
    """Map a registry listing entry to a snapshot record (no status)"""
    profile = device.get("profile")
    ocf = device.get("ocf")
    device_type = _first_present(
        profile.get("name") if isinstance(profile, dict) else None,
        ocf.get("deviceType") if isinstance(ocf, dict) else None,
    )
    return DeviceSnapshot(
        id=device["deviceId"],
        name=device.get("label") or device.get("name"),
        room=_room_name(device, settings),
        type=device_type or "device",
    )
