"""REST route handlers for the av-config API.

Routes are thin: they check path parameters, call one accessor and convert
the resulting dataclasses to dicts. Accessor and storage errors are not
caught here; the app's exception handlers turn them into 500 responses.
"""

import sqlite3
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from accessors import buildings, definitions, devices, ports, rooms
from accessors.attributes import set_device_attribute, set_device_attribute_by_name
from accessors.models import NewDevice, PortConfiguration
from api.deps import get_db
from api.models import (
    BuildingResponse,
    CreateBuildingRequest,
    CreateDefinitionRequest,
    CreateDeviceClassRequest,
    CreateDeviceRequest,
    CreatePowerStateRequest,
    CreateRoomRequest,
    DefinitionResponse,
    DeviceAttributeRequest,
    DeviceClassResponse,
    DeviceResponse,
    PortConfigurationModel,
    PowerStateResponse,
    RoomResponse,
)

router = APIRouter()


def _require(**params: str) -> None:
    """Reject blank path parameters with a 400."""
    for name, value in params.items():
        if not value.strip():
            raise HTTPException(status_code=400, detail=f"Missing or empty '{name}'")


def _dump(items: list[Any]) -> list[dict[str, Any]]:
    return [asdict(item) for item in items]


# ── Building endpoints ─────────────────────────────────────


@router.get("/buildings", response_model=list[BuildingResponse])
def list_buildings(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    """List all buildings."""
    return _dump(buildings.get_all_buildings(conn))


@router.get("/buildings/{building}", response_model=BuildingResponse)
def get_building(
    building: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Look up a building by id, shortname or name."""
    _require(building=building)
    return asdict(buildings.lookup_building(conn, building))


@router.post("/buildings", response_model=BuildingResponse)
def create_building(
    body: CreateBuildingRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return asdict(
        buildings.make_building(conn, body.name, body.shortname, body.description)
    )


@router.get("/buildings/{building}/rooms", response_model=list[RoomResponse])
def list_rooms_in_building(
    building: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    """List the rooms of a building, by shortname."""
    _require(building=building)
    return _dump(rooms.get_rooms_by_building(conn, building))


# ── Room endpoints ─────────────────────────────────────────


@router.get("/rooms", response_model=list[RoomResponse])
def list_rooms(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(rooms.get_all_rooms(conn))


@router.get("/rooms/{room}", response_model=RoomResponse)
def get_room(
    room: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Look up a room by id (all digits) or by name."""
    _require(room=room)
    if room.isdigit():
        return asdict(rooms.get_room_by_id(conn, int(room)))
    return asdict(rooms.get_room_by_name(conn, room))


@router.post("/rooms", response_model=RoomResponse)
def create_room(
    body: CreateRoomRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Create a room in an existing building."""
    room = rooms.make_room(
        conn,
        body.name,
        body.building,
        body.vlan,
        designation=body.designation,
        description=body.description,
        configuration_id=body.configuration_id,
    )
    return asdict(room)


@router.get(
    "/rooms/{room_id}/roles/{role_id}/devices", response_model=list[DeviceResponse]
)
def list_devices_by_room_and_role_id(
    room_id: int,
    role_id: int,
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(devices.get_devices_by_room_id_and_role_id(conn, room_id, role_id))


# ── Device endpoints ───────────────────────────────────────


@router.get(
    "/buildings/{building}/rooms/{room}/devices", response_model=list[DeviceResponse]
)
def list_devices_in_room(
    building: str,
    room: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    """List every device in a room."""
    _require(building=building, room=room)
    return _dump(devices.get_devices_by_building_and_room(conn, building, room))


@router.get(
    "/buildings/{building}/rooms/{room}/devices/{device}",
    response_model=DeviceResponse,
)
def get_device_in_room(
    building: str,
    room: str,
    device: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Get one device by id (all digits) or by name within the room."""
    _require(building=building, room=room, device=device)
    if device.isdigit():
        return asdict(
            devices.get_device_by_building_and_room_and_id(conn, building, room, int(device))
        )
    return asdict(
        devices.get_device_by_building_and_room_and_name(conn, building, room, device)
    )


@router.get(
    "/buildings/{building}/rooms/{room}/role/{role}",
    response_model=list[DeviceResponse],
)
def list_devices_by_role(
    building: str,
    room: str,
    role: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    """List the devices in a room that carry a role."""
    _require(building=building, room=room, role=role)
    return _dump(
        devices.get_devices_by_building_and_room_and_role(conn, building, room, role)
    )


@router.put(
    "/buildings/{building}/rooms/{room}/devices/{device}/attributes/{attribute}/{value}",
    response_model=DeviceResponse,
)
def put_device_attribute_by_name(
    building: str,
    room: str,
    device: str,
    attribute: str,
    value: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    _require(building=building, room=room, device=device, attribute=attribute)
    return asdict(
        set_device_attribute_by_name(conn, building, room, device, attribute, value)
    )


@router.get("/devices", response_model=list[DeviceResponse])
def list_devices(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(devices.get_all_devices(conn))


@router.put("/devices/attribute", response_model=DeviceResponse)
def put_device_attribute(
    body: DeviceAttributeRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Set one allow-listed field on a device; returns the refreshed device."""
    device = set_device_attribute(
        conn, body.device_id, body.attribute_name, body.attribute_value
    )
    return asdict(device)


@router.get(
    "/devices/roles/{role}/classes/{device_class}/{designation}",
    response_model=list[DeviceResponse],
)
def list_devices_by_role_and_class(
    role: str,
    device_class: str,
    designation: str,
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    _require(role=role, device_class=device_class, designation=designation)
    return _dump(
        devices.get_devices_by_role_and_class(conn, role, device_class, designation)
    )


@router.get("/devices/{device_id}", response_model=DeviceResponse)
def get_device(
    device_id: int,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return asdict(devices.get_device_by_id(conn, device_id))


@router.post("/devices", response_model=DeviceResponse)
def create_device(
    body: CreateDeviceRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Create a device from names; roles and power states must already exist."""
    new_device = NewDevice(
        name=body.name,
        building=body.building,
        room=body.room,
        device_type=body.type,
        device_class=body.device_class,
        address=body.address,
        input=body.input,
        output=body.output,
        display_name=body.display_name,
        volume=body.volume,
        muted=body.muted,
        roles=body.roles,
        power_states=body.power_states,
    )
    return asdict(devices.add_device(conn, new_device))


# ── Definition endpoints ───────────────────────────────────


@router.get("/deviceclasses", response_model=list[DeviceClassResponse])
def list_device_classes(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(definitions.get_device_classes(conn))


@router.post("/deviceclasses", response_model=DeviceClassResponse)
def create_device_class(
    body: CreateDeviceClassRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return asdict(
        definitions.add_device_class(
            conn, body.name, body.display_name, body.description
        )
    )


@router.get("/devicetypes", response_model=list[DefinitionResponse])
def list_device_types(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(definitions.get_device_types(conn))


@router.post("/devicetypes", response_model=DefinitionResponse)
def create_device_type(
    body: CreateDefinitionRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return asdict(definitions.add_device_type(conn, body.name, body.description))


@router.get("/roledefinitions", response_model=list[DefinitionResponse])
def list_role_definitions(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(definitions.get_role_definitions(conn))


@router.post("/roledefinitions", response_model=DefinitionResponse)
def create_role_definition(
    body: CreateDefinitionRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return asdict(definitions.add_role_definition(conn, body.name, body.description))


@router.get("/powerstates", response_model=list[PowerStateResponse])
def list_power_states(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(definitions.get_power_states(conn))


@router.post("/powerstates", response_model=PowerStateResponse)
def create_power_state(
    body: CreatePowerStateRequest,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return asdict(definitions.add_power_state(conn, body.name))


# ── Port configuration endpoints ───────────────────────────


@router.get("/portconfigurations", response_model=list[PortConfigurationModel])
def list_port_configurations(
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    return _dump(ports.get_port_configurations(conn))


@router.post("/portconfigurations/{pc_id}", response_model=PortConfigurationModel)
def create_port_configuration(
    pc_id: str,
    body: PortConfigurationModel,
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Add a port configuration; the path id and the body id must match."""
    if pc_id != str(body.id):
        raise HTTPException(
            status_code=400, detail="Endpoint parameter and json id must match!"
        )
    pc = PortConfiguration(**body.model_dump())
    return asdict(ports.add_port_configuration(conn, pc))
