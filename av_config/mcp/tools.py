"""MCP tool implementations for av-config.

Each function takes a sqlite3.Connection and explicit params, returns a dict.
Accessor errors come back as ``{"error": <kind>, "message": <text>}`` so a
calling agent can read them; storage errors still raise.
The server module registers these as MCP tools.
"""

import sqlite3
from collections.abc import Callable
from dataclasses import asdict
from typing import Any

from accessors import buildings, devices, rooms
from accessors.attributes import DEVICE_ATTRIBUTES, set_device_attribute as _set_attribute
from accessors.errors import AccessorError


def _call(fn: Callable[..., Any], *args: Any) -> Any:
    try:
        return fn(*args)
    except AccessorError as e:
        return {"error": e.kind, "message": str(e)}


def list_buildings(conn: sqlite3.Connection) -> dict[str, Any]:
    """Return every building."""
    return {"buildings": [asdict(b) for b in buildings.get_all_buildings(conn)]}


def get_room(conn: sqlite3.Connection, building: str, room: str) -> dict[str, Any]:
    """Return one room with its devices and configuration."""
    result = _call(rooms.get_room_by_building_and_name, conn, building, room)
    return result if isinstance(result, dict) else asdict(result)


def list_rooms(conn: sqlite3.Connection, building: str | None = None) -> dict[str, Any]:
    """Return all rooms, or the rooms of one building."""
    if building is None:
        found = rooms.get_all_rooms(conn)
    else:
        found = rooms.get_rooms_by_building(conn, building)
    return {"rooms": [asdict(r) for r in found]}


def get_devices_in_room(
    conn: sqlite3.Connection, building: str, room: str, role: str | None = None
) -> dict[str, Any]:
    """Return the devices in a room, optionally only those with a role."""
    if role is None:
        found = devices.get_devices_by_building_and_room(conn, building, room)
    else:
        found = devices.get_devices_by_building_and_room_and_role(
            conn, building, room, role
        )
    return {"devices": [asdict(d) for d in found]}


def get_device(conn: sqlite3.Connection, device_id: int) -> dict[str, Any]:
    """Return one device aggregate by id."""
    result = _call(devices.get_device_by_id, conn, device_id)
    return result if isinstance(result, dict) else asdict(result)


def set_device_attribute(
    conn: sqlite3.Connection, device_id: int, attribute: str, value: str
) -> dict[str, Any]:
    """Set one allow-listed device field and return the refreshed device."""
    result = _call(_set_attribute, conn, device_id, attribute, value)
    return result if isinstance(result, dict) else asdict(result)


def list_device_attributes() -> dict[str, Any]:
    """Return the writable device fields and their kinds."""
    return {
        "attributes": {
            name: attr.kind.value for name, attr in DEVICE_ATTRIBUTES.items()
        }
    }
