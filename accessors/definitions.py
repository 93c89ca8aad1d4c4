"""Controlled vocabularies: device classes, device types, role definitions
and power states, plus the link rows that attach roles and power states to
devices.

Lookups by name raise ``NotFoundError``; nothing here creates a definition
implicitly.
"""

import logging
import sqlite3

from accessors.errors import NotFoundError
from accessors.models import (
    DeviceClass,
    DevicePowerState,
    DeviceRole,
    DeviceType,
    PowerState,
    RoleDefinition,
)

logger = logging.getLogger(__name__)


# ── Device classes ─────────────────────────────────────────


def _row_to_device_class(row: sqlite3.Row) -> DeviceClass:
    return DeviceClass(
        id=row["deviceClassID"],
        name=row["name"],
        display_name=row["displayName"],
        description=row["description"],
    )


def get_device_classes(conn: sqlite3.Connection) -> list[DeviceClass]:
    rows = conn.execute(
        "SELECT * FROM DeviceClasses ORDER BY deviceClassID"
    ).fetchall()
    return [_row_to_device_class(row) for row in rows]


def get_device_class_by_name(conn: sqlite3.Connection, name: str) -> DeviceClass:
    row = conn.execute(
        "SELECT * FROM DeviceClasses WHERE name = ?", (name,)
    ).fetchone()
    if row is None:
        raise NotFoundError(f"Device class '{name}' does not exist")
    return _row_to_device_class(row)


def add_device_class(
    conn: sqlite3.Connection,
    name: str,
    display_name: str | None = None,
    description: str | None = None,
) -> DeviceClass:
    cur = conn.execute(
        "INSERT INTO DeviceClasses (name, displayName, description) VALUES (?, ?, ?)",
        (name, display_name, description),
    )
    conn.commit()
    logger.info("Added device class %s", name)
    return DeviceClass(
        id=cur.lastrowid, name=name, display_name=display_name, description=description
    )


# ── Device types ───────────────────────────────────────────


def _row_to_device_type(row: sqlite3.Row) -> DeviceType:
    return DeviceType(
        id=row["deviceTypeID"], name=row["name"], description=row["description"]
    )


def get_device_types(conn: sqlite3.Connection) -> list[DeviceType]:
    rows = conn.execute("SELECT * FROM DeviceTypes ORDER BY deviceTypeID").fetchall()
    return [_row_to_device_type(row) for row in rows]


def get_device_type_by_name(conn: sqlite3.Connection, name: str) -> DeviceType:
    row = conn.execute("SELECT * FROM DeviceTypes WHERE name = ?", (name,)).fetchone()
    if row is None:
        raise NotFoundError(f"Device type '{name}' does not exist")
    return _row_to_device_type(row)


def add_device_type(
    conn: sqlite3.Connection, name: str, description: str | None = None
) -> DeviceType:
    cur = conn.execute(
        "INSERT INTO DeviceTypes (name, description) VALUES (?, ?)",
        (name, description),
    )
    conn.commit()
    logger.info("Added device type %s", name)
    return DeviceType(id=cur.lastrowid, name=name, description=description)


# ── Role definitions ───────────────────────────────────────


def _row_to_role_definition(row: sqlite3.Row) -> RoleDefinition:
    return RoleDefinition(
        id=row["deviceRoleDefinitionID"],
        name=row["name"],
        description=row["description"],
    )


def get_role_definitions(conn: sqlite3.Connection) -> list[RoleDefinition]:
    rows = conn.execute(
        "SELECT * FROM DeviceRoleDefinition ORDER BY deviceRoleDefinitionID"
    ).fetchall()
    return [_row_to_role_definition(row) for row in rows]


def get_role_definition_by_name(conn: sqlite3.Connection, name: str) -> RoleDefinition:
    row = conn.execute(
        "SELECT * FROM DeviceRoleDefinition WHERE name = ?", (name,)
    ).fetchone()
    if row is None:
        raise NotFoundError(f"Device role definition '{name}' does not exist")
    return _row_to_role_definition(row)


def add_role_definition(
    conn: sqlite3.Connection, name: str, description: str | None = None
) -> RoleDefinition:
    cur = conn.execute(
        "INSERT INTO DeviceRoleDefinition (name, description) VALUES (?, ?)",
        (name, description),
    )
    conn.commit()
    logger.info("Added role definition %s", name)
    return RoleDefinition(id=cur.lastrowid, name=name, description=description)


# ── Power states ───────────────────────────────────────────


def get_power_states(conn: sqlite3.Connection) -> list[PowerState]:
    rows = conn.execute(
        "SELECT powerStateID, name FROM PowerStates ORDER BY powerStateID"
    ).fetchall()
    return [PowerState(id=row["powerStateID"], name=row["name"]) for row in rows]


def get_power_state_by_name(conn: sqlite3.Connection, name: str) -> PowerState:
    row = conn.execute(
        "SELECT powerStateID, name FROM PowerStates WHERE name = ?", (name,)
    ).fetchone()
    if row is None:
        raise NotFoundError(f"Power state '{name}' does not exist")
    return PowerState(id=row["powerStateID"], name=row["name"])


def add_power_state(conn: sqlite3.Connection, name: str) -> PowerState:
    cur = conn.execute("INSERT INTO PowerStates (name) VALUES (?)", (name,))
    conn.commit()
    logger.info("Added power state %s", name)
    return PowerState(id=cur.lastrowid, name=name)


# ── Link rows ──────────────────────────────────────────────
#
# These do not commit; callers run them inside db.client.transaction().


def add_device_role(
    conn: sqlite3.Connection, device_id: int, role_definition_id: int
) -> DeviceRole:
    cur = conn.execute(
        "INSERT INTO DeviceRole (deviceID, deviceRoleDefinitionID) VALUES (?, ?)",
        (device_id, role_definition_id),
    )
    return DeviceRole(
        id=cur.lastrowid, device_id=device_id, role_definition_id=role_definition_id
    )


def add_device_power_state(
    conn: sqlite3.Connection, device_id: int, power_state_id: int
) -> DevicePowerState:
    cur = conn.execute(
        "INSERT INTO DevicePowerStates (deviceID, powerStateID) VALUES (?, ?)",
        (device_id, power_state_id),
    )
    return DevicePowerState(
        id=cur.lastrowid, device_id=device_id, power_state_id=power_state_id
    )


def get_device_power_states(conn: sqlite3.Connection) -> list[DevicePowerState]:
    """Return every device/power-state link row."""
    rows = conn.execute(
        """SELECT devicePowerStateID, deviceID, powerStateID
           FROM DevicePowerStates
           ORDER BY devicePowerStateID"""
    ).fetchall()
    return [
        DevicePowerState(
            id=row["devicePowerStateID"],
            device_id=row["deviceID"],
            power_state_id=row["powerStateID"],
        )
        for row in rows
    ]
