"""Device aggregate assembly, lookups and creation.

Every device lookup is a filter clause over ``get_devices_by_query``:

    Flow -> find all devices matching the clause (one fixed join)
         -> for each device fetch its commands
         -> for each device fetch its ports
         -> for each device fetch its power states
         -> for each device fetch its roles

The base join reaches into DeviceRole so clauses can filter on role, which
means it may yield one row per (device, role). ``SELECT DISTINCT`` over the
device-level columns collapses those back to one shell per device, and the
roles themselves always come from ``get_roles_by_device_id``.

The building always comes from the device's room, the same path the command
and port queries take, so ``Devices.buildingID`` never splits an aggregate.

Clause text is appended verbatim after the fixed join; only its values are
bound as parameters. Never build a clause from end-user input.
"""

import logging
import sqlite3

from accessors.commands import get_device_commands_by_building_and_room_and_name
from accessors.definitions import (
    add_device_power_state,
    add_device_role,
    get_device_class_by_name,
    get_device_type_by_name,
    get_power_state_by_name,
    get_role_definition_by_name,
)
from accessors.errors import DuplicateDeviceError, NotFoundError, UnknownDefinitionError
from accessors.models import Building, Device, NewDevice, Room
from accessors.ports import get_device_ports_by_building_and_room_and_name
from db.client import transaction

logger = logging.getLogger(__name__)

BASE_QUERY = """SELECT DISTINCT Devices.deviceID,
       Devices.name AS deviceName,
       Devices.address AS deviceAddress,
       Devices.input,
       Devices.output,
       Devices.displayName,
       Rooms.roomID,
       Rooms.name AS roomName,
       Rooms.description AS roomDescription,
       Rooms.roomDesignation,
       Buildings.buildingID,
       Buildings.name AS buildingName,
       Buildings.shortName AS buildingShortname,
       Buildings.description AS buildingDescription,
       DeviceClasses.name AS deviceClass,
       DeviceTypes.name AS deviceType,
       AudioDevices.volume,
       AudioDevices.muted
FROM Devices
JOIN Rooms ON Rooms.roomID = Devices.roomID
JOIN Buildings ON Buildings.buildingID = Rooms.buildingID
JOIN DeviceClasses ON DeviceClasses.deviceClassID = Devices.classID
JOIN DeviceTypes ON DeviceTypes.deviceTypeID = Devices.typeID
LEFT JOIN AudioDevices ON AudioDevices.deviceID = Devices.deviceID
LEFT JOIN DeviceRole ON DeviceRole.deviceID = Devices.deviceID
LEFT JOIN DeviceRoleDefinition
     ON DeviceRoleDefinition.deviceRoleDefinitionID = DeviceRole.deviceRoleDefinitionID"""


def _row_to_device(row: sqlite3.Row) -> Device:
    building = Building(
        id=row["buildingID"],
        name=row["buildingName"],
        shortname=row["buildingShortname"],
        description=row["buildingDescription"],
    )
    room = Room(
        id=row["roomID"],
        name=row["roomName"],
        description=row["roomDescription"],
        designation=row["roomDesignation"],
    )
    return Device(
        id=row["deviceID"],
        name=row["deviceName"],
        address=row["deviceAddress"],
        input=bool(row["input"]),
        output=bool(row["output"]),
        display_name=row["displayName"],
        building=building,
        room=room,
        device_class=row["deviceClass"],
        device_type=row["deviceType"],
        volume=row["volume"],
        muted=None if row["muted"] is None else bool(row["muted"]),
    )


def get_devices_by_query(
    conn: sqlite3.Connection, clause: str = "", *params: object
) -> list[Device]:
    """Assemble complete device aggregates for every device matching ``clause``.

    Args:
        conn: Active SQLite connection.
        clause: Extra JOIN and/or WHERE text appended to the base join, e.g.
            ``"WHERE Devices.roomID = ?"``. Empty means every device.
        *params: Positional values bound to the clause's placeholders.

    Returns:
        Devices ordered by id. Any failure raises; no partial list is returned.
    """
    query = f"{BASE_QUERY} {clause} ORDER BY Devices.deviceID"
    logger.debug("Querying devices with clause %r", clause)
    rows = conn.execute(query, params).fetchall()

    devices: list[Device] = []
    for row in rows:
        device = _row_to_device(row)
        device.commands = get_device_commands_by_building_and_room_and_name(
            conn, device.building.shortname, device.room.name, device.name
        )
        device.ports = get_device_ports_by_building_and_room_and_name(
            conn, device.building.shortname, device.room.name, device.name
        )
        device.power_states = get_power_states_by_device_id(conn, device.id)
        device.roles = get_roles_by_device_id(conn, device.id)
        devices.append(device)

    return devices


def get_roles_by_device_id(conn: sqlite3.Connection, device_id: int) -> list[str]:
    """Return the names of every role linked to a device."""
    rows = conn.execute(
        """SELECT DeviceRoleDefinition.name
           FROM DeviceRoleDefinition
           JOIN DeviceRole dr
                ON dr.deviceRoleDefinitionID = DeviceRoleDefinition.deviceRoleDefinitionID
           WHERE dr.deviceID = ?
           ORDER BY DeviceRoleDefinition.name""",
        (device_id,),
    ).fetchall()
    return [row["name"] for row in rows]


def get_power_states_by_device_id(conn: sqlite3.Connection, device_id: int) -> list[str]:
    """Return the power states a device allows, from DevicePowerStates."""
    rows = conn.execute(
        """SELECT PowerStates.name
           FROM PowerStates
           JOIN DevicePowerStates
                ON DevicePowerStates.powerStateID = PowerStates.powerStateID
           WHERE DevicePowerStates.deviceID = ?
           ORDER BY PowerStates.name""",
        (device_id,),
    ).fetchall()
    return [row["name"] for row in rows]


# ── Lookup variants ────────────────────────────────────────


def get_all_devices(conn: sqlite3.Connection) -> list[Device]:
    return get_devices_by_query(conn)


def get_device_by_id(conn: sqlite3.Connection, device_id: int) -> Device:
    devices = get_devices_by_query(conn, "WHERE Devices.deviceID = ?", device_id)
    if not devices:
        raise NotFoundError(f"No devices found for ID {device_id}")
    return devices[0]


def get_device_by_building_and_room_and_name(
    conn: sqlite3.Connection, building_shortname: str, room_name: str, device_name: str
) -> Device:
    devices = get_devices_by_query(
        conn,
        "WHERE Buildings.shortName = ? AND Rooms.name = ? AND Devices.name = ?",
        building_shortname,
        room_name,
        device_name,
    )
    if not devices:
        raise NotFoundError(
            f"No device named '{device_name}' in {building_shortname}-{room_name}"
        )
    return devices[0]


def get_device_by_building_and_room_and_id(
    conn: sqlite3.Connection, building_shortname: str, room_name: str, device_id: int
) -> Device:
    """Like ``get_device_by_id`` but only if the device is in that room."""
    devices = get_devices_by_query(
        conn,
        "WHERE Buildings.shortName = ? AND Rooms.name = ? AND Devices.deviceID = ?",
        building_shortname,
        room_name,
        device_id,
    )
    if not devices:
        raise NotFoundError(
            f"No device with ID {device_id} in {building_shortname}-{room_name}"
        )
    return devices[0]


def get_devices_by_building_and_room(
    conn: sqlite3.Connection, building_shortname: str, room_name: str
) -> list[Device]:
    logger.info("Getting devices in room %s and building %s", room_name, building_shortname)
    return get_devices_by_query(
        conn,
        "WHERE Rooms.name = ? AND Buildings.shortName = ?",
        room_name,
        building_shortname,
    )


def get_devices_by_room_id(conn: sqlite3.Connection, room_id: int) -> list[Device]:
    return get_devices_by_query(conn, "WHERE Rooms.roomID = ?", room_id)


def get_devices_by_room_id_and_role_id(
    conn: sqlite3.Connection, room_id: int, role_id: int
) -> list[Device]:
    return get_devices_by_query(
        conn,
        "WHERE Rooms.roomID = ? AND DeviceRoleDefinition.deviceRoleDefinitionID = ?",
        room_id,
        role_id,
    )


def get_devices_by_building_and_room_and_role(
    conn: sqlite3.Connection, building_shortname: str, room_name: str, role_name: str
) -> list[Device]:
    """Return the devices in a room that carry the given role."""
    return get_devices_by_query(
        conn,
        "WHERE Rooms.name = ? AND Buildings.shortName = ? AND DeviceRoleDefinition.name = ?",
        room_name,
        building_shortname,
        role_name,
    )


def get_devices_by_role_and_class(
    conn: sqlite3.Connection, role_name: str, class_name: str, designation: str
) -> list[Device]:
    """Return every device with the role and class, in rooms of one designation."""
    return get_devices_by_query(
        conn,
        "WHERE DeviceRoleDefinition.name = ? AND DeviceClasses.name = ? "
        "AND Rooms.roomDesignation = ?",
        role_name,
        class_name,
        designation,
    )


# ── Creation ───────────────────────────────────────────────


def _resolve_room(
    conn: sqlite3.Connection, building_shortname: str, room_name: str
) -> sqlite3.Row:
    row = conn.execute(
        """SELECT Rooms.roomID, Rooms.buildingID
           FROM Rooms
           JOIN Buildings ON Buildings.buildingID = Rooms.buildingID
           WHERE Buildings.shortName = ? AND Rooms.name = ?""",
        (building_shortname, room_name),
    ).fetchone()
    if row is None:
        raise NotFoundError(f"Room {building_shortname}-{room_name} does not exist")
    return row


def add_device(conn: sqlite3.Connection, d: NewDevice) -> Device:
    """Create a device with its audio state, roles and power states.

    Every name is resolved before anything is written, and all inserts run
    in one transaction: either the device and all of its links exist
    afterwards, or none of them do.

    Raises:
        NotFoundError: type, class, building or room does not exist.
        DuplicateDeviceError: the room already has a device with this name.
        UnknownDefinitionError: a role or power state name is not defined.
    """
    logger.info("Adding device %s to room %s in building %s", d.name, d.room, d.building)

    device_type = get_device_type_by_name(conn, d.device_type)
    device_class = get_device_class_by_name(conn, d.device_class)
    room = _resolve_room(conn, d.building, d.room)

    try:
        get_device_by_building_and_room_and_name(conn, d.building, d.room, d.name)
    except NotFoundError:
        pass
    else:
        raise DuplicateDeviceError(
            "device already exists in room, please choose a different name"
        )

    role_ids: list[int] = []
    for role in d.roles:
        try:
            role_ids.append(get_role_definition_by_name(conn, role).id)
        except NotFoundError as e:
            raise UnknownDefinitionError(
                f"device role definition: {role} does not exist"
            ) from e

    power_state_ids: list[int] = []
    for ps in d.power_states:
        try:
            power_state_ids.append(get_power_state_by_name(conn, ps).id)
        except NotFoundError as e:
            raise UnknownDefinitionError(f"powerstate: {ps} does not exist") from e

    with transaction(conn):
        cur = conn.execute(
            """INSERT INTO Devices
               (name, address, input, output, displayName, buildingID, roomID, classID, typeID)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                d.name,
                d.address,
                d.input,
                d.output,
                d.display_name,
                room["buildingID"],
                room["roomID"],
                device_class.id,
                device_type.id,
            ),
        )
        device_id = cur.lastrowid
        logger.info("New device id: %d", device_id)

        if d.volume is not None or d.muted is not None:
            conn.execute(
                "INSERT INTO AudioDevices (deviceID, volume, muted) VALUES (?, ?, ?)",
                (device_id, d.volume or 0, bool(d.muted)),
            )
        for role_id in role_ids:
            add_device_role(conn, device_id, role_id)
        for power_state_id in power_state_ids:
            add_device_power_state(conn, device_id, power_state_id)

    device = get_device_by_id(conn, device_id)

    # keep the embedded room shallow for serialization
    device.room.devices = []
    if device.room.configuration is not None:
        device.room.configuration.evaluators = None
    return device
