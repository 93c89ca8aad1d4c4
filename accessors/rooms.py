"""Room lookups and creation.

List lookups return shallow rooms (building only). Single-room lookups
assemble the full aggregate: building, devices and room configuration.
"""

import logging
import sqlite3

from accessors.buildings import get_building_by_shortname
from accessors.devices import get_devices_by_building_and_room
from accessors.errors import NotFoundError
from accessors.models import Building, Evaluator, Room, RoomConfiguration

logger = logging.getLogger(__name__)

_SELECT = """SELECT Rooms.*,
       Buildings.name AS buildingName,
       Buildings.shortName AS buildingShortname,
       Buildings.description AS buildingDescription
FROM Rooms
JOIN Buildings ON Buildings.buildingID = Rooms.buildingID"""


def _row_to_room(row: sqlite3.Row) -> Room:
    return Room(
        id=row["roomID"],
        name=row["name"],
        description=row["description"],
        designation=row["roomDesignation"],
        vlan=row["vlan"],
        building=Building(
            id=row["buildingID"],
            name=row["buildingName"],
            shortname=row["buildingShortname"],
            description=row["buildingDescription"],
        ),
        current_video_input=row["currentVideoInput"],
        current_video_output=row["currentVideoOutput"],
        current_audio_input=row["currentAudioInput"],
        current_audio_output=row["currentAudioOutput"],
        configuration_id=row["configurationID"],
    )


def _query_rooms(conn: sqlite3.Connection, clause: str, *params: object) -> list[Room]:
    rows = conn.execute(
        f"{_SELECT} {clause} ORDER BY Rooms.roomID", params  # noqa: S608
    ).fetchall()
    return [_row_to_room(row) for row in rows]


def _populate(conn: sqlite3.Connection, room: Room) -> Room:
    """Fill in a room's devices and configuration."""
    logger.debug("Getting device info for %s-%s", room.building.shortname, room.name)
    room.devices = get_devices_by_building_and_room(
        conn, room.building.shortname, room.name
    )
    if room.configuration_id is not None:
        room.configuration = get_configuration_by_id(conn, room.configuration_id)
    return room


def get_configuration_by_id(
    conn: sqlite3.Connection, configuration_id: int
) -> RoomConfiguration:
    """Return a room configuration with its evaluators in priority order."""
    row = conn.execute(
        "SELECT * FROM RoomConfiguration WHERE roomConfigurationID = ?",
        (configuration_id,),
    ).fetchone()
    if row is None:
        raise NotFoundError(f"No room configuration found for ID {configuration_id}")

    evaluators = conn.execute(
        """SELECT Evaluators.evaluatorID, Evaluators.evaluatorKey,
                  Evaluators.description, rce.priority
           FROM RoomConfigurationEvaluators rce
           JOIN Evaluators ON Evaluators.evaluatorID = rce.evaluatorID
           WHERE rce.roomConfigurationID = ?
           ORDER BY rce.priority, Evaluators.evaluatorKey""",
        (configuration_id,),
    ).fetchall()

    return RoomConfiguration(
        id=row["roomConfigurationID"],
        name=row["name"],
        description=row["description"],
        evaluators=[
            Evaluator(
                id=e["evaluatorID"],
                key=e["evaluatorKey"],
                description=e["description"],
                priority=e["priority"],
            )
            for e in evaluators
        ],
    )


def get_all_rooms(conn: sqlite3.Connection) -> list[Room]:
    return _query_rooms(conn, "")


def get_rooms_by_building(conn: sqlite3.Connection, building_shortname: str) -> list[Room]:
    return _query_rooms(conn, "WHERE Buildings.shortName = ?", building_shortname)


def get_room_by_id(conn: sqlite3.Connection, room_id: int) -> Room:
    rooms = _query_rooms(conn, "WHERE Rooms.roomID = ?", room_id)
    if not rooms:
        raise NotFoundError(f"No room found for ID {room_id}")
    return _populate(conn, rooms[0])


def get_room_by_name(conn: sqlite3.Connection, name: str) -> Room:
    """Return the lowest-id room with this name, across all buildings."""
    rooms = _query_rooms(conn, "WHERE Rooms.name = ?", name)
    if not rooms:
        raise NotFoundError(f"No room found named '{name}'")
    return _populate(conn, rooms[0])


def get_room_by_building_and_name(
    conn: sqlite3.Connection, building_shortname: str, name: str
) -> Room:
    logger.info("Getting room info for %s-%s", building_shortname, name)
    building = get_building_by_shortname(conn, building_shortname)
    rooms = _query_rooms(
        conn, "WHERE Rooms.buildingID = ? AND Rooms.name = ?", building.id, name
    )
    if not rooms:
        raise NotFoundError(f"No room named '{name}' in building {building_shortname}")
    return _populate(conn, rooms[0])


def make_room(
    conn: sqlite3.Connection,
    name: str,
    building_shortname: str,
    vlan: int,
    designation: str | None = None,
    description: str | None = None,
    configuration_id: int | None = None,
) -> Room:
    """Insert a room into an existing building and return the assembled room."""
    try:
        building = get_building_by_shortname(conn, building_shortname)
    except NotFoundError as e:
        raise NotFoundError(
            f'Could not find a building with the "{building_shortname}" shortname'
        ) from e

    logger.info("Adding room %s to building %s", name, building.shortname)
    conn.execute(
        """INSERT INTO Rooms
           (name, buildingID, vlan, roomDesignation, description, configurationID)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (name, building.id, vlan, designation, description, configuration_id),
    )
    conn.commit()

    return get_room_by_building_and_name(conn, building.shortname, name)
