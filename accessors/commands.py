"""Command resolution for devices.

A device type maps to a set of commands; each mapping names the endpoint
and the microservice that carries the command out.
"""

import logging
import sqlite3

from accessors.models import Command, Endpoint

logger = logging.getLogger(__name__)


def get_device_commands_by_building_and_room_and_name(
    conn: sqlite3.Connection,
    building_shortname: str,
    room_name: str,
    device_name: str,
) -> list[Command]:
    """Return the commands for one device, resolved through its device type.

    Device names are assumed unique within a room.
    """
    logger.debug(
        "Getting commands for %s-%s-%s", building_shortname, room_name, device_name
    )
    rows = conn.execute(
        """SELECT Commands.name AS commandName,
                  Commands.priority AS commandPriority,
                  Endpoints.name AS endpointName,
                  Endpoints.path AS endpointPath,
                  Microservices.address AS microserviceAddress
           FROM Devices
           JOIN DeviceTypes ON DeviceTypes.deviceTypeID = Devices.typeID
           JOIN DeviceTypeCommandMapping TypeCommands
                ON TypeCommands.deviceTypeID = DeviceTypes.deviceTypeID
           JOIN Commands ON Commands.commandID = TypeCommands.commandID
           JOIN Endpoints ON Endpoints.endpointID = TypeCommands.endpointID
           JOIN Microservices ON Microservices.microserviceID = TypeCommands.microserviceID
           JOIN Rooms ON Rooms.roomID = Devices.roomID
           JOIN Buildings ON Buildings.buildingID = Rooms.buildingID
           WHERE Rooms.name = ? AND Buildings.shortName = ? AND Devices.name = ?
           ORDER BY Commands.priority, Commands.name""",
        (room_name, building_shortname, device_name),
    ).fetchall()

    return [
        Command(
            name=row["commandName"],
            endpoint=Endpoint(name=row["endpointName"], path=row["endpointPath"]),
            microservice=row["microserviceAddress"],
            priority=row["commandPriority"],
        )
        for row in rows
    ]
