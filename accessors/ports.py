"""Device ports and port configurations.

A port configuration links a source, destination and host device through a
named port: one physical or logical signal path.
"""

import logging
import sqlite3

from accessors.models import Port, PortConfiguration

logger = logging.getLogger(__name__)


def get_device_ports_by_building_and_room_and_name(
    conn: sqlite3.Connection,
    building_shortname: str,
    room_name: str,
    device_name: str,
) -> list[Port]:
    """Return the ports hosted by one device."""
    rows = conn.execute(
        """SELECT srcDevice.name AS sourceName,
                  Ports.name AS portName,
                  destDevice.name AS destinationName,
                  hostDevice.name AS hostName
           FROM Ports
           JOIN PortConfiguration ON PortConfiguration.portID = Ports.portID
           JOIN Devices AS srcDevice ON srcDevice.deviceID = PortConfiguration.sourceDeviceID
           JOIN Devices AS destDevice ON destDevice.deviceID = PortConfiguration.destinationDeviceID
           JOIN Devices AS hostDevice ON hostDevice.deviceID = PortConfiguration.hostDeviceID
           JOIN Rooms ON Rooms.roomID = hostDevice.roomID
           JOIN Buildings ON Buildings.buildingID = Rooms.buildingID
           WHERE Rooms.name = ? AND Buildings.shortName = ? AND hostDevice.name = ?
           ORDER BY PortConfiguration.portConfigurationID""",
        (room_name, building_shortname, device_name),
    ).fetchall()

    return [
        Port(
            source=row["sourceName"],
            name=row["portName"],
            destination=row["destinationName"],
            host=row["hostName"],
        )
        for row in rows
    ]


def _row_to_port_configuration(row: sqlite3.Row) -> PortConfiguration:
    return PortConfiguration(
        id=row["portConfigurationID"],
        source_device_id=row["sourceDeviceID"],
        port_id=row["portID"],
        destination_device_id=row["destinationDeviceID"],
        host_device_id=row["hostDeviceID"],
    )


def get_port_configurations(conn: sqlite3.Connection) -> list[PortConfiguration]:
    rows = conn.execute(
        """SELECT portConfigurationID, sourceDeviceID, portID,
                  destinationDeviceID, hostDeviceID
           FROM PortConfiguration
           ORDER BY portConfigurationID"""
    ).fetchall()
    return [_row_to_port_configuration(row) for row in rows]


def add_port_configuration(
    conn: sqlite3.Connection, pc: PortConfiguration
) -> PortConfiguration:
    """Insert a port configuration under its explicit id.

    Unknown device or port ids fail on the foreign keys with
    ``sqlite3.IntegrityError``.
    """
    logger.info(
        "Adding port configuration %d: %d -> %d via port %d on %d",
        pc.id,
        pc.source_device_id,
        pc.destination_device_id,
        pc.port_id,
        pc.host_device_id,
    )
    conn.execute(
        """INSERT INTO PortConfiguration
           (portConfigurationID, sourceDeviceID, portID, destinationDeviceID, hostDeviceID)
           VALUES (?, ?, ?, ?, ?)""",
        (
            pc.id,
            pc.source_device_id,
            pc.port_id,
            pc.destination_device_id,
            pc.host_device_id,
        ),
    )
    conn.commit()
    return pc
