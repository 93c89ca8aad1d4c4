"""Shared fixtures: a migrated database seeded with a small campus.

Layout:
    JKB (1)
      101 (room 1, production, configuration "Default")
        D1   (1) display / Sony XBR, roles VideoOut+AudioOut, on+standby
        DSP1 (2) audio / QSC Core, roles AudioIn+Microphone, on, volume 30
        PC1  (3) display / Sony XBR, no roles, no power states
      102 (room 2, non-production)
        D2   (4) display / Sony XBR, role VideoOut, on
    ITB (2)
      1101 (room 3, production)

PC1 feeds D1 through port HDMI1 (host D1). Sony XBR maps PowerOn and Standby
to the sony-control microservice.
"""

import sqlite3
from pathlib import Path

import pytest

from db.migrations import init_db


def seed_config_db(conn: sqlite3.Connection) -> None:
    conn.executemany(
        "INSERT INTO Buildings (buildingID, name, shortName, description) VALUES (?, ?, ?, ?)",
        [
            (1, "Joseph Knight Building", "JKB", "Classrooms"),
            (2, "Information Technology Building", "ITB", None),
        ],
    )
    conn.execute(
        "INSERT INTO RoomConfiguration (roomConfigurationID, name, description) VALUES (1, 'Default', 'Standard room')"
    )
    conn.executemany(
        "INSERT INTO Evaluators (evaluatorID, evaluatorKey) VALUES (?, ?)",
        [(1, "PowerOnDefault"), (2, "StandbyDefault")],
    )
    conn.executemany(
        "INSERT INTO RoomConfigurationEvaluators (roomConfigurationID, evaluatorID, priority) VALUES (?, ?, ?)",
        [(1, 2, 20), (1, 1, 10)],
    )
    conn.executemany(
        "INSERT INTO Rooms (roomID, name, description, roomDesignation, buildingID, vlan, configurationID) "
        "VALUES (?, ?, ?, ?, ?, ?, ?)",
        [
            (1, "101", "Lecture hall", "production", 1, 210, 1),
            (2, "102", "Lab", "non-production", 1, 211, None),
            (3, "1101", "Conference", "production", 2, 300, None),
        ],
    )
    conn.executemany(
        "INSERT INTO DeviceClasses (deviceClassID, name, displayName) VALUES (?, ?, ?)",
        [(1, "display", "Display"), (2, "audio", "Audio")],
    )
    conn.executemany(
        "INSERT INTO DeviceTypes (deviceTypeID, name) VALUES (?, ?)",
        [(1, "Sony XBR"), (2, "QSC Core")],
    )
    conn.executemany(
        "INSERT INTO DeviceRoleDefinition (deviceRoleDefinitionID, name) VALUES (?, ?)",
        [(1, "VideoOut"), (2, "AudioOut"), (3, "AudioIn"), (4, "Microphone")],
    )
    conn.executemany(
        "INSERT INTO PowerStates (powerStateID, name) VALUES (?, ?)",
        [(1, "on"), (2, "standby"), (3, "off")],
    )
    conn.executemany(
        "INSERT INTO Devices (deviceID, name, address, input, output, displayName, buildingID, roomID, classID, typeID) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        [
            (1, "D1", "d1.jkb.example.net", 0, 1, "Display 1", 1, 1, 1, 1),
            (2, "DSP1", "dsp1.jkb.example.net", 1, 0, "DSP", 1, 1, 2, 2),
            (3, "PC1", "pc1.jkb.example.net", 1, 0, "Computer", 1, 1, 1, 1),
            (4, "D2", "d2.jkb.example.net", 0, 1, "Display 2", 1, 2, 1, 1),
        ],
    )
    conn.execute("INSERT INTO AudioDevices (deviceID, volume, muted) VALUES (2, 30, 0)")
    conn.executemany(
        "INSERT INTO DeviceRole (deviceID, deviceRoleDefinitionID) VALUES (?, ?)",
        [(1, 1), (1, 2), (2, 3), (2, 4), (4, 1)],
    )
    conn.executemany(
        "INSERT INTO DevicePowerStates (deviceID, powerStateID) VALUES (?, ?)",
        [(1, 1), (1, 2), (2, 1), (4, 1)],
    )
    conn.execute("INSERT INTO Ports (portID, name) VALUES (1, 'HDMI1')")
    conn.execute(
        "INSERT INTO PortConfiguration (portConfigurationID, sourceDeviceID, portID, destinationDeviceID, hostDeviceID) "
        "VALUES (1, 3, 1, 1, 1)"
    )
    conn.execute(
        "INSERT INTO Microservices (microserviceID, name, address) VALUES (1, 'sony-control', 'http://sony-control:8007')"
    )
    conn.executemany(
        "INSERT INTO Endpoints (endpointID, name, path) VALUES (?, ?, ?)",
        [(1, "PowerOn", "/:address/power/on"), (2, "Standby", "/:address/power/standby")],
    )
    conn.executemany(
        "INSERT INTO Commands (commandID, name, priority) VALUES (?, ?, ?)",
        [(1, "PowerOn", 1), (2, "Standby", 2)],
    )
    conn.executemany(
        "INSERT INTO DeviceTypeCommandMapping (deviceTypeID, commandID, microserviceID, endpointID) VALUES (?, ?, ?, ?)",
        [(1, 1, 1, 1), (1, 2, 1, 2)],
    )
    conn.commit()


@pytest.fixture()
def conn(tmp_path: Path) -> sqlite3.Connection:
    connection = init_db(tmp_path / "test.db")
    yield connection
    connection.close()


@pytest.fixture()
def seeded(conn: sqlite3.Connection) -> sqlite3.Connection:
    seed_config_db(conn)
    return conn


@pytest.fixture()
def seeded_db_path(tmp_path: Path) -> str:
    path = str(tmp_path / "api.db")
    connection = init_db(path)
    seed_config_db(connection)
    connection.close()
    return path
