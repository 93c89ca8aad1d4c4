"""Database table definitions for av-config.

Uses raw SQL strings. Table and column names follow the AV-control
platform's configuration schema (PascalCase tables, camelCase columns) so
existing tooling and queries keep working against this store.
"""

TABLES = {
    "Buildings": """
        CREATE TABLE IF NOT EXISTS Buildings (
            buildingID  INTEGER PRIMARY KEY AUTOINCREMENT,
            name        TEXT NOT NULL COLLATE NOCASE,
            shortName   TEXT NOT NULL UNIQUE COLLATE NOCASE,
            description TEXT
        )
    """,
    "RoomConfiguration": """
        CREATE TABLE IF NOT EXISTS RoomConfiguration (
            roomConfigurationID INTEGER PRIMARY KEY AUTOINCREMENT,
            name                TEXT NOT NULL UNIQUE COLLATE NOCASE,
            description         TEXT
        )
    """,
    "Evaluators": """
        CREATE TABLE IF NOT EXISTS Evaluators (
            evaluatorID  INTEGER PRIMARY KEY AUTOINCREMENT,
            evaluatorKey TEXT NOT NULL UNIQUE,
            description  TEXT
        )
    """,
    "RoomConfigurationEvaluators": """
        CREATE TABLE IF NOT EXISTS RoomConfigurationEvaluators (
            roomConfigurationEvaluatorID INTEGER PRIMARY KEY AUTOINCREMENT,
            roomConfigurationID INTEGER NOT NULL REFERENCES RoomConfiguration(roomConfigurationID),
            evaluatorID         INTEGER NOT NULL REFERENCES Evaluators(evaluatorID),
            priority            INTEGER NOT NULL DEFAULT 0
        )
    """,
    "Rooms": """
        CREATE TABLE IF NOT EXISTS Rooms (
            roomID             INTEGER PRIMARY KEY AUTOINCREMENT,
            name               TEXT NOT NULL COLLATE NOCASE,
            description        TEXT,
            roomDesignation    TEXT,
            buildingID         INTEGER NOT NULL REFERENCES Buildings(buildingID),
            vlan               INTEGER,
            currentVideoInput  INTEGER,
            currentVideoOutput INTEGER,
            currentAudioInput  INTEGER,
            currentAudioOutput INTEGER,
            configurationID    INTEGER REFERENCES RoomConfiguration(roomConfigurationID),
            UNIQUE (buildingID, name)
        )
    """,
    "DeviceClasses": """
        CREATE TABLE IF NOT EXISTS DeviceClasses (
            deviceClassID INTEGER PRIMARY KEY AUTOINCREMENT,
            name          TEXT NOT NULL UNIQUE COLLATE NOCASE,
            displayName   TEXT,
            description   TEXT
        )
    """,
    "DeviceTypes": """
        CREATE TABLE IF NOT EXISTS DeviceTypes (
            deviceTypeID INTEGER PRIMARY KEY AUTOINCREMENT,
            name         TEXT NOT NULL UNIQUE COLLATE NOCASE,
            description  TEXT
        )
    """,
    "Devices": """
        CREATE TABLE IF NOT EXISTS Devices (
            deviceID    INTEGER PRIMARY KEY AUTOINCREMENT,
            name        TEXT NOT NULL COLLATE NOCASE,
            address     TEXT,
            input       INTEGER NOT NULL DEFAULT 0,
            output      INTEGER NOT NULL DEFAULT 0,
            displayName TEXT,
            buildingID  INTEGER NOT NULL REFERENCES Buildings(buildingID),
            roomID      INTEGER NOT NULL REFERENCES Rooms(roomID),
            classID     INTEGER NOT NULL REFERENCES DeviceClasses(deviceClassID),
            typeID      INTEGER NOT NULL REFERENCES DeviceTypes(deviceTypeID),
            UNIQUE (roomID, name)
        )
    """,
    "AudioDevices": """
        CREATE TABLE IF NOT EXISTS AudioDevices (
            deviceID INTEGER PRIMARY KEY REFERENCES Devices(deviceID),
            volume   INTEGER NOT NULL DEFAULT 0,
            muted    INTEGER NOT NULL DEFAULT 0
        )
    """,
    "DeviceRoleDefinition": """
        CREATE TABLE IF NOT EXISTS DeviceRoleDefinition (
            deviceRoleDefinitionID INTEGER PRIMARY KEY AUTOINCREMENT,
            name                   TEXT NOT NULL UNIQUE COLLATE NOCASE,
            description            TEXT
        )
    """,
    "DeviceRole": """
        CREATE TABLE IF NOT EXISTS DeviceRole (
            deviceRoleID           INTEGER PRIMARY KEY AUTOINCREMENT,
            deviceID               INTEGER NOT NULL REFERENCES Devices(deviceID),
            deviceRoleDefinitionID INTEGER NOT NULL REFERENCES DeviceRoleDefinition(deviceRoleDefinitionID),
            UNIQUE(deviceID, deviceRoleDefinitionID)
        )
    """,
    "PowerStates": """
        CREATE TABLE IF NOT EXISTS PowerStates (
            powerStateID INTEGER PRIMARY KEY AUTOINCREMENT,
            name         TEXT NOT NULL UNIQUE COLLATE NOCASE
        )
    """,
    "DevicePowerStates": """
        CREATE TABLE IF NOT EXISTS DevicePowerStates (
            devicePowerStateID INTEGER PRIMARY KEY AUTOINCREMENT,
            deviceID           INTEGER NOT NULL REFERENCES Devices(deviceID),
            powerStateID       INTEGER NOT NULL REFERENCES PowerStates(powerStateID),
            UNIQUE(deviceID, powerStateID)
        )
    """,
    "Ports": """
        CREATE TABLE IF NOT EXISTS Ports (
            portID      INTEGER PRIMARY KEY AUTOINCREMENT,
            name        TEXT NOT NULL UNIQUE COLLATE NOCASE,
            description TEXT
        )
    """,
    "PortConfiguration": """
        CREATE TABLE IF NOT EXISTS PortConfiguration (
            portConfigurationID INTEGER PRIMARY KEY AUTOINCREMENT,
            sourceDeviceID      INTEGER NOT NULL REFERENCES Devices(deviceID),
            portID              INTEGER NOT NULL REFERENCES Ports(portID),
            destinationDeviceID INTEGER NOT NULL REFERENCES Devices(deviceID),
            hostDeviceID        INTEGER NOT NULL REFERENCES Devices(deviceID)
        )
    """,
    "Microservices": """
        CREATE TABLE IF NOT EXISTS Microservices (
            microserviceID INTEGER PRIMARY KEY AUTOINCREMENT,
            name           TEXT NOT NULL UNIQUE,
            address        TEXT NOT NULL,
            description    TEXT
        )
    """,
    "Endpoints": """
        CREATE TABLE IF NOT EXISTS Endpoints (
            endpointID  INTEGER PRIMARY KEY AUTOINCREMENT,
            name        TEXT NOT NULL UNIQUE,
            path        TEXT NOT NULL,
            description TEXT
        )
    """,
    "Commands": """
        CREATE TABLE IF NOT EXISTS Commands (
            commandID   INTEGER PRIMARY KEY AUTOINCREMENT,
            name        TEXT NOT NULL UNIQUE,
            description TEXT,
            priority    INTEGER NOT NULL DEFAULT 0
        )
    """,
    "DeviceTypeCommandMapping": """
        CREATE TABLE IF NOT EXISTS DeviceTypeCommandMapping (
            deviceTypeCommandMappingID INTEGER PRIMARY KEY AUTOINCREMENT,
            deviceTypeID   INTEGER NOT NULL REFERENCES DeviceTypes(deviceTypeID),
            commandID      INTEGER NOT NULL REFERENCES Commands(commandID),
            microserviceID INTEGER NOT NULL REFERENCES Microservices(microserviceID),
            endpointID     INTEGER NOT NULL REFERENCES Endpoints(endpointID),
            UNIQUE(deviceTypeID, commandID)
        )
    """,
}

# Creation order follows foreign key dependencies
TABLE_CREATION_ORDER = [
    "Buildings",
    "RoomConfiguration",
    "Evaluators",
    "RoomConfigurationEvaluators",
    "Rooms",
    "DeviceClasses",
    "DeviceTypes",
    "Devices",
    "AudioDevices",
    "DeviceRoleDefinition",
    "DeviceRole",
    "PowerStates",
    "DevicePowerStates",
    "Ports",
    "PortConfiguration",
    "Microservices",
    "Endpoints",
    "Commands",
    "DeviceTypeCommandMapping",
]
