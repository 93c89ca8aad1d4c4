"""Single-field device updates.

Only the fields in ``DEVICE_ATTRIBUTES`` can be written. The field name is
checked and the value parsed to its declared kind before a statement is
built, so request input never reaches the SQL text.
"""

import enum
import logging
import re
import sqlite3
from dataclasses import dataclass

from accessors.devices import get_device_by_building_and_room_and_name, get_device_by_id
from accessors.errors import InvalidAttributeError, RowCountError
from accessors.models import Device
from db.client import transaction

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# SQLite INTEGER is a signed 64-bit value
_INTEGER_MIN = -(2**63)
_INTEGER_MAX = 2**63 - 1


class AttributeKind(enum.Enum):
    """Scalar kinds an attribute can hold. Each kind parses its own values."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"

    def parse(self, value: str) -> str | int | bool:
        """Convert a string-encoded value, or raise InvalidAttributeError."""
        if self is AttributeKind.STRING:
            return value
        if self is AttributeKind.INTEGER:
            if not _INTEGER_RE.fullmatch(value):
                raise InvalidAttributeError(
                    f"invalid value for an integer column: {value!r}"
                )
            parsed = int(value)
            if not _INTEGER_MIN <= parsed <= _INTEGER_MAX:
                raise InvalidAttributeError(
                    f"value out of range for an integer column: {value!r}"
                )
            return parsed
        if value == "true":
            return True
        if value == "false":
            return False
        raise InvalidAttributeError("invalid value for a boolean column")


@dataclass(frozen=True)
class DeviceAttribute:
    column: str
    kind: AttributeKind
    table: str = "Devices"


DEVICE_ATTRIBUTES: dict[str, DeviceAttribute] = {
    "address": DeviceAttribute("address", AttributeKind.STRING),
    "input": DeviceAttribute("input", AttributeKind.BOOLEAN),
    "output": DeviceAttribute("output", AttributeKind.BOOLEAN),
    "buildingID": DeviceAttribute("buildingID", AttributeKind.INTEGER),
    "roomID": DeviceAttribute("roomID", AttributeKind.INTEGER),
    "classID": DeviceAttribute("classID", AttributeKind.INTEGER),
    "typeID": DeviceAttribute("typeID", AttributeKind.INTEGER),
    "displayName": DeviceAttribute("displayName", AttributeKind.STRING),
    # Audio state lives in AudioDevices; devices without a row there fail
    # the row-count check.
    "volume": DeviceAttribute("volume", AttributeKind.INTEGER, "AudioDevices"),
    "muted": DeviceAttribute("muted", AttributeKind.BOOLEAN, "AudioDevices"),
}


def parse_attribute(name: str, value: str) -> tuple[DeviceAttribute, str | int | bool]:
    """Validate an attribute name and parse its value. No database access."""
    attribute = DEVICE_ATTRIBUTES.get(name)
    if attribute is None:
        raise InvalidAttributeError("invalid column name")
    return attribute, attribute.kind.parse(value)


def set_device_attribute(
    conn: sqlite3.Connection, device_id: int, name: str, value: str
) -> Device:
    """Set one allow-listed field on a device and return the refreshed device.

    Raises:
        InvalidAttributeError: unknown field or a value that does not parse.
        RowCountError: the update touched a number of rows other than one;
            the update is rolled back.
    """
    attribute, parsed = parse_attribute(name, value)

    statement = (
        f"UPDATE {attribute.table} SET {attribute.column} = ? "  # noqa: S608
        "WHERE deviceID = ?"
    )
    logger.info("Setting %s=%r on device %d", name, parsed, device_id)

    with transaction(conn):
        cur = conn.execute(statement, (parsed, device_id))
        if cur.rowcount != 1:
            raise RowCountError(
                "There was a problem updating the device: "
                f"incorrect number of rows affected: {cur.rowcount}"
            )

    return get_device_by_id(conn, device_id)


def set_device_attribute_by_name(
    conn: sqlite3.Connection,
    building_shortname: str,
    room_name: str,
    device_name: str,
    name: str,
    value: str,
) -> Device:
    """Like ``set_device_attribute`` but addresses the device by its names."""
    parse_attribute(name, value)
    device = get_device_by_building_and_room_and_name(
        conn, building_shortname, room_name, device_name
    )
    return set_device_attribute(conn, device.id, name, value)
