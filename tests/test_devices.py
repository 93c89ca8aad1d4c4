"""Tests for accessors/devices.py: aggregate assembly and lookup variants.

Validates:
- Scalars and nested building/room come from the base join
- Roles, power states, ports and commands come from their own queries
- One aggregate per device even when the join yields a row per role
- Devices without roles are still assembled
- Each lookup variant returns exactly the matching devices
"""

import sqlite3
from unittest.mock import patch

import pytest

from accessors import devices
from accessors.devices import (
    get_all_devices,
    get_device_by_building_and_room_and_id,
    get_device_by_building_and_room_and_name,
    get_device_by_id,
    get_devices_by_building_and_room,
    get_devices_by_building_and_room_and_role,
    get_devices_by_query,
    get_devices_by_role_and_class,
    get_devices_by_room_id,
    get_devices_by_room_id_and_role_id,
    get_power_states_by_device_id,
    get_roles_by_device_id,
)
from accessors.errors import NotFoundError


class TestAssembly:
    def test_scalar_fields(self, seeded: sqlite3.Connection) -> None:
        d1 = get_device_by_id(seeded, 1)
        assert d1.id == 1
        assert d1.name == "D1"
        assert d1.address == "d1.jkb.example.net"
        assert d1.input is False
        assert d1.output is True
        assert d1.display_name == "Display 1"
        assert d1.device_class == "display"
        assert d1.device_type == "Sony XBR"

    def test_nested_building_and_room(self, seeded: sqlite3.Connection) -> None:
        d1 = get_device_by_id(seeded, 1)
        assert d1.building.id == 1
        assert d1.building.shortname == "JKB"
        assert d1.building.name == "Joseph Knight Building"
        assert d1.room.id == 1
        assert d1.room.name == "101"
        assert d1.room.designation == "production"
        assert d1.room.devices == []

    def test_roles_and_power_states(self, seeded: sqlite3.Connection) -> None:
        d1 = get_device_by_id(seeded, 1)
        assert d1.roles == ["AudioOut", "VideoOut"]
        assert d1.power_states == ["on", "standby"]

    def test_ports(self, seeded: sqlite3.Connection) -> None:
        d1 = get_device_by_id(seeded, 1)
        assert len(d1.ports) == 1
        port = d1.ports[0]
        assert port.name == "HDMI1"
        assert port.source == "PC1"
        assert port.destination == "D1"
        assert port.host == "D1"

        # PC1 is the source, not the host
        assert get_device_by_id(seeded, 3).ports == []

    def test_commands_resolved_through_type(self, seeded: sqlite3.Connection) -> None:
        d1 = get_device_by_id(seeded, 1)
        assert [c.name for c in d1.commands] == ["PowerOn", "Standby"]
        power_on = d1.commands[0]
        assert power_on.endpoint.name == "PowerOn"
        assert power_on.endpoint.path == "/:address/power/on"
        assert power_on.microservice == "http://sony-control:8007"

        assert get_device_by_id(seeded, 2).commands == []

    def test_audio_state(self, seeded: sqlite3.Connection) -> None:
        dsp = get_device_by_id(seeded, 2)
        assert dsp.volume == 30
        assert dsp.muted is False

        d1 = get_device_by_id(seeded, 1)
        assert d1.volume is None
        assert d1.muted is None

    def test_one_aggregate_per_device_with_many_roles(
        self, seeded: sqlite3.Connection
    ) -> None:
        """D1 and DSP1 each have two roles but appear once."""
        found = get_devices_by_building_and_room(seeded, "JKB", "101")
        assert [d.name for d in found] == ["D1", "DSP1", "PC1"]

    def test_device_without_roles_is_assembled(self, seeded: sqlite3.Connection) -> None:
        pc1 = get_device_by_id(seeded, 3)
        assert pc1.roles == []
        assert pc1.power_states == []

    def test_reflects_current_links(self, seeded: sqlite3.Connection) -> None:
        seeded.execute(
            "INSERT INTO DeviceRole (deviceID, deviceRoleDefinitionID) VALUES (3, 3)"
        )
        seeded.execute("DELETE FROM DevicePowerStates WHERE deviceID = 1 AND powerStateID = 2")
        seeded.commit()

        assert get_device_by_id(seeded, 3).roles == ["AudioIn"]
        assert get_device_by_id(seeded, 1).power_states == ["on"]

    def test_empty_clause_returns_all(self, seeded: sqlite3.Connection) -> None:
        assert [d.id for d in get_devices_by_query(seeded)] == [1, 2, 3, 4]
        assert [d.id for d in get_all_devices(seeded)] == [1, 2, 3, 4]

    def test_sub_fetch_error_aborts_everything(self, seeded: sqlite3.Connection) -> None:
        calls = []

        def failing(conn: sqlite3.Connection, device_id: int) -> list[str]:
            calls.append(device_id)
            if device_id == 2:
                raise sqlite3.OperationalError("disk I/O error")
            return []

        with patch.object(devices, "get_power_states_by_device_id", failing):
            with pytest.raises(sqlite3.OperationalError):
                get_devices_by_building_and_room(seeded, "JKB", "101")
        assert calls == [1, 2]

    def test_bad_clause_raises(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(sqlite3.OperationalError):
            get_devices_by_query(seeded, "WHERE NoSuchTable.column = ?", 1)


class TestSubFetches:
    def test_roles_by_device_id(self, seeded: sqlite3.Connection) -> None:
        assert get_roles_by_device_id(seeded, 2) == ["AudioIn", "Microphone"]
        assert get_roles_by_device_id(seeded, 99) == []

    def test_power_states_by_device_id(self, seeded: sqlite3.Connection) -> None:
        assert get_power_states_by_device_id(seeded, 4) == ["on"]
        assert get_power_states_by_device_id(seeded, 3) == []


class TestLookups:
    def test_by_id_missing(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(NotFoundError, match="No devices found for ID 42"):
            get_device_by_id(seeded, 42)

    def test_by_building_room_name(self, seeded: sqlite3.Connection) -> None:
        dsp = get_device_by_building_and_room_and_name(seeded, "JKB", "101", "DSP1")
        assert dsp.id == 2

    def test_by_building_room_name_wrong_room(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(NotFoundError):
            get_device_by_building_and_room_and_name(seeded, "JKB", "102", "DSP1")

    def test_by_building_room_id(self, seeded: sqlite3.Connection) -> None:
        assert get_device_by_building_and_room_and_id(seeded, "JKB", "101", 2).name == "DSP1"
        with pytest.raises(NotFoundError, match="No device with ID 1 in ITB-1101"):
            get_device_by_building_and_room_and_id(seeded, "ITB", "1101", 1)

    def test_by_room_id(self, seeded: sqlite3.Connection) -> None:
        assert [d.name for d in get_devices_by_room_id(seeded, 2)] == ["D2"]
        assert get_devices_by_room_id(seeded, 3) == []

    def test_by_room_id_and_role_id(self, seeded: sqlite3.Connection) -> None:
        found = get_devices_by_room_id_and_role_id(seeded, 1, 1)
        assert [d.name for d in found] == ["D1"]
        # roles still reflect every link, not just the filtered one
        assert found[0].roles == ["AudioOut", "VideoOut"]

    def test_by_room_id_and_role_id_excludes_other_rooms(
        self, seeded: sqlite3.Connection
    ) -> None:
        found = get_devices_by_room_id_and_role_id(seeded, 2, 1)
        assert [d.name for d in found] == ["D2"]
        assert get_devices_by_room_id_and_role_id(seeded, 2, 3) == []

    def test_by_building_room_role(self, seeded: sqlite3.Connection) -> None:
        found = get_devices_by_building_and_room_and_role(seeded, "JKB", "101", "AudioIn")
        assert [d.name for d in found] == ["DSP1"]

    def test_by_role_and_class_and_designation(self, seeded: sqlite3.Connection) -> None:
        found = get_devices_by_role_and_class(seeded, "VideoOut", "display", "production")
        assert [d.name for d in found] == ["D1"]

        found = get_devices_by_role_and_class(
            seeded, "VideoOut", "display", "non-production"
        )
        assert [d.name for d in found] == ["D2"]

        assert get_devices_by_role_and_class(seeded, "VideoOut", "audio", "production") == []
