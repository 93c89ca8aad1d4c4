"""Tests for add_device: resolution first, then one all-or-nothing write."""

import sqlite3

import pytest

from accessors.devices import add_device, get_devices_by_building_and_room
from accessors.errors import (
    DuplicateDeviceError,
    IntegrityViolationError,
    NotFoundError,
    UnknownDefinitionError,
)
from accessors.models import NewDevice


def _new_device(**overrides: object) -> NewDevice:
    fields = {
        "name": "D3",
        "building": "JKB",
        "room": "101",
        "device_type": "Sony XBR",
        "device_class": "display",
        "address": "d3.jkb.example.net",
        "input": False,
        "output": True,
        "display_name": "Display 3",
        "roles": ["VideoOut"],
        "power_states": ["on", "standby"],
    }
    fields.update(overrides)
    return NewDevice(**fields)


def _device_rows(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM Devices").fetchone()[0]


def _link_rows(conn: sqlite3.Connection) -> tuple[int, int]:
    roles = conn.execute("SELECT COUNT(*) FROM DeviceRole").fetchone()[0]
    states = conn.execute("SELECT COUNT(*) FROM DevicePowerStates").fetchone()[0]
    return roles, states


class TestAddDevice:
    def test_creates_device_with_links(self, seeded: sqlite3.Connection) -> None:
        device = add_device(seeded, _new_device())

        assert device.id == 5
        assert device.name == "D3"
        assert device.display_name == "Display 3"
        assert device.device_type == "Sony XBR"
        assert device.device_class == "display"
        assert device.building.shortname == "JKB"
        assert device.room.name == "101"
        assert device.roles == ["VideoOut"]
        assert device.power_states == ["on", "standby"]
        assert [c.name for c in device.commands] == ["PowerOn", "Standby"]
        assert device.volume is None

        names = [d.name for d in get_devices_by_building_and_room(seeded, "JKB", "101")]
        assert names == ["D1", "DSP1", "PC1", "D3"]

    def test_returned_room_is_shallow(self, seeded: sqlite3.Connection) -> None:
        device = add_device(seeded, _new_device())
        assert device.room.devices == []
        assert device.room.configuration is None

    def test_audio_state(self, seeded: sqlite3.Connection) -> None:
        device = add_device(
            seeded,
            _new_device(
                name="DSP2", device_type="QSC Core", device_class="audio",
                roles=["AudioIn"], volume=40, muted=True,
            ),
        )
        assert device.volume == 40
        assert device.muted is True

    def test_no_roles_or_power_states(self, seeded: sqlite3.Connection) -> None:
        before = _link_rows(seeded)
        device = add_device(seeded, _new_device(roles=[], power_states=[]))
        assert device.roles == []
        assert device.power_states == []
        assert _link_rows(seeded) == before

    def test_names_resolve_case_insensitively(self, seeded: sqlite3.Connection) -> None:
        device = add_device(
            seeded, _new_device(device_type="sony xbr", roles=["videoout"])
        )
        assert device.device_type == "Sony XBR"
        assert device.roles == ["VideoOut"]

    def test_same_name_in_other_room_is_allowed(self, seeded: sqlite3.Connection) -> None:
        device = add_device(seeded, _new_device(name="D1", room="102"))
        assert device.room.name == "102"


class TestAddDeviceFailures:
    def test_duplicate_name_in_room(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(
            DuplicateDeviceError,
            match="device already exists in room, please choose a different name",
        ):
            add_device(seeded, _new_device(name="D1"))
        assert _device_rows(seeded) == 4

    def test_unknown_type(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(NotFoundError, match="Device type 'Barco' does not exist"):
            add_device(seeded, _new_device(device_type="Barco"))
        assert _device_rows(seeded) == 4

    def test_unknown_class(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(NotFoundError):
            add_device(seeded, _new_device(device_class="projector"))
        assert _device_rows(seeded) == 4

    def test_unknown_room(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(NotFoundError, match="Room JKB-999 does not exist"):
            add_device(seeded, _new_device(room="999"))

    def test_room_in_other_building(self, seeded: sqlite3.Connection) -> None:
        with pytest.raises(NotFoundError):
            add_device(seeded, _new_device(building="ITB", room="101"))

    def test_unknown_role_leaves_nothing_behind(self, seeded: sqlite3.Connection) -> None:
        before = _link_rows(seeded)
        with pytest.raises(
            UnknownDefinitionError, match="device role definition: Projector does not exist"
        ):
            add_device(seeded, _new_device(roles=["VideoOut", "Projector"]))
        assert _device_rows(seeded) == 4
        assert _link_rows(seeded) == before

    def test_unknown_power_state_leaves_nothing_behind(
        self, seeded: sqlite3.Connection
    ) -> None:
        before = _link_rows(seeded)
        with pytest.raises(UnknownDefinitionError, match="powerstate: hibernate does not exist"):
            add_device(seeded, _new_device(power_states=["on", "hibernate"]))
        assert _device_rows(seeded) == 4
        assert _link_rows(seeded) == before

    def test_unknown_definition_is_integrity_violation(
        self, seeded: sqlite3.Connection
    ) -> None:
        with pytest.raises(IntegrityViolationError):
            add_device(seeded, _new_device(roles=["Projector"]))

    def test_storage_failure_mid_write_rolls_back(self, seeded: sqlite3.Connection) -> None:
        """A repeated role fails on the link's UNIQUE constraint after the
        device row was written; the device row must not survive."""
        before = _link_rows(seeded)
        with pytest.raises(sqlite3.IntegrityError):
            add_device(seeded, _new_device(roles=["VideoOut", "VideoOut"]))
        assert _device_rows(seeded) == 4
        assert _link_rows(seeded) == before
