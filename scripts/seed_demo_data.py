"""Seed a demo building, room and devices for manual testing of `av-config serve`.

Usage:
    python scripts/seed_demo_data.py [db_path]
"""

import sys
from pathlib import Path

from accessors.buildings import make_building
from accessors.definitions import (
    add_device_class,
    add_device_type,
    add_power_state,
    add_role_definition,
)
from accessors.devices import add_device
from accessors.models import NewDevice
from accessors.rooms import make_room
from db.migrations import init_db

DB_PATH = Path("~/.av-config/av-config.db").expanduser()


def main() -> None:
    db_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DB_PATH
    conn = init_db(db_path)

    building = make_building(conn, "Joseph Knight Building", "JKB")
    print(f"Created building: {building.shortname} (id {building.id})")

    room = make_room(conn, "101", building.shortname, 210, designation="production")
    print(f"Created room:     {building.shortname}-{room.name} (id {room.id})")

    add_device_class(conn, "display", display_name="Display")
    add_device_class(conn, "audio", display_name="Audio")
    add_device_type(conn, "Sony XBR", "Sony Bravia television")
    add_device_type(conn, "QSC Core", "QSC DSP")
    for role in ("VideoOut", "AudioOut", "AudioIn", "Microphone"):
        add_role_definition(conn, role)
    for state in ("on", "standby"):
        add_power_state(conn, state)

    display = add_device(
        conn,
        NewDevice(
            name="D1",
            building="JKB",
            room="101",
            device_type="Sony XBR",
            device_class="display",
            address="jkb-101-d1.example.net",
            output=True,
            display_name="Display 1",
            roles=["VideoOut", "AudioOut"],
            power_states=["on", "standby"],
        ),
    )
    print(f"Created device:   {display.name} (id {display.id}) roles={display.roles}")

    dsp = add_device(
        conn,
        NewDevice(
            name="DSP1",
            building="JKB",
            room="101",
            device_type="QSC Core",
            device_class="audio",
            address="jkb-101-dsp1.example.net",
            input=True,
            display_name="DSP",
            volume=30,
            muted=False,
            roles=["AudioIn", "Microphone"],
            power_states=["on"],
        ),
    )
    print(f"Created device:   {dsp.name} (id {dsp.id}) volume={dsp.volume}")

    conn.close()

    print()
    print("Browse it with:")
    print("  av-config serve")
    print("  curl http://127.0.0.1:8000/buildings/JKB/rooms/101/devices")


if __name__ == "__main__":
    main()
