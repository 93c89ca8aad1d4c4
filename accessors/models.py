"""Aggregate types returned by the accessor layer.

These are plain dataclasses; the HTTP layer converts them with
``dataclasses.asdict`` before validating against its pydantic models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Building:
    id: int
    name: str
    shortname: str
    description: str | None = None


@dataclass
class Evaluator:
    id: int
    key: str
    description: str | None = None
    priority: int = 0


@dataclass
class RoomConfiguration:
    id: int
    name: str
    description: str | None = None
    evaluators: list[Evaluator] | None = field(default_factory=list)


@dataclass
class Room:
    """A room and, for single-room lookups, its devices and configuration."""

    id: int
    name: str
    description: str | None = None
    designation: str | None = None
    vlan: int | None = None
    building: Building | None = None
    current_video_input: int | None = None
    current_video_output: int | None = None
    current_audio_input: int | None = None
    current_audio_output: int | None = None
    configuration_id: int | None = None
    devices: list[Device] = field(default_factory=list)
    configuration: RoomConfiguration | None = None


@dataclass
class Port:
    source: str
    name: str
    destination: str
    host: str


@dataclass
class Endpoint:
    name: str
    path: str


@dataclass
class Command:
    """A command a device type supports, resolved to the service that runs it."""

    name: str
    endpoint: Endpoint
    microservice: str
    priority: int = 0


@dataclass
class Device:
    """The denormalized device aggregate.

    ``roles``, ``power_states``, ``ports`` and ``commands`` are filled from
    their own queries, never from the base join.
    """

    id: int
    name: str
    address: str | None
    input: bool
    output: bool
    display_name: str | None
    building: Building
    room: Room
    device_class: str
    device_type: str
    volume: int | None = None
    muted: bool | None = None
    roles: list[str] = field(default_factory=list)
    power_states: list[str] = field(default_factory=list)
    ports: list[Port] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)


@dataclass
class NewDevice:
    """Input for ``add_device``: names instead of ids."""

    name: str
    building: str
    room: str
    device_type: str
    device_class: str
    address: str | None = None
    input: bool = False
    output: bool = False
    display_name: str | None = None
    volume: int | None = None
    muted: bool | None = None
    roles: list[str] = field(default_factory=list)
    power_states: list[str] = field(default_factory=list)


@dataclass
class PortConfiguration:
    id: int
    source_device_id: int
    port_id: int
    destination_device_id: int
    host_device_id: int


@dataclass
class DeviceClass:
    id: int
    name: str
    display_name: str | None = None
    description: str | None = None


@dataclass
class DeviceType:
    id: int
    name: str
    description: str | None = None


@dataclass
class RoleDefinition:
    id: int
    name: str
    description: str | None = None


@dataclass
class PowerState:
    id: int
    name: str


@dataclass
class DevicePowerState:
    id: int
    device_id: int
    power_state_id: int


@dataclass
class DeviceRole:
    id: int
    device_id: int
    role_definition_id: int
