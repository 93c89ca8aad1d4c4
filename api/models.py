"""Pydantic request/response models for the av-config API."""

from pydantic import BaseModel


# ── Request models ──────────────────────────────────────


class CreateBuildingRequest(BaseModel):
    name: str
    shortname: str
    description: str | None = None


class CreateRoomRequest(BaseModel):
    name: str
    building: str
    vlan: int
    designation: str | None = None
    description: str | None = None
    configuration_id: int | None = None


class CreateDeviceRequest(BaseModel):
    name: str
    building: str
    room: str
    type: str
    device_class: str
    address: str | None = None
    input: bool = False
    output: bool = False
    display_name: str | None = None
    volume: int | None = None
    muted: bool | None = None
    roles: list[str] = []
    power_states: list[str] = []


class DeviceAttributeRequest(BaseModel):
    device_id: int
    attribute_name: str
    attribute_value: str


class CreateDefinitionRequest(BaseModel):
    name: str
    description: str | None = None


class CreateDeviceClassRequest(CreateDefinitionRequest):
    display_name: str | None = None


class CreatePowerStateRequest(BaseModel):
    name: str


class PortConfigurationModel(BaseModel):
    id: int
    source_device_id: int
    port_id: int
    destination_device_id: int
    host_device_id: int


# ── Response models ─────────────────────────────────────


class BuildingResponse(BaseModel):
    id: int
    name: str
    shortname: str
    description: str | None = None


class EvaluatorResponse(BaseModel):
    id: int
    key: str
    description: str | None = None
    priority: int


class RoomConfigurationResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    evaluators: list[EvaluatorResponse] | None = None


class PortResponse(BaseModel):
    source: str
    name: str
    destination: str
    host: str


class EndpointResponse(BaseModel):
    name: str
    path: str


class CommandResponse(BaseModel):
    name: str
    endpoint: EndpointResponse
    microservice: str
    priority: int


class RoomSummaryResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    designation: str | None = None


class DeviceResponse(BaseModel):
    id: int
    name: str
    address: str | None = None
    input: bool
    output: bool
    display_name: str | None = None
    building: BuildingResponse
    room: RoomSummaryResponse
    device_class: str
    device_type: str
    volume: int | None = None
    muted: bool | None = None
    roles: list[str]
    power_states: list[str]
    ports: list[PortResponse]
    commands: list[CommandResponse]


class RoomResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    designation: str | None = None
    vlan: int | None = None
    building: BuildingResponse | None = None
    current_video_input: int | None = None
    current_video_output: int | None = None
    current_audio_input: int | None = None
    current_audio_output: int | None = None
    configuration_id: int | None = None
    devices: list[DeviceResponse] = []
    configuration: RoomConfigurationResponse | None = None


class DeviceClassResponse(BaseModel):
    id: int
    name: str
    display_name: str | None = None
    description: str | None = None


class DefinitionResponse(BaseModel):
    id: int
    name: str
    description: str | None = None


class PowerStateResponse(BaseModel):
    id: int
    name: str
