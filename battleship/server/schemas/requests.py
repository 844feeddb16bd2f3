"""Pydantic schemas for inbound WebSocket events.

Every frame is ``{"event": <name>, "data": {...}}``. The ``event`` field
selects the variant; payloads are validated before they reach the room
registry or the state machine.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StringConstraints, TypeAdapter, field_validator

from ...models.position import Orientation
from ...models.ship import ShipType
from ...utils.constants import MAX_NAME_LENGTH, ROOM_CODE_LENGTH


PlayerName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_NAME_LENGTH)
]
RoomCode = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, to_upper=True, min_length=1, max_length=ROOM_CODE_LENGTH
    ),
]


class EmptyPayload(BaseModel):
    """Payload for events that carry no data."""


class CreateRoomPayload(BaseModel):
    name: PlayerName = Field(description="Display name")


class JoinRoomPayload(BaseModel):
    name: PlayerName = Field(description="Display name")
    roomCode: RoomCode = Field(description="Code of the room to join")  # noqa: N815


class StartGamePayload(BaseModel):
    roomCode: RoomCode = Field(description="Code of the room to start")  # noqa: N815


class PlaceShipPayload(BaseModel):
    """Single ship placement.

    ``shipId`` accepts the ship name ("carrier") or its numeric id (1-5).
    """

    shipId: ShipType = Field(description="Ship name or numeric id 1-5")  # noqa: N815
    startX: int = Field(description="Column of the ship's first cell")  # noqa: N815
    startY: int = Field(description="Row of the ship's first cell")  # noqa: N815
    orientation: Orientation

    @field_validator("shipId", mode="before")
    @classmethod
    def ship_from_wire(cls, value):
        if isinstance(value, bool):
            raise ValueError("Invalid ship id")
        if isinstance(value, int):
            return ShipType.from_wire_id(value)
        if isinstance(value, str):
            return value.strip().lower()
        return value


class AttackPayload(BaseModel):
    x: int = Field(description="Target column")
    y: int = Field(description="Target row")


class CreateRoomEvent(BaseModel):
    event: Literal["create-room"]
    data: CreateRoomPayload


class JoinRoomEvent(BaseModel):
    event: Literal["join-room"]
    data: JoinRoomPayload


class LeaveRoomEvent(BaseModel):
    event: Literal["leave-room"]
    data: EmptyPayload = Field(default_factory=EmptyPayload)


class StartGameEvent(BaseModel):
    event: Literal["start-game"]
    data: StartGamePayload


class PlaceShipEvent(BaseModel):
    event: Literal["place-ship"]
    data: PlaceShipPayload


class RandomizeShipsEvent(BaseModel):
    event: Literal["randomize-ships"]
    data: EmptyPayload = Field(default_factory=EmptyPayload)


class ResetShipsEvent(BaseModel):
    event: Literal["reset-ships"]
    data: EmptyPayload = Field(default_factory=EmptyPayload)


class PlayerReadyEvent(BaseModel):
    event: Literal["player-ready"]
    data: EmptyPayload = Field(default_factory=EmptyPayload)


class AttackEvent(BaseModel):
    event: Literal["attack"]
    data: AttackPayload


InboundEvent = Annotated[
    Union[
        CreateRoomEvent,
        JoinRoomEvent,
        LeaveRoomEvent,
        StartGameEvent,
        PlaceShipEvent,
        RandomizeShipsEvent,
        ResetShipsEvent,
        PlayerReadyEvent,
        AttackEvent,
    ],
    Field(discriminator="event"),
]

inbound_adapter = TypeAdapter(InboundEvent)


def parse_event(frame) -> InboundEvent:
    """Validate a decoded JSON frame into its event variant.

    Raises:
        pydantic.ValidationError: If the frame matches no variant
    """
    return inbound_adapter.validate_python(frame)
