"""Pydantic schemas for outbound WebSocket events."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

OutboundEventName = Literal[
    "connected",
    "room-created",
    "room-joined",
    "player-joined",
    "player-left",
    "game-started",
    "all-players-ready",
    "game-update",
    "game-over",
    "error",
]


class PlayerSummary(BaseModel):
    """Public description of a participant."""

    id: str
    name: str
    ready: bool = False


class ConnectedPayload(BaseModel):
    playerId: str  # noqa: N815


class RoomCreatedPayload(BaseModel):
    roomCode: str  # noqa: N815
    players: list[PlayerSummary]


class RoomJoinedPayload(BaseModel):
    roomCode: str  # noqa: N815
    status: str
    players: list[PlayerSummary]


class PlayersPayload(BaseModel):
    """Roster change broadcast to the rest of the room."""

    players: list[PlayerSummary]
    playerId: Optional[str] = None  # noqa: N815


class GameStartedPayload(BaseModel):
    roomCode: str  # noqa: N815


class GameOverPayload(BaseModel):
    winner: Optional[PlayerSummary] = None


class ErrorPayload(BaseModel):
    message: str


class ServerEvent(BaseModel):
    """One outbound frame."""

    event: OutboundEventName
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def build(cls, event: OutboundEventName, payload: BaseModel | dict | None = None) -> "ServerEvent":
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        return cls(event=event, data=payload or {})
