"""Session gateway between WebSocket connections and the game core.

Translates inbound events into registry and state machine calls, and game
state into per-participant outbound events. Operations on one room run under
that room's lock, from mutation through the resulting sends, so two events
for the same room never interleave.
"""

import asyncio
import logging
import uuid
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from ..engine.exceptions import AlreadyInRoom, ErrorType, GameError, InvariantViolation, NotInRoom
from ..engine.projection import project_view
from ..engine.state_machine import GameStateMachine, ShipPlacement
from ..models.position import Position
from ..models.room import Room, RoomStatus
from .registry import RoomRegistry
from .schemas.requests import (
    AttackPayload,
    CreateRoomPayload,
    EmptyPayload,
    JoinRoomPayload,
    PlaceShipPayload,
    StartGamePayload,
    parse_event,
)
from .schemas.responses import (
    ConnectedPayload,
    ErrorPayload,
    GameOverPayload,
    GameStartedPayload,
    OutboundEventName,
    PlayersPayload,
    PlayerSummary,
    RoomCreatedPayload,
    RoomJoinedPayload,
    ServerEvent,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


def describe_validation_error(exc: ValidationError) -> str:
    """Turn the first pydantic error into a short message for the sender."""
    errors = exc.errors()
    if not errors:
        return "Invalid message"
    first = errors[0]
    if first["type"] in ("union_tag_invalid", "union_tag_not_found"):
        return "Unknown or missing event"
    field = ".".join(str(part) for part in first["loc"][1:] if part != "data")
    if field:
        return f"Invalid {field}: {first['msg']}"
    return f"Invalid message: {first['msg']}"


class SessionGateway:
    """Routes events between connected participants and their rooms.

    Connections only need an async ``send_json(dict)`` method, so the
    gateway can be driven by FastAPI WebSockets or by in-memory fakes.
    """

    def __init__(
        self,
        registry: Optional[RoomRegistry] = None,
        machine: Optional[GameStateMachine] = None,
    ):
        self.registry = registry or RoomRegistry()
        self.machine = machine or GameStateMachine()
        self.connections: dict[str, Any] = {}  # participant id -> connection
        self._room_locks: dict[str, asyncio.Lock] = {}
        self._handlers = {
            "create-room": self._on_create_room,
            "join-room": self._on_join_room,
            "leave-room": self._on_leave_room,
            "start-game": self._on_start_game,
            "place-ship": self._on_place_ship,
            "randomize-ships": self._on_randomize_ships,
            "reset-ships": self._on_reset_ships,
            "player-ready": self._on_player_ready,
            "attack": self._on_attack,
        }

    # ============================================
    # CONNECTION LIFECYCLE
    # ============================================

    async def connect(self, connection) -> str:
        """Register a connection and tell it its participant id."""
        participant_id = uuid.uuid4().hex
        self.connections[participant_id] = connection
        logger.info(f"Participant {participant_id} connected, total: {len(self.connections)}")
        await self.send(participant_id, "connected", ConnectedPayload(playerId=participant_id))
        return participant_id

    async def disconnect(self, participant_id: str) -> None:
        """Drop a connection; leaving its room is implicit."""
        try:
            await self._leave(participant_id)
        finally:
            self.connections.pop(participant_id, None)
            logger.info(
                f"Participant {participant_id} disconnected, remaining: {len(self.connections)}"
            )

    # ============================================
    # INBOUND
    # ============================================

    async def handle(self, participant_id: str, frame: Any) -> None:
        """Validate and dispatch one inbound frame.

        Rejected operations are answered with an ``error`` event to the
        sender only; nothing propagates to the caller.
        """
        try:
            message = parse_event(frame)
        except ValidationError as e:
            reason = describe_validation_error(e)
            logger.warning(f"Invalid frame from {participant_id}: {reason}")
            await self.send_error(participant_id, reason)
            return

        handler = self._handlers[message.event]
        try:
            await handler(participant_id, message.data)
        except GameError as e:
            if e.error_type == ErrorType.INTERNAL:
                logger.error(
                    f"{message.event} from {participant_id} aborted: {e.message}", exc_info=True
                )
                await self.send_error(participant_id, GENERIC_ERROR)
            else:
                logger.warning(f"Rejected {message.event} from {participant_id}: {e.message}")
                await self.send_error(participant_id, e.message)
        except Exception as e:
            logger.error(f"{message.event} from {participant_id} failed: {e}", exc_info=True)
            await self.send_error(participant_id, GENERIC_ERROR)

    async def _on_create_room(self, participant_id: str, data: CreateRoomPayload) -> None:
        code = self.registry.create_room(participant_id, data.name)
        room = self.registry.get_room(code)
        await self.send(
            participant_id,
            "room-created",
            RoomCreatedPayload(roomCode=code, players=self._players(room)),
        )

    async def _on_join_room(self, participant_id: str, data: JoinRoomPayload) -> None:
        if self.registry.get_room_of(participant_id) is not None:
            raise AlreadyInRoom()
        self.registry.get_room(data.roomCode)
        async with self._lock_for(data.roomCode):
            room = self.registry.join_room(participant_id, data.name, data.roomCode)
            players = self._players(room)
            await self.send(
                participant_id,
                "room-joined",
                RoomJoinedPayload(roomCode=room.code, status=room.status.value, players=players),
            )
            await self.broadcast(
                room,
                "player-joined",
                PlayersPayload(players=players, playerId=participant_id),
                exclude=participant_id,
            )

    async def _on_leave_room(self, participant_id: str, data: EmptyPayload) -> None:
        if self.registry.get_room_of(participant_id) is None:
            raise NotInRoom()
        await self._leave(participant_id)

    async def _on_start_game(self, participant_id: str, data: StartGamePayload) -> None:
        room = self.registry.get_room(data.roomCode)
        if self.registry.get_room_of(participant_id) != room.code:
            raise NotInRoom("You are not in this room")
        async with self._lock_for(room.code):
            self.machine.start_game(room)
            await self.broadcast(room, "game-started", GameStartedPayload(roomCode=room.code))
            await self.send_views(room)

    async def _on_place_ship(self, participant_id: str, data: PlaceShipPayload) -> None:
        room = self._room_of(participant_id)
        placement = ShipPlacement(
            ship_type=data.shipId,
            origin=Position(data.startX, data.startY),
            orientation=data.orientation,
        )
        async with self._lock_for(room.code):
            result = self.machine.place_ship(room, participant_id, placement)
            if not result.placed:
                await self.send_error(participant_id, result.reason)
            await self.send_view(room, participant_id)

    async def _on_randomize_ships(self, participant_id: str, data: EmptyPayload) -> None:
        room = self._room_of(participant_id)
        async with self._lock_for(room.code):
            self.machine.randomize_ships(room, participant_id)
            await self.send_view(room, participant_id)

    async def _on_reset_ships(self, participant_id: str, data: EmptyPayload) -> None:
        room = self._room_of(participant_id)
        async with self._lock_for(room.code):
            self.machine.reset_ships(room, participant_id)
            await self.send_view(room, participant_id)

    async def _on_player_ready(self, participant_id: str, data: EmptyPayload) -> None:
        room = self._room_of(participant_id)
        async with self._lock_for(room.code):
            was_placing = room.status == RoomStatus.PLACING
            all_ready = self.machine.set_ready(room, participant_id)
            if all_ready and was_placing:
                await self.broadcast(room, "all-players-ready")
            await self.send_views(room)

    async def _on_attack(self, participant_id: str, data: AttackPayload) -> None:
        room = self._room_of(participant_id)
        async with self._lock_for(room.code):
            result = self.machine.attack(room, participant_id, Position(data.x, data.y))
            if result.game_over:
                self.machine.end_game(room, winner_id=participant_id)
            await self.send_views(room)
            if result.game_over:
                winner = room.get(participant_id)
                await self.broadcast(
                    room,
                    "game-over",
                    GameOverPayload(winner=PlayerSummary(**winner.to_dict())),
                )

    async def _leave(self, participant_id: str) -> None:
        code = self.registry.get_room_of(participant_id)
        if code is None:
            return
        async with self._lock_for(code):
            room = self.registry.remove_participant(participant_id, code)
            if room is not None:
                await self.broadcast(
                    room,
                    "player-left",
                    PlayersPayload(players=self._players(room), playerId=participant_id),
                )
                if room.boards_ready:
                    await self.send_views(room)
        if room is None:
            self._room_locks.pop(code, None)

    # ============================================
    # OUTBOUND
    # ============================================

    async def send(
        self,
        participant_id: str,
        event: OutboundEventName,
        payload: BaseModel | dict | None = None,
    ) -> None:
        """Send one event to one participant, if still connected."""
        connection = self.connections.get(participant_id)
        if connection is None:
            return
        message = ServerEvent.build(event, payload)
        try:
            await connection.send_json(message.model_dump())
        except Exception as e:
            logger.warning(f"Failed to send {event} to {participant_id}: {e}")

    async def send_error(self, participant_id: str, message: str) -> None:
        await self.send(participant_id, "error", ErrorPayload(message=message))

    async def broadcast(
        self,
        room: Room,
        event: OutboundEventName,
        payload: BaseModel | dict | None = None,
        exclude: Optional[str] = None,
    ) -> None:
        """Send the same event to every participant in the room."""
        for participant in list(room.participants):
            if participant.id != exclude:
                await self.send(participant.id, event, payload)

    async def send_view(self, room: Room, participant_id: str) -> None:
        """Send one participant their projected view of the room."""
        await self.send(participant_id, "game-update", project_view(room, participant_id, self.machine.fleet))

    async def send_views(self, room: Room) -> None:
        """Send every participant their own projected view."""
        for participant in list(room.participants):
            await self.send_view(room, participant.id)

    # ============================================
    # HELPERS
    # ============================================

    def _room_of(self, participant_id: str) -> Room:
        code = self.registry.get_room_of(participant_id)
        if code is None:
            raise NotInRoom()
        room = self.registry.rooms.get(code)
        if room is None:
            raise InvariantViolation(f"{participant_id} indexed to missing room {code}")
        return room

    def _lock_for(self, room_code: str) -> asyncio.Lock:
        lock = self._room_locks.get(room_code)
        if lock is None:
            lock = self._room_locks[room_code] = asyncio.Lock()
        return lock

    @staticmethod
    def _players(room: Room) -> list[PlayerSummary]:
        return [PlayerSummary(**p.to_dict()) for p in room.participants]
