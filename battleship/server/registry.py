"""Room registry: live rooms, membership, and participant-to-room lookup."""

import logging
from typing import Optional

from ..engine.exceptions import AlreadyInRoom, GameAlreadyStarted, RoomFull, RoomNotFound
from ..models.participant import Participant
from ..models.room import Room, RoomStatus
from ..utils.constants import MAX_PARTICIPANTS, ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Manages all live rooms.

    In-memory only; a room lives until its last participant leaves.
    """

    def __init__(self, rng: GameRNG | None = None):
        self.rng = rng or GameRNG()
        self.rooms: dict[str, Room] = {}
        self.participant_rooms: dict[str, str] = {}  # participant id -> room code

    def create_room(self, participant_id: str, name: str) -> str:
        """Create a room in the waiting state with one participant.

        Args:
            participant_id: Creating participant
            name: Display name

        Returns:
            The new room's code

        Raises:
            AlreadyInRoom: If the participant is already in a room
        """
        self._require_free(participant_id)

        code = self._generate_code()
        room = Room(code=code, participants=[Participant(id=participant_id, name=name)])
        self.rooms[code] = room
        self.participant_rooms[participant_id] = code

        logger.info(f"Created room {code} for {name} ({participant_id})")
        return code

    def join_room(self, participant_id: str, name: str, room_code: str) -> Room:
        """Add a second participant; the room moves on to placing once full.

        Raises:
            RoomNotFound: If no live room has this code
            RoomFull: If the room already has two participants
            GameAlreadyStarted: If the room has left the waiting state
            AlreadyInRoom: If the participant is already in a room
        """
        self._require_free(participant_id)

        room = self.get_room(room_code)
        if room.is_full:
            raise RoomFull()
        if room.status != RoomStatus.WAITING:
            raise GameAlreadyStarted()

        room.participants.append(Participant(id=participant_id, name=name))
        self.participant_rooms[participant_id] = room.code
        if len(room.participants) == MAX_PARTICIPANTS:
            room.advance(RoomStatus.PLACING)

        logger.info(f"{name} ({participant_id}) joined room {room.code}")
        return room

    def remove_participant(self, participant_id: str, room_code: str) -> Optional[Room]:
        """Remove a participant and their board from a room.

        Returns:
            The remaining room, or None if the room was emptied and deleted
            (or did not exist)
        """
        self.participant_rooms.pop(participant_id, None)
        room = self.rooms.get(room_code)
        if room is None:
            return None

        room.participants = [p for p in room.participants if p.id != participant_id]

        if not room.participants:
            del self.rooms[room_code]
            logger.info(f"Deleted empty room {room_code}")
            return None

        if room.current_turn == participant_id:
            room.current_turn = room.participants[0].id

        logger.info(
            f"{participant_id} left room {room_code}, remaining: {len(room.participants)}"
        )
        return room

    def get_room_of(self, participant_id: str) -> Optional[str]:
        return self.participant_rooms.get(participant_id)

    def get_room(self, room_code: str) -> Room:
        """Look up a live room.

        Raises:
            RoomNotFound: If no live room has this code
        """
        room = self.rooms.get(room_code)
        if room is None:
            raise RoomNotFound()
        return room

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        code = self.participant_rooms.get(participant_id)
        if code is None or code not in self.rooms:
            return None
        return self.rooms[code].get(participant_id)

    def participant_ids(self, room_code: str) -> list[str]:
        room = self.rooms.get(room_code)
        return [p.id for p in room.participants] if room else []

    def clear(self) -> None:
        """Drop every room (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.rooms)} rooms")
        self.rooms.clear()
        self.participant_rooms.clear()

    def _require_free(self, participant_id: str) -> None:
        if participant_id in self.participant_rooms:
            raise AlreadyInRoom()

    def _generate_code(self) -> str:
        while True:
            code = self.rng.token(ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH)
            if code not in self.rooms:
                return code
