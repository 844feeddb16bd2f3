"""Room data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..utils.constants import MAX_PARTICIPANTS
from .participant import Participant


class RoomStatus(str, Enum):
    """Room lifecycle. Status only advances, in declaration order."""

    WAITING = "waiting"  # One participant, no boards
    PLACING = "placing"  # Two participants, ships being placed
    PLAYING = "playing"  # Both ready, attacks allowed
    FINISHED = "finished"  # Terminal, winner recorded

    @property
    def rank(self) -> int:
        return list(RoomStatus).index(self)


@dataclass
class Room:
    """The authoritative context for one match.

    A room exclusively owns its participants and, through them, their boards.
    It is destroyed by the registry when its last participant leaves.
    """

    code: str
    participants: list[Participant] = field(default_factory=list)
    status: RoomStatus = RoomStatus.WAITING
    current_turn: Optional[str] = None  # Participant id of the turn holder
    boards_ready: bool = False  # Set once start_game allocated the boards
    winner: Optional[str] = None  # Participant id, set when finished
    last_attack: Optional[dict] = None  # Public result of the latest attack

    def __post_init__(self):
        """Validate room data after initialization."""
        if not self.code:
            raise ValueError("code cannot be empty")
        if len(self.participants) > MAX_PARTICIPANTS:
            raise ValueError(
                f"Invalid participants: {len(self.participants)} (max {MAX_PARTICIPANTS})"
            )

    def advance(self, status: RoomStatus) -> None:
        """Move to `status`.

        Raises:
            ValueError: If `status` would move the room backwards
        """
        if status.rank < self.status.rank:
            raise ValueError(
                f"Room {self.code} cannot go from {self.status.value} back to {status.value}"
            )
        self.status = status

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= MAX_PARTICIPANTS

    def get(self, participant_id: str) -> Optional[Participant]:
        return next((p for p in self.participants if p.id == participant_id), None)

    def opponent_of(self, participant_id: str) -> Optional[Participant]:
        return next((p for p in self.participants if p.id != participant_id), None)

    def holds_turn(self, participant_id: str) -> bool:
        return self.status == RoomStatus.PLAYING and self.current_turn == participant_id

    def players_summary(self) -> list[dict]:
        return [p.to_dict() for p in self.participants]
