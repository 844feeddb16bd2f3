"""Participant data model."""

from dataclasses import dataclass
from typing import Optional

from .board import Board


@dataclass
class Participant:
    """One of the (at most two) players in a room.

    The board is allocated when the game starts and is owned exclusively by
    this participant. Whether the participant holds the turn is tracked by
    the room's turn pointer, not here, so two participants can never both
    hold it.
    """

    id: str  # Connection-scoped id assigned by the gateway
    name: str  # Display name
    ready: bool = False
    board: Optional[Board] = None

    def __post_init__(self):
        """Validate participant data after initialization."""
        if not self.id:
            raise ValueError("id cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("name cannot be empty")

    def to_dict(self) -> dict:
        """Public description (no board)."""
        return {"id": self.id, "name": self.name, "ready": self.ready}
