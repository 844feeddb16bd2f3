"""Errors raised by the room registry and the game state machine.

Every error carries an ``ErrorType`` so the gateway can decide how much to
tell the sender: protocol violations are relayed verbatim, internal errors
are logged and replaced by a generic message.
"""

from enum import Enum


class ErrorType(Enum):
    """Classification of rejected operations."""

    PROTOCOL = "protocol"  # Sender broke a rule; no state changed
    INTERNAL = "internal"  # Invariant violated; operation aborted


class GameError(Exception):
    """Base class for rejected room and game operations."""

    error_type = ErrorType.PROTOCOL
    default_message = "Operation not allowed"

    def __init__(self, message: str | None = None):
        """Initialize the error.

        Args:
            message: Human-readable message; defaults to the class message
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class RoomNotFound(GameError):
    default_message = "Room does not exist"


class RoomFull(GameError):
    default_message = "Room is full"


class GameAlreadyStarted(GameError):
    default_message = "Game has already started"


class NotEnoughPlayers(GameError):
    default_message = "Two players are needed to start"


class NotInRoom(GameError):
    default_message = "You are not in a room"


class AlreadyInRoom(GameError):
    default_message = "You are already in a room"


class InvalidPhase(GameError):
    default_message = "That action is not available right now"


class FleetIncomplete(GameError):
    default_message = "Place all your ships before getting ready"


class NotYourTurn(GameError):
    default_message = "It is not your turn"


class NoOpponent(GameError):
    default_message = "There is no opponent"


class OutOfBounds(GameError):
    default_message = "Coordinates are out of bounds"


class CellAlreadyAttacked(GameError):
    default_message = "That cell has already been attacked"


class InvariantViolation(GameError):
    """Internal state is inconsistent (e.g. a playing room without boards)."""

    error_type = ErrorType.INTERNAL
    default_message = "Internal server error"
