"""Utility functions and constants for Battleship."""

from .constants import (
    BOARD_SIZE,
    FLEET,
    MAX_NAME_LENGTH,
    MAX_PARTICIPANTS,
    RANDOM_PLACEMENT_ATTEMPTS,
    ROOM_CODE_ALPHABET,
    ROOM_CODE_LENGTH,
)
from .distance import chebyshev_distance
from .rng import GameRNG

__all__ = [
    "BOARD_SIZE",
    "FLEET",
    "MAX_NAME_LENGTH",
    "MAX_PARTICIPANTS",
    "RANDOM_PLACEMENT_ATTEMPTS",
    "ROOM_CODE_ALPHABET",
    "ROOM_CODE_LENGTH",
    "chebyshev_distance",
    "GameRNG",
]
