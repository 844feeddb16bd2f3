"""Data models for Battleship."""

from .board import Board, Cell, CellStatus
from .participant import Participant
from .position import Orientation, Position
from .room import Room, RoomStatus
from .ship import SHIP_SIZES, Ship, ShipType

__all__ = [
    "Board",
    "Cell",
    "CellStatus",
    "Orientation",
    "Participant",
    "Position",
    "Room",
    "RoomStatus",
    "SHIP_SIZES",
    "Ship",
    "ShipType",
]
