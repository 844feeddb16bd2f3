"""Fleet completeness and victory checks."""

from typing import Iterable

from ..models.board import Board, CellStatus
from ..models.ship import ShipType


def all_sunk(board: Board) -> bool:
    """Return True if every ship on the board is sunk.

    A board with no ships has nothing to sink and is never considered
    defeated.
    """
    if not board.ships:
        return False
    return all(ship.sunk for ship in board.ships)


def sunk_types(board: Board) -> list[ShipType]:
    """Types of the ships on `board` that have been sunk."""
    return [ship.type for ship in board.ships if ship.sunk]


def missing_types(board: Board, fleet: Iterable[ShipType]) -> list[ShipType]:
    """Types from `fleet` not yet placed on `board`, in fleet order."""
    placed = set(board.placed_types)
    return [ship_type for ship_type in fleet if ship_type not in placed]


def fleet_complete(board: Board, fleet: Iterable[ShipType]) -> bool:
    return not missing_types(board, fleet)


def hits_match_cells(board: Board) -> bool:
    """True if every ship's hit counter equals its number of HIT cells."""
    for ship in board.ships:
        hit_cells = sum(1 for pos in ship.positions if board.cell(pos).status == CellStatus.HIT)
        if hit_cells != ship.hits:
            return False
    return True
