"""Attack resolution on a single board.

This module handles:
1. Rejecting out-of-bounds targets
2. Marking misses and hits
3. Counting hits per ship and reporting the ship sunk by this attack
"""

from dataclasses import dataclass
from typing import Optional

from ..models.board import Board, CellStatus
from ..models.position import Position
from ..models.ship import Ship
from .exceptions import InvariantViolation, OutOfBounds
from .placement import is_within_bounds


@dataclass
class AttackOutcome:
    """Result of attacking one cell.

    Attributes:
        board: The board after the attack (the input board if repeated)
        hit: True if a ship cell was struck by this attack
        sunk_ship: The ship this attack sank, if any
        repeated: True if the cell had already been attacked (nothing changed)
    """

    board: Board
    hit: bool
    sunk_ship: Optional[Ship] = None
    repeated: bool = False


def attack(board: Board, pos: Position) -> AttackOutcome:
    """Resolve an attack on `pos`.

    Attack rules:
    - Target already hit or missed: no-op, reported as repeated
    - Target holds a ship: cell becomes hit, ship's hit counter increments,
      ship reported when its hits reach its size
    - Target is empty: cell becomes miss

    Args:
        board: Board under attack (not modified)
        pos: Target cell

    Returns:
        AttackOutcome with the resulting board

    Raises:
        OutOfBounds: If pos is not on the board
        InvariantViolation: If a ship cell has no matching ship
    """
    if not is_within_bounds(pos, board.size):
        raise OutOfBounds(f"Coordinates ({pos.x}, {pos.y}) are out of bounds")

    if board.cell(pos).resolved:
        return AttackOutcome(board=board, hit=False, repeated=True)

    new_board = board.copy()
    cell = new_board.cell(pos)

    if cell.status == CellStatus.EMPTY:
        cell.status = CellStatus.MISS
        return AttackOutcome(board=new_board, hit=False)

    cell.status = CellStatus.HIT
    ship = new_board.ship_by_id(cell.ship_id)
    if ship is None:
        raise InvariantViolation(f"Cell ({pos.x}, {pos.y}) references unknown ship {cell.ship_id}")

    ship.hits += 1
    return AttackOutcome(board=new_board, hit=True, sunk_ship=ship if ship.sunk else None)
