"""Ship placement rules.

This module handles:
1. Bounds checking and the cells a ship would occupy
2. The no-touching rule (ships may not share or border a cell, diagonals included)
3. Placing a ship on a board, returning an explicit result
4. Completing a fleet at random
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models.board import Board, CellStatus
from ..models.position import Orientation, Position
from ..models.ship import Ship, ShipType
from ..utils.constants import BOARD_SIZE, RANDOM_PLACEMENT_ATTEMPTS
from ..utils.distance import chebyshev_distance
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


@dataclass
class PlacementResult:
    """Result of a placement attempt.

    Attributes:
        board: The new board on success, the untouched input board on failure
        ship: The placed ship, or None if rejected
        reason: Why the placement was rejected, or None on success
    """

    board: Board
    ship: Optional[Ship] = None
    reason: Optional[str] = None

    @property
    def placed(self) -> bool:
        return self.ship is not None


def is_within_bounds(pos: Position, size: int = BOARD_SIZE) -> bool:
    return 0 <= pos.x < size and 0 <= pos.y < size


def ship_cells(origin: Position, size: int, orientation: Orientation) -> list[Position]:
    """Return the `size` contiguous cells from `origin` along +x or +y.

    Cells are not clipped to the board; callers bounds-check separately.
    """
    if orientation == Orientation.HORIZONTAL:
        return [Position(origin.x + i, origin.y) for i in range(size)]
    return [Position(origin.x, origin.y + i) for i in range(size)]


def _rejection_reason(
    board: Board, origin: Position, size: int, orientation: Orientation
) -> Optional[str]:
    cells = ship_cells(origin, size, orientation)

    if any(not is_within_bounds(c, board.size) for c in cells):
        return "Ship does not fit on the board"

    if any(board.cell(c).status != CellStatus.EMPTY for c in cells):
        return "Ship overlaps another ship"

    # Any existing ship cell within Chebyshev distance 1 touches the new ship
    for other in board.ships:
        for occupied in other.positions:
            if any(chebyshev_distance(c.x, c.y, occupied.x, occupied.y) <= 1 for c in cells):
                return "Ship touches another ship"

    return None


def can_place(board: Board, origin: Position, size: int, orientation: Orientation) -> bool:
    """Return True if a ship of `size` fits at `origin` without touching other ships."""
    return _rejection_reason(board, origin, size, orientation) is None


def place_ship(
    board: Board, origin: Position, ship_type: ShipType, orientation: Orientation
) -> PlacementResult:
    """Place a ship of `ship_type` at `origin`.

    Illegal placements are not errors: the input board is returned unchanged
    together with the reason, and nothing is mutated.

    Args:
        board: Board to place on (not modified)
        origin: Top/left cell of the ship
        ship_type: Type of ship; determines its size
        orientation: Direction the ship extends from origin

    Returns:
        PlacementResult with the new board and ship, or the reason for rejection
    """
    reason = _rejection_reason(board, origin, ship_type.size, orientation)
    if reason:
        return PlacementResult(board=board, reason=reason)

    ship = Ship(
        type=ship_type,
        positions=ship_cells(origin, ship_type.size, orientation),
        orientation=orientation,
    )
    new_board = board.copy()
    for pos in ship.positions:
        cell = new_board.cell(pos)
        cell.status = CellStatus.SHIP
        cell.ship_id = ship.id
    new_board.ships.append(ship)

    return PlacementResult(board=new_board, ship=ship)


def random_fleet(board: Board, rng: GameRNG, ship_types: Iterable[ShipType]) -> Board:
    """Place every type in `ship_types` not yet on `board` at random legal positions.

    Args:
        board: Board to complete (not modified)
        rng: Random source
        ship_types: Types the finished board must contain

    Returns:
        A new board holding the completed fleet

    Raises:
        RuntimeError: If a ship cannot be placed after many attempts
            (only possible on a crowded, hand-placed board)
    """
    placed = set(board.placed_types)
    for ship_type in ship_types:
        if ship_type in placed:
            continue
        for _ in range(RANDOM_PLACEMENT_ATTEMPTS):
            orientation = rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
            origin = Position(rng.randint(0, board.size - 1), rng.randint(0, board.size - 1))
            result = place_ship(board, origin, ship_type, orientation)
            if result.placed:
                board = result.board
                placed.add(ship_type)
                break
        else:
            logger.debug(f"No room for {ship_type.value} after {RANDOM_PLACEMENT_ATTEMPTS} attempts")
            raise RuntimeError(f"Could not find room for {ship_type.value}")

    return board
