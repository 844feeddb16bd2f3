"""Board data model: a 10x10 grid of cells plus the ships placed on it."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..utils.constants import BOARD_SIZE
from .position import Position
from .ship import Ship, ShipType


class CellStatus(str, Enum):
    """State of a single cell.

    Transitions only move forward: EMPTY -> SHIP at placement, and
    EMPTY -> MISS or SHIP -> HIT under attack. HIT and MISS are terminal.
    """

    EMPTY = "empty"
    SHIP = "ship"
    HIT = "hit"
    MISS = "miss"


@dataclass
class Cell:
    """One grid cell and the id of the ship occupying it, if any."""

    status: CellStatus = CellStatus.EMPTY
    ship_id: Optional[str] = None

    @property
    def resolved(self) -> bool:
        """True once the cell has been attacked."""
        return self.status in (CellStatus.HIT, CellStatus.MISS)


def _empty_grid(size: int) -> list[list[Cell]]:
    return [[Cell() for _ in range(size)] for _ in range(size)]


@dataclass
class Board:
    """A participant's grid.

    Cells are indexed ``cells[y][x]``. Engine functions never mutate a board
    in place; they work on a ``copy()`` and return it.
    """

    size: int = BOARD_SIZE
    cells: list[list[Cell]] = field(default_factory=list)
    ships: list[Ship] = field(default_factory=list)

    def __post_init__(self):
        """Build an empty grid when none is given and validate its shape."""
        if not self.cells:
            self.cells = _empty_grid(self.size)
        if len(self.cells) != self.size or any(len(row) != self.size for row in self.cells):
            raise ValueError(f"Invalid grid shape (must be {self.size}x{self.size})")

    def cell(self, pos: Position) -> Cell:
        return self.cells[pos.y][pos.x]

    def copy(self) -> "Board":
        """Return an independent copy of the grid and its ships."""
        return Board(
            size=self.size,
            cells=[[Cell(c.status, c.ship_id) for c in row] for row in self.cells],
            ships=[
                Ship(
                    type=s.type,
                    positions=list(s.positions),
                    orientation=s.orientation,
                    hits=s.hits,
                    id=s.id,
                )
                for s in self.ships
            ],
        )

    def ship_by_id(self, ship_id: str) -> Optional[Ship]:
        return next((s for s in self.ships if s.id == ship_id), None)

    @property
    def placed_types(self) -> list[ShipType]:
        return [s.type for s in self.ships]

    def status_grid(self) -> list[list[str]]:
        """Full-detail grid of cell status strings, rows indexed by y."""
        return [[c.status.value for c in row] for row in self.cells]
