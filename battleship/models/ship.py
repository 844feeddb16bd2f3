"""Ship data model and the fixed fleet table."""

import uuid
from dataclasses import dataclass, field
from enum import Enum

from ..utils.constants import FLEET
from .position import Orientation, Position


class ShipType(str, Enum):
    """The five ship types of a standard fleet.

    Cruiser and submarine share a size but are distinct types, so a
    participant places each of them once.
    """

    CARRIER = "carrier"
    BATTLESHIP = "battleship"
    CRUISER = "cruiser"
    SUBMARINE = "submarine"
    DESTROYER = "destroyer"

    @property
    def size(self) -> int:
        return SHIP_SIZES[self]

    @property
    def wire_id(self) -> int:
        """Numeric id used by clients that send ships as integers (1-5)."""
        return list(ShipType).index(self) + 1

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_wire_id(cls, wire_id: int) -> "ShipType":
        """Look up a ship type by its numeric id.

        Raises:
            ValueError: If wire_id is not in 1-5
        """
        members = list(cls)
        if not 1 <= wire_id <= len(members):
            raise ValueError(f"Unknown ship id: {wire_id} (must be 1-{len(members)})")
        return members[wire_id - 1]


SHIP_SIZES = {ShipType(name): size for name, size in FLEET}


def _new_ship_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Ship:
    """A placed ship.

    Created once at placement and never moved. The id is freshly generated
    for every placement, so ships from different boards or rooms never
    collide even when they share a type.
    """

    type: ShipType
    positions: list[Position]
    orientation: Orientation
    hits: int = 0
    id: str = field(default_factory=_new_ship_id)

    def __post_init__(self):
        """Validate ship data after initialization."""
        if len(self.positions) != self.type.size:
            raise ValueError(
                f"Invalid positions for {self.type.value}: "
                f"{len(self.positions)} cells (must be {self.type.size})"
            )
        if not 0 <= self.hits <= self.type.size:
            raise ValueError(f"Invalid hits: {self.hits} (must be 0-{self.type.size})")

    @property
    def size(self) -> int:
        return self.type.size

    @property
    def sunk(self) -> bool:
        return self.hits == self.size

    def summary(self) -> dict:
        """Public description of the ship, without its position."""
        return {
            "id": self.type.wire_id,
            "type": self.type.value,
            "name": self.type.display_name,
            "size": self.size,
        }
