"""Board coordinates and ship orientation."""

from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    """Direction a ship extends from its origin cell."""

    HORIZONTAL = "horizontal"  # +x
    VERTICAL = "vertical"  # +y


@dataclass(frozen=True)
class Position:
    """A cell coordinate. Not bounds-checked; see engine.placement.is_within_bounds."""

    x: int
    y: int
