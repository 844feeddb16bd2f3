"""Game engine components."""

from .attack import AttackOutcome, attack
from .placement import PlacementResult, can_place, is_within_bounds, place_ship, random_fleet, ship_cells
from .projection import project_view
from .state_machine import AttackResult, GameStateMachine, ShipPlacement
from .victory import all_sunk

__all__ = [
    "AttackOutcome",
    "AttackResult",
    "GameStateMachine",
    "PlacementResult",
    "ShipPlacement",
    "all_sunk",
    "attack",
    "can_place",
    "is_within_bounds",
    "place_ship",
    "project_view",
    "random_fleet",
    "ship_cells",
]
