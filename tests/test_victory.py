"""Tests for fleet completeness and victory checks."""

from battleship.engine.attack import attack
from battleship.engine.placement import place_ship
from battleship.engine.victory import (
    all_sunk,
    fleet_complete,
    hits_match_cells,
    missing_types,
    sunk_types,
)
from battleship.models import Board, Orientation, Position, ShipType

H = Orientation.HORIZONTAL


def two_ship_board() -> Board:
    board = place_ship(Board(), Position(0, 0), ShipType.DESTROYER, H).board
    return place_ship(board, Position(0, 2), ShipType.CRUISER, H).board


def test_empty_board_not_defeated():
    """Test a board with no ships is never all sunk."""
    assert not all_sunk(Board())


def test_all_sunk_after_every_cell_hit():
    """Test all_sunk flips only once the last ship cell is hit."""
    board = two_ship_board()
    targets = [Position(0, 0), Position(1, 0), Position(0, 2), Position(1, 2), Position(2, 2)]

    for target in targets[:-1]:
        board = attack(board, target).board
        assert not all_sunk(board)

    board = attack(board, targets[-1]).board
    assert all_sunk(board)


def test_sunk_types():
    board = two_ship_board()
    board = attack(board, Position(0, 0)).board
    board = attack(board, Position(1, 0)).board

    assert sunk_types(board) == [ShipType.DESTROYER]


def test_missing_types_in_fleet_order():
    board = two_ship_board()
    assert missing_types(board, tuple(ShipType)) == [
        ShipType.CARRIER,
        ShipType.BATTLESHIP,
        ShipType.SUBMARINE,
    ]
    assert not fleet_complete(board, tuple(ShipType))
    assert fleet_complete(board, [ShipType.DESTROYER, ShipType.CRUISER])


def test_hits_match_cells():
    """Test the hit counter consistency check."""
    board = attack(two_ship_board(), Position(0, 0)).board
    assert hits_match_cells(board)

    board.ships[0].hits = 2
    assert not hits_match_cells(board)
