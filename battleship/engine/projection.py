"""Per-participant views of a room.

Each participant sees their own board in full and the opponent's board with
only attacked cells revealed. This is the only representation of game state
that leaves the server.
"""

from typing import Optional

from ..models.board import Board, CellStatus
from ..models.room import Room, RoomStatus
from ..models.ship import ShipType
from ..utils.constants import BOARD_SIZE
from .victory import missing_types, sunk_types

UNKNOWN = "unknown"


def own_grid(board: Optional[Board]) -> list[list[str]]:
    """Full-detail grid for the board's owner."""
    if board is None:
        return [[CellStatus.EMPTY.value] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    return board.status_grid()


def enemy_grid(board: Optional[Board]) -> list[list[str]]:
    """Opponent's grid with everything but hits and misses hidden."""
    if board is None:
        return [[UNKNOWN] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    return [
        [cell.status.value if cell.resolved else UNKNOWN for cell in row]
        for row in board.cells
    ]


def project_view(room: Room, participant_id: str, fleet: tuple[ShipType, ...] = tuple(ShipType)) -> dict:
    """Serialize the room from one participant's perspective.

    Args:
        room: Room to describe
        participant_id: Participant the view is for
        fleet: Ship types each participant must place

    Returns:
        Dictionary safe to send to that participant

    Raises:
        KeyError: If the participant is not in the room
    """
    me = room.get(participant_id)
    if me is None:
        raise KeyError(participant_id)
    opponent = room.opponent_of(participant_id)

    my_board = me.board
    their_board = opponent.board if opponent else None

    return {
        "roomCode": room.code,
        "status": room.status.value,
        "players": room.players_summary(),
        "playerBoard": own_grid(my_board),
        "enemyBoard": enemy_grid(their_board),
        "currentTurn": room.current_turn if room.status == RoomStatus.PLAYING else None,
        "yourTurn": room.holds_turn(participant_id),
        "ready": me.ready,
        "placedShips": [t.value for t in my_board.placed_types] if my_board else [],
        "shipsToPlace": [t.value for t in missing_types(my_board, fleet)] if my_board else [],
        "yourSunkShips": [t.value for t in sunk_types(my_board)] if my_board else [],
        "enemySunkShips": [t.value for t in sunk_types(their_board)] if their_board else [],
        "lastAttack": room.last_attack,
        "winner": room.winner,
    }
