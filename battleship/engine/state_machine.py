"""Turn and game state machine for one room.

Room lifecycle:
1. waiting  - one participant, no boards
2. placing  - two participants; start_game allocates boards, ships are placed
3. playing  - both participants ready; placement frozen, attacks allowed
4. finished - terminal; winner recorded

Turn rule: the turn passes to the opponent only on a miss. A hit, including
the one that sinks a ship, grants the attacker another shot.

The state machine holds no rooms itself. Callers pass the Room to operate on
and are responsible for serializing calls per room.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models.board import Board
from ..models.participant import Participant
from ..models.position import Orientation, Position
from ..models.room import Room, RoomStatus
from ..models.ship import ShipType
from ..utils.constants import MAX_PARTICIPANTS
from ..utils.rng import GameRNG
from .attack import attack as resolve_attack
from .exceptions import (
    CellAlreadyAttacked,
    FleetIncomplete,
    GameAlreadyStarted,
    InvalidPhase,
    InvariantViolation,
    NoOpponent,
    NotEnoughPlayers,
    NotInRoom,
    NotYourTurn,
)
from .placement import PlacementResult, place_ship, random_fleet
from .victory import all_sunk, fleet_complete, hits_match_cells

logger = logging.getLogger(__name__)


@dataclass
class ShipPlacement:
    """A participant's request to place one ship."""

    ship_type: ShipType
    origin: Position
    orientation: Orientation


@dataclass
class AttackResult:
    """Public outcome of one attack.

    Attributes:
        x: Target column
        y: Target row
        hit: True if a ship was struck
        sunk: Summary of the ship sunk by this attack, if any
        game_over: True on the attack that sinks the opponent's last ship
        attacker_id: Participant who attacked
        next_turn: Participant holding the turn after this attack
    """

    x: int
    y: int
    hit: bool
    attacker_id: str
    next_turn: Optional[str]
    sunk: Optional[dict] = None
    game_over: bool = False

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "hit": self.hit,
            "sunk": self.sunk,
            "gameOver": self.game_over,
            "attackerId": self.attacker_id,
            "nextTurn": self.next_turn,
        }


class GameStateMachine:
    """Applies placement, readiness and attack operations to rooms.

    Each operation validates the room's phase and the acting participant,
    then delegates cell-level work to the board engine.
    """

    def __init__(self, rng: GameRNG | None = None, fleet: tuple[ShipType, ...] = tuple(ShipType)):
        """Initialize the state machine.

        Args:
            rng: Random source for first-turn selection and random fleets
            fleet: Ship types each participant must place
        """
        self.rng = rng or GameRNG()
        self.fleet = fleet

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start_game(self, room: Room) -> str:
        """Allocate empty boards and choose who attacks first.

        Args:
            room: Room with exactly two participants that has not started yet

        Returns:
            Participant id of the first turn holder

        Raises:
            NotEnoughPlayers: If the room does not have two participants
            GameAlreadyStarted: If boards were already allocated
        """
        if room.boards_ready or room.status not in (RoomStatus.WAITING, RoomStatus.PLACING):
            raise GameAlreadyStarted()
        if len(room.participants) != MAX_PARTICIPANTS:
            raise NotEnoughPlayers()

        for participant in room.participants:
            participant.board = Board()
            participant.ready = False

        room.boards_ready = True
        room.current_turn = self.rng.choice([p.id for p in room.participants])
        room.advance(RoomStatus.PLACING)

        logger.info(f"Room {room.code}: game started, first turn {room.current_turn}")
        return room.current_turn

    def end_game(self, room: Room, winner_id: Optional[str] = None) -> None:
        """Finish the game, clearing the turn pointer and recording the winner."""
        room.advance(RoomStatus.FINISHED)
        room.current_turn = None
        room.winner = winner_id
        logger.info(f"Room {room.code}: game finished, winner {winner_id}")

    # =========================================================================
    # PLACEMENT
    # =========================================================================

    def place_ship(self, room: Room, participant_id: str, placement: ShipPlacement) -> PlacementResult:
        """Place one ship on the participant's own board.

        Rejections (ship type already placed, off-board, overlapping or
        touching another ship) are returned as a PlacementResult with a
        reason and leave the board untouched.

        Raises:
            NotInRoom: If the participant is not in the room
            InvalidPhase: If the room is not placing or the participant is ready
        """
        participant = self._placing_participant(room, participant_id)
        board = participant.board

        if placement.ship_type in board.placed_types:
            return PlacementResult(
                board=board, reason=f"{placement.ship_type.display_name} is already placed"
            )

        result = place_ship(board, placement.origin, placement.ship_type, placement.orientation)
        if result.placed:
            participant.board = result.board
            logger.debug(
                f"Room {room.code}: {participant_id} placed {placement.ship_type.value} "
                f"at ({placement.origin.x}, {placement.origin.y}) {placement.orientation.value}"
            )
        else:
            logger.debug(
                f"Room {room.code}: {participant_id} placement of "
                f"{placement.ship_type.value} rejected: {result.reason}"
            )
        return result

    def reset_ships(self, room: Room, participant_id: str) -> None:
        """Clear the participant's board so placement can start over."""
        participant = self._placing_participant(room, participant_id)
        participant.board = Board()

    def randomize_ships(self, room: Room, participant_id: str) -> None:
        """Complete the participant's fleet at random legal positions.

        Ships already placed by hand are kept when possible; if they leave no
        room for the rest, the whole fleet is placed from scratch.
        """
        participant = self._placing_participant(room, participant_id)
        try:
            participant.board = random_fleet(participant.board, self.rng, self.fleet)
        except RuntimeError:
            logger.debug(f"Room {room.code}: re-placing {participant_id}'s fleet from scratch")
            participant.board = random_fleet(Board(), self.rng, self.fleet)

    def set_ready(self, room: Room, participant_id: str) -> bool:
        """Lock in the participant's fleet.

        When both participants are ready the room moves to playing.

        Returns:
            True if every participant is now ready

        Raises:
            FleetIncomplete: If the participant has not placed every ship
            InvalidPhase: If the game is already over
        """
        participant = self._participant(room, participant_id)
        if room.status == RoomStatus.FINISHED:
            raise InvalidPhase("The game is over")
        if participant.ready:
            return self._all_ready(room)
        self._require_placing(room)
        self._board_of(room, participant)

        if not fleet_complete(participant.board, self.fleet):
            raise FleetIncomplete()

        participant.ready = True
        logger.info(f"Room {room.code}: {participant_id} is ready")

        if self._all_ready(room):
            room.advance(RoomStatus.PLAYING)
            logger.info(f"Room {room.code}: all ready, {room.current_turn} attacks first")
            return True
        return False

    # =========================================================================
    # BATTLE
    # =========================================================================

    def attack(self, room: Room, participant_id: str, coordinate: Position) -> AttackResult:
        """Fire at the opponent's board.

        Args:
            room: Room in the playing state
            participant_id: Attacking participant
            coordinate: Target cell on the opponent's board

        Returns:
            AttackResult; game_over is set on the attack that sinks the last ship

        Raises:
            InvalidPhase: If the room is not playing
            NotYourTurn: If the participant does not hold the turn
            NoOpponent: If the opponent has left
            OutOfBounds: If the coordinate is off the board
            CellAlreadyAttacked: If the target cell was already hit or missed
        """
        self._participant(room, participant_id)
        if room.status != RoomStatus.PLAYING:
            if room.status == RoomStatus.FINISHED:
                raise InvalidPhase("The game is over")
            raise InvalidPhase("The battle has not started")
        if not room.holds_turn(participant_id):
            raise NotYourTurn()

        opponent = room.opponent_of(participant_id)
        if opponent is None:
            raise NoOpponent()
        board = self._board_of(room, opponent)

        outcome = resolve_attack(board, coordinate)
        if outcome.repeated:
            raise CellAlreadyAttacked()
        if not hits_match_cells(outcome.board):
            raise InvariantViolation(f"Room {room.code}: hit counters out of sync with cells")

        opponent.board = outcome.board
        game_over = outcome.sunk_ship is not None and all_sunk(outcome.board)

        if not outcome.hit:
            room.current_turn = opponent.id

        result = AttackResult(
            x=coordinate.x,
            y=coordinate.y,
            hit=outcome.hit,
            attacker_id=participant_id,
            next_turn=room.current_turn,
            sunk=outcome.sunk_ship.summary() if outcome.sunk_ship else None,
            game_over=game_over,
        )
        room.last_attack = result.to_dict()

        logger.info(
            f"Room {room.code}: {participant_id} fired at ({coordinate.x}, {coordinate.y}): "
            f"{'hit' if outcome.hit else 'miss'}"
            f"{', sunk ' + outcome.sunk_ship.type.value if outcome.sunk_ship else ''}"
            f"{', game over' if game_over else ''}"
        )
        return result

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _participant(self, room: Room, participant_id: str) -> Participant:
        participant = room.get(participant_id)
        if participant is None:
            raise NotInRoom()
        return participant

    def _require_placing(self, room: Room) -> None:
        if room.status != RoomStatus.PLACING or not room.boards_ready:
            if room.status in (RoomStatus.PLAYING, RoomStatus.FINISHED):
                raise InvalidPhase("Ships can only be placed before the battle")
            raise InvalidPhase("The game has not started")

    def _board_of(self, room: Room, participant: Participant) -> Board:
        if participant.board is None:
            raise InvariantViolation(f"Room {room.code}: {participant.id} has no board")
        return participant.board

    def _placing_participant(self, room: Room, participant_id: str) -> Participant:
        participant = self._participant(room, participant_id)
        self._require_placing(room)
        if participant.ready:
            raise InvalidPhase("Your fleet is already locked in")
        self._board_of(room, participant)
        return participant

    def _all_ready(self, room: Room) -> bool:
        return len(room.participants) == MAX_PARTICIPANTS and all(
            p.ready for p in room.participants
        )
