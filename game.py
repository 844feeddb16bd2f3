#!/usr/bin/env python3
"""Battleship - local hot-seat entry point.

Two players share one terminal. Each places a fleet in turn, then they take
turns firing at each other's board. A hit grants another shot; the first to
sink the whole enemy fleet wins.
"""

import argparse
import logging
import sys
from typing import Callable, Optional

from battleship import config
from battleship.engine.exceptions import GameError
from battleship.engine.projection import project_view
from battleship.engine.state_machine import GameStateMachine, ShipPlacement
from battleship.interface.command_parser import CommandParseError, CommandParser, format_coordinate
from battleship.interface.renderer import BoardRenderer
from battleship.models.room import Room, RoomStatus
from battleship.server.registry import RoomRegistry
from battleship.utils.rng import GameRNG

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  place <ship> <coord> <h|v>   Place a ship, e.g. place carrier B2 h
  random                       Place the rest of your fleet at random
  reset                        Clear your board and start placing again
  ready                        Lock in your fleet
  fire <coord>                 Fire at the enemy board, e.g. fire J10
  board                        Show your boards again
  help                         Show this help
  quit                         End the game

Ships: carrier (5), battleship (4), cruiser (3), submarine (3), destroyer (2)
Coordinates: row letter A-J, column number 1-10. Ships may not touch."""


class QuitMatch(Exception):
    """Raised when a player asks to end the match."""


class LocalMatch:
    """Runs a two-player match in one terminal.

    Uses the same registry and state machine as the server, with fixed
    participant ids "p1" and "p2".
    """

    def __init__(
        self,
        names: tuple[str, str] = ("Player 1", "Player 2"),
        seed: Optional[int] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        """Create the room and allocate both boards.

        Args:
            names: Display names of player 1 and player 2
            seed: Seed for the first-turn draw and random fleets
            input_fn: Reads one line given a prompt
            output_fn: Writes one block of text
        """
        self.registry = RoomRegistry(rng=GameRNG(seed))
        self.machine = GameStateMachine(rng=GameRNG(seed))
        self.parser = CommandParser()
        self.renderer = BoardRenderer()
        self.input = input_fn
        self.output = output_fn

        code = self.registry.create_room("p1", names[0])
        self.room: Room = self.registry.join_room("p2", names[1], code)
        self.machine.start_game(self.room)

    def run(self) -> Optional[str]:
        """Main game loop.

        Returns:
            Winner's participant id, or None if the match was abandoned
        """
        self.output("\n" + "=" * 60)
        self.output("Battleship")
        self.output("=" * 60)
        self.output("\nSink the enemy fleet to win. Type 'help' for commands.\n")

        current = None
        try:
            while self.room.status != RoomStatus.FINISHED:
                participant_id = self.active_participant()
                if participant_id != current:
                    self._hand_over(participant_id)
                    current = participant_id

                self.output(self.renderer.render_view(self.view(participant_id)))
                line = self.input(f"{self.room.get(participant_id).name}> ")
                message = self.step(participant_id, line)
                if message:
                    self.output(message)

        except QuitMatch:
            self.output("\nGame ended by player.")
            return None
        except (KeyboardInterrupt, EOFError):
            self.output("\n\nGame interrupted by user. Exiting...")
            return None

        self._show_victory()
        return self.room.winner

    def active_participant(self) -> str:
        """Participant who should act next.

        During placement players set up one after the other; in battle it is
        the turn holder.
        """
        if self.room.status == RoomStatus.PLACING:
            return next(p.id for p in self.room.participants if not p.ready)
        return self.room.current_turn

    def view(self, participant_id: str) -> dict:
        return project_view(self.room, participant_id, self.machine.fleet)

    def step(self, participant_id: str, line: str) -> str:
        """Parse and apply one command line.

        Returns:
            Message to show the player (errors included)

        Raises:
            QuitMatch: If the player asked to quit
        """
        try:
            command = self.parser.parse(line)
        except CommandParseError as e:
            return e.message

        try:
            return self.execute(participant_id, command)
        except GameError as e:
            logger.debug(f"Rejected {command.action} from {participant_id}: {e.message}")
            return e.message

    def execute(self, participant_id: str, command) -> str:
        """Apply a parsed command for the participant."""
        action = command.action

        if action == "place":
            placement = ShipPlacement(command.ship_type, command.position, command.orientation)
            result = self.machine.place_ship(self.room, participant_id, placement)
            if not result.placed:
                return result.reason
            return f"Placed {command.ship_type.display_name} at {format_coordinate(command.position)}."

        if action == "random":
            self.machine.randomize_ships(self.room, participant_id)
            return "Fleet placed at random."

        if action == "reset":
            self.machine.reset_ships(self.room, participant_id)
            return "Board cleared."

        if action == "ready":
            if self.machine.set_ready(self.room, participant_id):
                return "All fleets ready. Battle stations!"
            return "Fleet locked in."

        if action == "fire":
            return self._fire(participant_id, command.position)

        if action == "board":
            return ""

        if action == "help":
            return HELP_TEXT

        if action == "quit":
            raise QuitMatch()

        raise ValueError(f"Unhandled command: {action}")

    def _fire(self, participant_id: str, position) -> str:
        result = self.machine.attack(self.room, participant_id, position)
        target = format_coordinate(position)

        if not result.hit:
            return f"{target}: miss."

        message = f"{target}: hit!"
        if result.sunk:
            message += f" You sank the {result.sunk['name']}!"
        if result.game_over:
            self.machine.end_game(self.room, winner_id=participant_id)
        else:
            message += " Fire again."
        return message

    def _hand_over(self, participant_id: str) -> None:
        """Clear the screen area and wait for the next player."""
        name = self.room.get(participant_id).name
        self.output("\n" * 3 + f"--- Pass the terminal to {name} ---")
        self.input("Press Enter when ready...")

    def _show_victory(self) -> None:
        winner = self.room.get(self.room.winner)
        self.output("\n" + "=" * 60)
        self.output(f"GAME OVER - {winner.name} wins!")
        self.output("=" * 60)
        for participant in self.room.participants:
            self.output(f"\n{participant.name}'s fleet:")
            self.output(self.renderer.render_grid(participant.board.status_grid()))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Battleship - two players, one terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                              # Start a new game
  %(prog)s --names Alice Bob            # Custom player names
  %(prog)s --seed 42                    # Deterministic first turn and random fleets
        """,
    )
    parser.add_argument(
        "--names",
        nargs=2,
        metavar=("P1", "P2"),
        default=["Player 1", "Player 2"],
        help="Player display names (default: 'Player 1' 'Player 2')",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.SEED,
        help="Random seed (default: BATTLESHIP_SEED, or nondeterministic)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    # Game output goes to stdout; only warnings are logged unless --debug
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    match = LocalMatch(names=tuple(args.names), seed=args.seed)
    winner = match.run()
    sys.exit(0 if winner else 1)


if __name__ == "__main__":
    main()
