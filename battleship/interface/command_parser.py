"""Command parser for local hot-seat play.

Parses terminal commands like "place carrier B2 h" or "fire J10" into
Command objects the local game loop can apply to a room.

Coordinates are a row letter followed by a column number, both starting at
the top-left corner: "A1" is (x=0, y=0) and "B7" is (x=6, y=1).
"""

import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models.position import Orientation, Position
from ..models.ship import ShipType
from ..utils.constants import BOARD_SIZE


class ErrorType(Enum):
    """Classification of command input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"
    VALIDATION_ERROR = "validation_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


@dataclass
class Command:
    """A parsed terminal command."""

    action: str  # place, fire, random, reset, ready, board, help, quit
    ship_type: Optional[ShipType] = None
    position: Optional[Position] = None
    orientation: Optional[Orientation] = None


ROW_LETTERS = string.ascii_lowercase[:BOARD_SIZE]

PLACE_USAGE = "Correct format: place <ship> <coord> <h|v>  (e.g. place carrier B2 h)"
FIRE_USAGE = "Correct format: fire <coord>  (e.g. fire J10)"

# Single-word commands and their aliases
SIMPLE_COMMANDS = {
    "random": "random",
    "auto": "random",
    "reset": "reset",
    "clear": "reset",
    "ready": "ready",
    "done": "ready",
    "board": "board",
    "b": "board",
    "help": "help",
    "h": "help",
    "?": "help",
    "quit": "quit",
    "exit": "quit",
    "q": "quit",
}

ORIENTATIONS = {
    "h": Orientation.HORIZONTAL,
    "horizontal": Orientation.HORIZONTAL,
    "v": Orientation.VERTICAL,
    "vertical": Orientation.VERTICAL,
}


def format_coordinate(position: Position) -> str:
    """Inverse of parse_coordinate: (6, 1) -> "B7"."""
    return f"{ROW_LETTERS[position.y].upper()}{position.x + 1}"


class CommandParser:
    """Parse terminal commands into Commands."""

    def parse(self, command: str) -> Command:
        """Parse a command string.

        Supported formats:
        - "place <ship> <coord> <h|v>"  (ship by name or numeric id 1-5)
        - "fire <coord>"  (also "attack", "shoot")
        - "random", "reset", "ready", "board", "help", "quit"

        Args:
            command: Command string to parse

        Returns:
            Parsed Command

        Raises:
            CommandParseError: If the command is unknown or malformed
        """
        parts = command.strip().lower().split()
        if not parts:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Empty command")

        word, args = parts[0], parts[1:]

        if word in SIMPLE_COMMANDS:
            if args:
                raise CommandParseError(
                    ErrorType.SYNTAX_ERROR, f"'{word}' takes no arguments"
                )
            return Command(action=SIMPLE_COMMANDS[word])

        if word == "place":
            return self._parse_place(args)

        if word in ("fire", "attack", "shoot"):
            if len(args) != 1:
                raise CommandParseError(
                    ErrorType.SYNTAX_ERROR, f"Syntax error: invalid command format\n{FIRE_USAGE}"
                )
            return Command(action="fire", position=self.parse_coordinate(args[0]))

        raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{word}'")

    def _parse_place(self, args: list[str]) -> Command:
        if len(args) != 3:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Syntax error: invalid command format\n{PLACE_USAGE}"
            )
        ship, coord, orientation = args

        return Command(
            action="place",
            ship_type=self.parse_ship(ship),
            position=self.parse_coordinate(coord),
            orientation=self._parse_orientation(orientation),
        )

    def parse_ship(self, text: str) -> ShipType:
        """Resolve a ship by name ("cruiser") or numeric id ("3").

        Raises:
            CommandParseError: If no ship type matches
        """
        try:
            if text.isdigit():
                return ShipType.from_wire_id(int(text))
            return ShipType(text)
        except ValueError:
            names = ", ".join(t.value for t in ShipType)
            raise CommandParseError(
                ErrorType.VALIDATION_ERROR, f"Unknown ship: '{text}' (ships: {names})"
            )

    def parse_coordinate(self, text: str) -> Position:
        """Parse "B7" into Position(x=6, y=1).

        Raises:
            CommandParseError: If the text is not a coordinate on the board
        """
        match = re.fullmatch(r"([a-z])(\d{1,2})", text.strip().lower())
        if not match:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                f"Invalid coordinate: '{text}' (use a row letter and column number, e.g. B7)",
            )

        row = ROW_LETTERS.find(match.group(1))
        column = int(match.group(2))
        if row < 0 or not 1 <= column <= BOARD_SIZE:
            last = f"{ROW_LETTERS[-1].upper()}{BOARD_SIZE}"
            raise CommandParseError(
                ErrorType.VALIDATION_ERROR,
                f"Coordinate {text.upper()} is off the board (A1 to {last})",
            )
        return Position(column - 1, row)

    def _parse_orientation(self, text: str) -> Orientation:
        orientation = ORIENTATIONS.get(text)
        if orientation is None:
            raise CommandParseError(
                ErrorType.VALIDATION_ERROR,
                f"Invalid orientation: '{text}' (use h or v)",
            )
        return orientation
