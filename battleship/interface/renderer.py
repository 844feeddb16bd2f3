"""ASCII board rendering for local play.

Renders from a projected view (see engine.projection), so the terminal shows
a participant exactly what a remote client would receive.
"""

from ..utils.constants import MAX_PARTICIPANTS
from .command_parser import ROW_LETTERS

# Cell status -> symbol
SYMBOLS = {
    "empty": ".",
    "ship": "#",
    "hit": "X",
    "miss": "o",
    "unknown": "~",
}


class BoardRenderer:
    """Renders a participant's view of a room as ASCII art."""

    def render_grid(self, grid: list[list[str]]) -> str:
        """Render one grid with coordinate labels.

        Output format (10x10, rows A-J, columns 1-10):
             1  2  3  4  5  6  7  8  9 10
          A  #  #  #  .  .  .  .  .  .  .
          B  .  .  .  .  X  .  .  o  .  .
          ...

        Legend:
        - '#' = your ship
        - 'X' = hit
        - 'o' = miss
        - '.' = open water
        - '~' = not yet attacked (enemy board)

        Args:
            grid: Rows of cell status strings, indexed [y][x]

        Returns:
            Multi-line string
        """
        header = "   " + "".join(f"{i:>3}" for i in range(1, len(grid[0]) + 1))
        lines = [header]
        for y, row in enumerate(grid):
            cells = "".join(f"{SYMBOLS.get(status, '?'):>3}" for status in row)
            lines.append(f"  {ROW_LETTERS[y].upper()}{cells}")
        return "\n".join(lines)

    def render_view(self, view: dict) -> str:
        """Render both boards side by side with a status line.

        Args:
            view: Projected view of the room for one participant

        Returns:
            Multi-line string
        """
        own = self.render_grid(view["playerBoard"]).split("\n")
        enemy = self.render_grid(view["enemyBoard"]).split("\n")
        width = max(len(line) for line in own)

        lines = [f"{'YOUR FLEET':<{width}}     ENEMY WATERS"]
        lines.extend(f"{a:<{width}}     {b}" for a, b in zip(own, enemy))
        lines.append("")
        lines.append(self.render_status(view))
        return "\n".join(lines)

    def render_status(self, view: dict) -> str:
        """One or two lines summarizing phase, turn and fleets."""
        status = view["status"]

        if status == "placing":
            if view["ready"]:
                return "Fleet locked in. Waiting for your opponent."
            to_place = ", ".join(view["shipsToPlace"]) or "none"
            return f"Ships to place: {to_place}"

        if status == "finished":
            return "Game over."

        if status == "playing":
            turn = "Your turn." if view["yourTurn"] else "Opponent's turn."
            lost = ", ".join(view["yourSunkShips"]) or "none"
            sunk = ", ".join(view["enemySunkShips"]) or "none"
            return f"{turn}\nYou lost: {lost} | You sank: {sunk}"

        return f"Waiting for players ({len(view['players'])}/{MAX_PARTICIPANTS})"
