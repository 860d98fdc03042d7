import sys
from typing import Dict, List, TextIO

from ..engine.models import Cell, GameSnapshot


HEAD = "@"
BODY = "o"
EMPTY = "."


def build_cells(snapshot: GameSnapshot) -> Dict[Cell, str]:
    """Map occupied cells to the character drawn there."""
    cells: Dict[Cell, str] = {}

    for tile in snapshot.tiles:
        cells[Cell(tile.x, tile.y)] = tile.letter.upper()

    # Snake drawn over tiles; carried letters in lowercase to tell them apart
    for index, segment in enumerate(snapshot.snake):
        if index == 0:
            cells[segment] = HEAD
        elif index - 1 < len(snapshot.snake_letters):
            cells[segment] = snapshot.snake_letters[index - 1].lower()
        else:
            cells[segment] = BODY

    return cells


def render_board(snapshot: GameSnapshot) -> str:
    """Render the grid to a string, one row per line."""
    cells = build_cells(snapshot)
    lines = [
        ''.join(cells.get(Cell(x, y), EMPTY) for x in range(snapshot.grid_width))
        for y in range(snapshot.grid_height)
    ]
    return '\n'.join(lines)


def render_status(snapshot: GameSnapshot) -> List[str]:
    """Score, carried letters, current word and recent words."""
    lines = [
        f"Score: {snapshot.score}   Tick: {snapshot.tick}",
        f"Letters: {' '.join(snapshot.snake_letters)}",
        f"Word: {snapshot.current_word}",
    ]
    if snapshot.word_history:
        history = ", ".join(f"{e.word} ({e.points})" for e in snapshot.word_history)
        lines.append(f"History: {history}")
    if snapshot.status == "game_over":
        lines.append(f"GAME OVER - final score {snapshot.score}")
    return lines


def render(snapshot: GameSnapshot) -> str:
    """Full text frame: board followed by status lines."""
    return '\n'.join([render_board(snapshot), *render_status(snapshot)])


class TextRenderer:
    """Display that writes each frame as text to a stream."""

    def __init__(self, stream: TextIO | None = None, only_changes: bool = False):
        self.stream = stream or sys.stdout
        self.only_changes = only_changes
        self.frames = 0
        self._last_frame: str | None = None

    def render(self, snapshot: GameSnapshot) -> None:
        frame = render(snapshot)
        if self.only_changes and frame == self._last_frame:
            return
        self._last_frame = frame
        self.frames += 1
        print(frame, file=self.stream)
        print("-" * max(snapshot.grid_width, 20), file=self.stream)
