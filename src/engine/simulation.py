"""
Game simulation for word-snake.

Owns all mutable game state (snake, carried letters, tiles, score, word
history, pending word removal and input state) and advances it one tick at
a time. Word submissions only schedule their removal; the letters and
segments are taken out at the start of the next tick so that a submission
arriving between ticks never disturbs movement or collision state.
"""

import logging
import random
from typing import AbstractSet, Any, List, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict

from .board import Board
from .letter_bag import LetterBag
from .input import (
    ARROW_KEYS,
    append_letter,
    backspace,
    clear_word,
    commit_direction,
    parse_letter,
    queue_direction,
)
from .models import (
    Cell,
    Direction,
    GameConfig,
    GameSnapshot,
    InputState,
    RemovalRecord,
    Status,
    Tile,
    WordHistoryEntry,
    RIGHT,
)
from ..words.dictionary import Dictionary
from ..words.validator import is_valid, select_letter_indices, score_word

logger = logging.getLogger(__name__)


def step_toward(cell: Cell, target: Cell, blocked: AbstractSet[Cell] = frozenset()) -> Cell:
    """
    Move one cell toward `target` along a single axis, x before y.

    A step onto a cell in `blocked` is not taken; the other axis is tried
    instead, and the cell stays put when both are blocked.
    """
    candidates = []
    if cell.x != target.x:
        candidates.append(Cell(cell.x + (1 if target.x > cell.x else -1), cell.y))
    if cell.y != target.y:
        candidates.append(Cell(cell.x, cell.y + (1 if target.y > cell.y else -1)))
    for candidate in candidates:
        if candidate not in blocked:
            return candidate
    return cell


def is_adjacent(a: Cell, b: Cell) -> bool:
    return abs(a.x - b.x) + abs(a.y - b.y) <= 1


class Simulation(BaseModel):
    """
    The snake, its letters and the tick state machine.

    Attributes:
        config: Game configuration
        board: Grid and tile spawner
        bag: Letter source
        status: "running" or "game_over"
        snake: Snake cells, head first
        direction: Direction committed on the last tick
        snake_letters: Carried letters; snake_letters[i] rides on snake[i + 1]
        tiles: Tiles currently on the board
        score: Points scored this game
        word_history: Submitted words, newest first
        pending_removal: Removal scheduled for the next tick, if any
        input_state: Turn buffering and current word state
        tick_count: Ticks advanced this game
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    dictionary: Any = Field(default_factory=frozenset, exclude=True)
    board: Board
    bag: LetterBag
    status: Status = "running"
    snake: List[Cell] = Field(default_factory=list)
    direction: Direction = RIGHT
    snake_letters: List[str] = Field(default_factory=list)
    tiles: List[Tile] = Field(default_factory=list)
    score: int = Field(default=0, ge=0)
    word_history: List[WordHistoryEntry] = Field(default_factory=list)
    pending_removal: Optional[RemovalRecord] = None
    input_state: InputState = Field(default_factory=InputState)
    tick_count: int = 0

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        dictionary: Optional[Dictionary] = None,
        seed: Optional[int] = None,
    ) -> "Simulation":
        """
        Factory method to create a fresh game ready to tick.

        The snake starts as a single cell at the configured start position
        moving right, the bag is refilled and the opening tile pair spawned.

        Args:
            config: Game configuration (defaults if omitted)
            dictionary: Valid lowercase words
            seed: Overrides config.seed for this game

        Returns:
            A running Simulation
        """
        config = config or GameConfig()
        seed = config.seed if seed is None else seed

        # Independent streams for letters and cells, both derived from one seed
        seeder = random.Random(seed)
        bag_seed = seeder.randrange(2**32) if seed is not None else None
        board_seed = seeder.randrange(2**32) if seed is not None else None

        board = Board(width=config.grid_width, height=config.grid_height, seed=board_seed)
        bag = LetterBag.create(seed=bag_seed)

        start = config.start_cell
        if not board.in_bounds(start):
            raise ValueError(
                f"Start cell {tuple(start)} is outside the "
                f"{board.width}x{board.height} grid"
            )

        snake = [start]
        tiles = board.spawn_initial_pair(snake, bag)

        return cls(
            config=config,
            dictionary=dictionary if dictionary is not None else frozenset(),
            board=board,
            bag=bag,
            snake=snake,
            tiles=tiles,
        )

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def is_running(self) -> bool:
        return self.status == "running"

    @property
    def current_word(self) -> str:
        return self.input_state.current_word

    # Tick

    def step(self) -> bool:
        """
        Advance the game by one tick.

        Order: apply pending removal, commit direction, move, check walls,
        check self, then pick up or drop the tail.

        Returns:
            True if this tick ended the game
        """
        if not self.is_running:
            return False

        self.tick_count += 1
        self._apply_pending_removal()

        self.direction, self.input_state = commit_direction(self.input_state)
        new_head = Cell(self.head.x + self.direction.dx, self.head.y + self.direction.dy)

        if not self.board.in_bounds(new_head):
            self.status = "game_over"
            return True

        if new_head in self.snake:
            self.status = "game_over"
            return True

        self.snake.insert(0, new_head)

        tile_index = next(
            (i for i, tile in enumerate(self.tiles) if tile.cell == new_head), None
        )
        if tile_index is not None:
            self._collect_tile(tile_index)
        else:
            self.snake.pop()
            if len(self.snake_letters) > len(self.snake) - 1:
                # The head carries no letter
                self.snake_letters.pop(0)

        return False

    def _apply_pending_removal(self) -> None:
        """Remove the letters and segments of the last submitted word."""
        removal = self.pending_removal
        if removal is None:
            return
        self.pending_removal = None

        for index in removal.letter_indices:
            if index < len(self.snake_letters):
                del self.snake_letters[index]

        for segment_index in removal.segment_indices:
            if segment_index >= len(self.snake):
                continue
            del self.snake[segment_index]

            # Pull the rest of the body one step into the gap
            for i in range(segment_index, len(self.snake)):
                previous = self.snake[i - 1]
                if not is_adjacent(self.snake[i], previous):
                    others = set(self.snake[:i]) | set(self.snake[i + 1:])
                    self.snake[i] = step_toward(self.snake[i], previous, others)

    def _collect_tile(self, tile_index: int) -> None:
        """Pick up a tile: grow, reletter the sibling, spawn a replacement."""
        collected = self.tiles.pop(tile_index)
        self.snake_letters.append(collected.letter)

        for sibling in self.tiles:
            sibling.letter = self.bag.draw()

        occupied = set(self.snake) | {tile.cell for tile in self.tiles}
        if not self.board.has_free_cell(occupied):
            logger.info("Grid full, no replacement tile spawned")
            return
        self.tiles.append(self.board.spawn_tile(occupied, self.bag))

    # Input

    def handle_key(self, key: str, now_ms: float) -> bool:
        """
        Apply one key press.

        Args:
            key: Key name (ArrowUp, ArrowDown, ArrowLeft, ArrowRight,
                Backspace, Enter, or a single letter)
            now_ms: Current time in milliseconds

        Returns:
            True if the key was recognised and the game is running
        """
        if not self.is_running:
            return False

        if key in ARROW_KEYS:
            self.input_state = queue_direction(self.input_state, self.direction, ARROW_KEYS[key])
        elif key == "Backspace":
            self.input_state = backspace(self.input_state, now_ms, self.config.double_backspace_ms)
        elif key == "Enter":
            self.submit_word()
        else:
            letter = parse_letter(key)
            if letter is None:
                return False
            self.input_state = append_letter(self.input_state, letter, self.snake_letters)
        return True

    def submit_word(self) -> bool:
        """
        Submit the current word.

        A valid word scores immediately and is cleared from input; its
        letters and segments are scheduled for removal on the next tick,
        replacing any removal still pending. An invalid word leaves
        everything untouched.

        Returns:
            True if the word was accepted
        """
        word = self.input_state.current_word
        if len(word) < self.config.min_word_length:
            return False
        if not is_valid(word, self.snake_letters, self.dictionary, self.config.min_word_length):
            return False

        indices = select_letter_indices(word, self.snake_letters)
        if indices is None:
            return False

        points = score_word(word)
        self.score += points
        self.word_history.insert(0, WordHistoryEntry(word=word, points=points))
        del self.word_history[self.config.max_history:]

        self.pending_removal = RemovalRecord.from_letter_indices(indices)
        self.input_state = clear_word(self.input_state)
        return True

    # State

    def snapshot(self) -> GameSnapshot:
        """Copy of the state the display layer reads."""
        return GameSnapshot(
            status=self.status,
            tick=self.tick_count,
            grid_width=self.board.width,
            grid_height=self.board.height,
            snake=list(self.snake),
            snake_letters=list(self.snake_letters),
            tiles=[tile.model_copy() for tile in self.tiles],
            score=self.score,
            current_word=self.input_state.current_word,
            word_history=list(self.word_history),
        )

    def get_state(self) -> Dict:
        """
        Get the current game state as a dictionary.

        Useful for serialization and logging.

        Returns:
            Dictionary containing game state
        """
        return {
            "status": self.status,
            "tick": self.tick_count,
            "score": self.score,
            "snake_length": len(self.snake),
            "snake_letters": list(self.snake_letters),
            "current_word": self.input_state.current_word,
            "pending_removal": self.pending_removal is not None,
            "tiles": [tile.model_dump() for tile in self.tiles],
            "bag": self.bag.get_state(),
        }
