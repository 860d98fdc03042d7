"""
Pydantic models for the game engine.

This module contains the data models (configuration, snapshots, results and
small value types) used throughout the engine. The main logic classes
(LetterBag, Board, Simulation, Session) live in their respective files.
"""

from typing import List, Optional, Literal, NamedTuple
from pydantic import BaseModel, Field, ConfigDict

from ..storage.high_scores import HighScoreEntry


# Type aliases
Status = Literal["running", "game_over"]


class Cell(NamedTuple):
    """A grid coordinate."""
    x: int
    y: int


class Direction(NamedTuple):
    """A unit step on the grid. Exactly one of dx, dy is non-zero."""
    dx: int
    dy: int

    def is_orthogonal_to(self, other: "Direction") -> bool:
        """True if the two directions lie on different axes."""
        return (self.dx == 0) != (other.dx == 0)


RIGHT = Direction(1, 0)
LEFT = Direction(-1, 0)
DOWN = Direction(0, 1)
UP = Direction(0, -1)

VOWELS = frozenset("AEIOU")


class Tile(BaseModel):
    """A lettered collectible occupying one grid cell."""
    x: int
    y: int
    letter: str = Field(..., pattern=r'^[A-Z]$')

    @property
    def cell(self) -> Cell:
        return Cell(self.x, self.y)


class WordHistoryEntry(BaseModel):
    """A submitted word and the points it earned."""
    word: str
    points: int = Field(default=0, ge=0)


class RemovalRecord(BaseModel):
    """Snake letters and segments scheduled for removal on the next tick."""
    letter_indices: List[int] = Field(default_factory=list)  # descending
    segment_indices: List[int] = Field(default_factory=list)  # letter index + 1

    @classmethod
    def from_letter_indices(cls, indices: List[int]) -> "RemovalRecord":
        ordered = sorted(indices, reverse=True)
        return cls(letter_indices=ordered, segment_indices=[i + 1 for i in ordered])


class InputState(BaseModel):
    """Turn-input and word-editing state updated by key presses."""
    model_config = ConfigDict(frozen=True)

    next_direction: Direction = RIGHT
    buffered_direction: Optional[Direction] = None
    current_word: str = ""
    last_backspace_ms: Optional[float] = None


class GameConfig(BaseModel):
    """Configuration for a game session."""
    canvas_width: int = Field(default=400, gt=0)
    canvas_height: int = Field(default=400, gt=0)
    cell_size: int = Field(default=20, gt=0)
    tick_interval_ms: int = Field(default=150, gt=0)
    start_x: int = Field(default=10, ge=0)
    start_y: int = Field(default=10, ge=0)
    min_word_length: int = Field(default=3, ge=1)
    max_history: int = Field(default=10, ge=1)
    double_backspace_ms: int = Field(default=300, ge=0)
    seed: Optional[int] = None
    dictionary_path: Optional[str] = None
    high_scores_path: Optional[str] = None

    @property
    def grid_width(self) -> int:
        """Number of cells across (canvas width / cell size)."""
        return self.canvas_width // self.cell_size

    @property
    def grid_height(self) -> int:
        """Number of cells down (canvas height / cell size)."""
        return self.canvas_height // self.cell_size

    @property
    def start_cell(self) -> Cell:
        return Cell(self.start_x, self.start_y)


class GameSnapshot(BaseModel):
    """Read-only view of the game handed to the display layer."""
    status: Status = "running"
    tick: int = 0
    grid_width: int
    grid_height: int
    snake: List[Cell] = Field(default_factory=list)
    snake_letters: List[str] = Field(default_factory=list)
    tiles: List[Tile] = Field(default_factory=list)
    score: int = 0
    current_word: str = ""
    word_history: List[WordHistoryEntry] = Field(default_factory=list)


class SessionResult(BaseModel):
    """Result of a complete play session."""
    config: GameConfig
    status: Status = "running"
    score: int = 0
    ticks: int = 0
    games_played: int = 1
    snake_length: int = 1
    snake_letters: List[str] = Field(default_factory=list)
    word_history: List[WordHistoryEntry] = Field(default_factory=list)
    high_scores: List[HighScoreEntry] = Field(default_factory=list)
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
