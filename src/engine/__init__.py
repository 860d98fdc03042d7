"""Game engine for word-snake."""

from .models import (
    Cell,
    Direction,
    Tile,
    WordHistoryEntry,
    RemovalRecord,
    InputState,
    GameConfig,
    GameSnapshot,
    SessionResult,
    Status,
    UP,
    DOWN,
    LEFT,
    RIGHT,
    VOWELS,
)
from .letter_bag import LetterBag, LETTER_FREQUENCIES
from .board import Board
from .simulation import Simulation
from .session import Session, Display
from .ticker import Ticker
from .script import ScriptEvent, ScriptError, ScriptRunner, parse_script

__all__ = [
    "Cell",
    "Direction",
    "Tile",
    "WordHistoryEntry",
    "RemovalRecord",
    "InputState",
    "GameConfig",
    "GameSnapshot",
    "SessionResult",
    "Status",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "VOWELS",
    "LetterBag",
    "LETTER_FREQUENCIES",
    "Board",
    "Simulation",
    "Session",
    "Display",
    "Ticker",
    "ScriptEvent",
    "ScriptError",
    "ScriptRunner",
    "parse_script",
]
