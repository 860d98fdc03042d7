"""
High-score persistence.

Both stores keep at most MAX_HIGH_SCORES entries sorted by score,
highest first. Storage failures are logged and swallowed so they never
reach the game loop.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Protocol

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

MAX_HIGH_SCORES = 10


class HighScoreEntry(BaseModel):
    """A persisted high score."""
    score: int = Field(..., ge=0)
    date: str = ""


class HighScoreStore(Protocol):
    """Loads and records high scores."""

    def load(self) -> List[HighScoreEntry]: ...

    def save(self, score: int) -> None: ...


def rank_scores(entries: List[HighScoreEntry], limit: int = MAX_HIGH_SCORES) -> List[HighScoreEntry]:
    """Sort entries by score descending (stable for ties) and keep the top `limit`."""
    return sorted(entries, key=lambda e: e.score, reverse=True)[:limit]


def new_entry(score: int) -> HighScoreEntry:
    """A high-score entry dated today in the locale's date format."""
    return HighScoreEntry(score=score, date=datetime.now().strftime("%x"))


class MemoryHighScoreStore:
    """High scores kept in memory for the lifetime of the process."""

    def __init__(self, entries: List[HighScoreEntry] | None = None):
        self.entries: List[HighScoreEntry] = rank_scores(list(entries or []))

    def load(self) -> List[HighScoreEntry]:
        return list(self.entries)

    def save(self, score: int) -> None:
        self.entries = rank_scores(self.entries + [new_entry(score)])


class JsonHighScoreStore:
    """
    High scores persisted as a JSON array of {"score", "date"} objects.

    A missing or unreadable file loads as an empty table.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> List[HighScoreEntry]:
        """
        Read the stored table.

        Returns:
            Up to MAX_HIGH_SCORES entries, highest score first
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            entries = [HighScoreEntry(**item) for item in data]
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Failed to read high scores from {self.path}: {e}")
            return []

        return rank_scores(entries)

    def save(self, score: int) -> None:
        """
        Record a score, keeping only the top MAX_HIGH_SCORES.

        Args:
            score: Final score of a finished game
        """
        entries = rank_scores(self.load() + [new_entry(score)])

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([e.model_dump() for e in entries], f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save high score {score} to {self.path}: {e}")
            return

        logger.info(f"Saved high score {score} to {self.path}")
