"""High-score storage for word-snake."""

from .high_scores import (
    MAX_HIGH_SCORES,
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
    rank_scores,
)

__all__ = [
    "MAX_HIGH_SCORES",
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "rank_scores",
]
