"""Word validation for word-snake."""

from .dictionary import Dictionary, WordList, load_dictionary
from .validator import (
    MIN_WORD_LENGTH,
    has_letters,
    is_valid,
    select_letter_indices,
    score_word,
)

__all__ = [
    # Dictionary
    "Dictionary",
    "WordList",
    "load_dictionary",
    # Validation
    "MIN_WORD_LENGTH",
    "has_letters",
    "is_valid",
    "select_letter_indices",
    "score_word",
]
