"""
Word validation for submitted words.

Validates:
1. Length (at least the minimum word length, 3 by default)
2. Dictionary membership (lowercase lookup)
3. Letter availability (the word must be spelled from the snake's letters,
   each carried letter used at most once)
"""

from typing import List, Optional, Sequence

from .dictionary import Dictionary


MIN_WORD_LENGTH = 3


def has_letters(word: str, available_letters: Sequence[str]) -> bool:
    """Check that `word` is a sub-multiset of `available_letters` (exact case)."""
    remaining = list(available_letters)
    for letter in word:
        if letter not in remaining:
            return False
        remaining.remove(letter)
    return True


def is_valid(
    word: str,
    available_letters: Sequence[str],
    dictionary: Dictionary,
    min_length: int = MIN_WORD_LENGTH,
) -> bool:
    """Check length, dictionary membership and letter availability."""
    if len(word) < min_length:
        return False
    if word.lower() not in dictionary:
        return False
    return has_letters(word, available_letters)


def select_letter_indices(word: str, available_letters: Sequence[str]) -> Optional[List[int]]:
    """
    Pick the carried letters a word consumes.

    Each letter of the word claims the first not-yet-claimed matching
    position, so repeated letters map to distinct indices.

    Returns:
        The claimed indices sorted descending, or None if the word cannot be
        spelled from the available letters.
    """
    claimed: set[int] = set()
    for letter in word:
        index = next(
            (i for i, available in enumerate(available_letters)
             if available == letter and i not in claimed),
            None,
        )
        if index is None:
            return None
        claimed.add(index)
    return sorted(claimed, reverse=True)


def score_word(word: str) -> int:
    """
    Points for a word of length L: floor(100 * (L - 3)^2) when L > 3, else 0.

    4 letters = 100 points, 5 letters = 400, 6 letters = 900, etc.
    """
    length = len(word)
    if length <= 3:
        return 0
    return int(100 * (length - 3) ** 2)
