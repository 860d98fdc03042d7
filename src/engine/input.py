"""
Pure input transitions.

Each function takes the current InputState and returns an updated copy.
Times are injected as milliseconds so the double-tap window can be tested
without a real clock.
"""

from typing import Dict, Optional, Sequence

from .models import Direction, InputState, UP, DOWN, LEFT, RIGHT


DOUBLE_BACKSPACE_MS = 300

ARROW_KEYS: Dict[str, Direction] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
}


def queue_direction(state: InputState, current: Direction, new: Direction) -> InputState:
    """
    Queue a turn for the next tick.

    With no turn pending, `new` becomes the next direction unless it runs
    along the axis the snake is already moving on. With a turn already
    pending, `new` goes into the single-slot buffer and is checked when the
    pending turn is committed.
    """
    if state.next_direction != current:
        return state.model_copy(update={"buffered_direction": new})
    if not new.is_orthogonal_to(current):
        return state
    return state.model_copy(update={"next_direction": new})


def commit_direction(state: InputState) -> tuple[Direction, InputState]:
    """
    Take the pending direction for this tick.

    A buffered turn orthogonal to the committed direction is promoted to the
    next pending turn; the buffer is emptied either way.

    Returns:
        (committed direction, updated state)
    """
    current = state.next_direction
    buffered = state.buffered_direction
    if buffered is None:
        return current, state

    next_direction = buffered if buffered.is_orthogonal_to(current) else current
    return current, state.model_copy(
        update={"next_direction": next_direction, "buffered_direction": None}
    )


def append_letter(state: InputState, letter: str, snake_letters: Sequence[str]) -> InputState:
    """Append `letter` to the current word if the snake carries it."""
    letter = letter.upper()
    if letter not in snake_letters:
        return state
    return state.model_copy(update={"current_word": state.current_word + letter})


def backspace(
    state: InputState,
    now_ms: float,
    window_ms: float = DOUBLE_BACKSPACE_MS,
) -> InputState:
    """
    Delete the last character, or clear the word on a double tap.

    A backspace within `window_ms` of the previous one clears the whole word.
    """
    last = state.last_backspace_ms
    if last is not None and now_ms - last <= window_ms:
        word = ""
    else:
        word = state.current_word[:-1]
    return state.model_copy(update={"current_word": word, "last_backspace_ms": now_ms})


def clear_word(state: InputState) -> InputState:
    return state.model_copy(update={"current_word": ""})


def parse_letter(key: str) -> Optional[str]:
    """Return the uppercase letter for a single A-Z key, else None."""
    if len(key) == 1 and key.isascii() and key.isalpha():
        return key.upper()
    return None
