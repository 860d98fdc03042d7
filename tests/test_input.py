"""Test pure input transitions: turn buffering and word editing."""

import pytest

from src.engine import InputState, UP, DOWN, LEFT, RIGHT
from src.engine.input import (
    append_letter,
    backspace,
    commit_direction,
    parse_letter,
    queue_direction,
)


class TestQueueDirection:
    """Test cases for queuing turns."""

    def test_turn_sets_next(self):
        """A perpendicular turn becomes the next direction."""
        state = queue_direction(InputState(), RIGHT, UP)
        assert state.next_direction == UP
        assert state.buffered_direction is None

    def test_reverse_ignored(self):
        """Reversing along the current axis is ignored."""
        state = queue_direction(InputState(), RIGHT, LEFT)
        assert state.next_direction == RIGHT
        assert state.buffered_direction is None

    def test_same_direction_ignored(self):
        state = queue_direction(InputState(), RIGHT, RIGHT)
        assert state == InputState()

    def test_second_turn_buffered(self):
        """With a turn already queued, the next press is buffered."""
        state = queue_direction(InputState(), RIGHT, UP)
        state = queue_direction(state, RIGHT, LEFT)
        assert state.next_direction == UP
        assert state.buffered_direction == LEFT

    def test_buffer_single_slot(self):
        """A third press replaces the buffered one."""
        state = queue_direction(InputState(), RIGHT, UP)
        state = queue_direction(state, RIGHT, LEFT)
        state = queue_direction(state, RIGHT, DOWN)
        assert state.buffered_direction == DOWN

    def test_returns_new_state(self):
        """Transitions don't mutate their input."""
        original = InputState()
        queue_direction(original, RIGHT, UP)
        assert original.next_direction == RIGHT


class TestCommitDirection:
    """Test cases for committing turns on a tick."""

    def test_commit_without_buffer(self):
        state = InputState(next_direction=UP)
        current, state = commit_direction(state)
        assert current == UP
        assert state.next_direction == UP

    def test_orthogonal_buffer_promoted(self):
        """A buffered turn perpendicular to the committed one is queued next."""
        state = InputState(next_direction=UP, buffered_direction=LEFT)
        current, state = commit_direction(state)
        assert current == UP
        assert state.next_direction == LEFT
        assert state.buffered_direction is None

    def test_parallel_buffer_dropped(self):
        """A buffered reversal of the committed direction is discarded."""
        state = InputState(next_direction=UP, buffered_direction=DOWN)
        current, state = commit_direction(state)
        assert current == UP
        assert state.next_direction == UP
        assert state.buffered_direction is None

    def test_double_tap_sequence(self):
        """RIGHT -> UP, LEFT pressed quickly turns over two ticks."""
        state = queue_direction(InputState(), RIGHT, UP)
        state = queue_direction(state, RIGHT, LEFT)

        current, state = commit_direction(state)
        assert current == UP
        current, state = commit_direction(state)
        assert current == LEFT


class TestAppendLetter:
    """Test cases for letter keys."""

    def test_carried_letter_appended(self):
        state = append_letter(InputState(), "c", ["C", "A"])
        assert state.current_word == "C"

    def test_missing_letter_dropped(self):
        state = append_letter(InputState(), "Z", ["C", "A"])
        assert state.current_word == ""

    def test_membership_only(self):
        """Only membership is checked at keystroke time, not counts."""
        state = InputState()
        for letter in "EEE":
            state = append_letter(state, letter, ["E", "L"])
        assert state.current_word == "EEE"


class TestBackspace:
    """Test cases for backspace timing."""

    def test_single_backspace_removes_last(self):
        state = backspace(InputState(current_word="CAT"), now_ms=1000)
        assert state.current_word == "CA"
        assert state.last_backspace_ms == 1000

    def test_double_tap_clears(self):
        """Two presses within 300 ms clear the word."""
        state = backspace(InputState(current_word="CATS"), now_ms=1000)
        state = backspace(state, now_ms=1300)
        assert state.current_word == ""

    def test_slow_second_press_removes_one(self):
        """Two presses 301 ms apart each remove one letter."""
        state = backspace(InputState(current_word="CATS"), now_ms=1000)
        state = backspace(state, now_ms=1301)
        assert state.current_word == "CA"

    def test_empty_word(self):
        state = backspace(InputState(), now_ms=0)
        assert state.current_word == ""

    def test_custom_window(self):
        state = backspace(InputState(current_word="CATS"), now_ms=0, window_ms=50)
        state = backspace(state, now_ms=60, window_ms=50)
        assert state.current_word == "CA"


class TestParseLetter:
    """Test cases for recognising letter keys."""

    @pytest.mark.parametrize("key,expected", [
        ("a", "A"),
        ("Z", "Z"),
        ("1", None),
        ("Shift", None),
        ("é", None),
        (" ", None),
    ])
    def test_parse_letter(self, key, expected):
        assert parse_letter(key) == expected
