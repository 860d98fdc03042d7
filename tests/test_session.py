"""Test the session lifecycle: start, game over, restart and collaborators."""

import json

import pytest

from src.engine import Cell, GameConfig, Session, Tile
from src.storage import MemoryHighScoreStore


WORDS = {"cat", "tea"}


class CountingStore(MemoryHighScoreStore):
    """Memory store that counts save calls."""

    def __init__(self):
        super().__init__()
        self.saved = []

    def save(self, score: int) -> None:
        self.saved.append(score)
        super().save(score)


class FailingStore:
    """Store whose every call raises."""

    def load(self):
        raise OSError("storage unavailable")

    def save(self, score: int) -> None:
        raise OSError("storage unavailable")


class RecordingDisplay:
    def __init__(self):
        self.snapshots = []

    def render(self, snapshot):
        self.snapshots.append(snapshot)


def small_config(**overrides):
    """A 5x5 grid with the snake starting at (2, 2)."""
    values = dict(canvas_width=100, canvas_height=100, cell_size=20, start_x=2, start_y=2, seed=4)
    values.update(overrides)
    return GameConfig(**values)


def run_into_wall(session):
    """Clear the tiles and tick until the snake leaves the grid."""
    session.simulation.tiles = []
    for _ in range(10):
        if session.tick():
            return
    raise AssertionError("snake never hit the wall")


class TestStart:
    """Test cases for starting a session."""

    def test_start_creates_game(self):
        session = Session(dictionary=WORDS)
        sim = session.start()
        assert sim.snake == [Cell(10, 10)]
        assert session.games_played == 1
        assert session.is_game_over is False

    def test_tick_before_start(self):
        with pytest.raises(ValueError):
            Session().tick()

    def test_key_before_start(self):
        with pytest.raises(ValueError):
            Session().handle_key("ArrowUp", 0)

    def test_start_renders(self):
        display = RecordingDisplay()
        Session(display=display).start()
        assert len(display.snapshots) == 1
        assert display.snapshots[0].tick == 0


class TestDisplaySync:
    """Test cases for feeding the display."""

    def test_render_each_tick(self):
        display = RecordingDisplay()
        session = Session(config=small_config(), display=display)
        session.start()
        session.simulation.tiles = []
        session.tick()
        session.tick()
        assert [s.tick for s in display.snapshots] == [0, 1, 2]

    def test_render_after_key(self):
        display = RecordingDisplay()
        session = Session(display=display)
        session.start()
        session.handle_key("ArrowUp", 0)
        assert len(display.snapshots) == 2

    def test_ignored_key_not_rendered(self):
        display = RecordingDisplay()
        session = Session(display=display)
        session.start()
        session.handle_key("Escape", 0)
        assert len(display.snapshots) == 1

    def test_display_failure_contained(self):
        class BrokenDisplay:
            def render(self, snapshot):
                raise RuntimeError("canvas gone")

        session = Session(display=BrokenDisplay())
        session.start()
        session.tick()
        assert session.simulation.tick_count == 1


class TestGameOver:
    """Test cases for the game-over transition."""

    def test_wall_saves_score_once(self):
        """Hitting a wall saves the high score exactly once."""
        store = CountingStore()
        session = Session(config=small_config(), store=store)
        session.start()
        session.simulation.score = 250
        run_into_wall(session)

        assert session.is_game_over is True
        assert store.saved == [250]

        for _ in range(5):
            assert session.tick() is False
        assert store.saved == [250]

    def test_full_grid_ticks_to_wall(self):
        """Filling a 3x1 grid keeps ticking until the wall ends the game."""
        store = CountingStore()
        config = GameConfig(
            canvas_width=60, canvas_height=20, cell_size=20, start_x=0, start_y=0, seed=1
        )
        session = Session(config=config, store=store)
        session.start()

        assert session.tick() is False
        assert session.tick() is False
        assert len(session.simulation.snake) == 3
        assert session.tick() is True
        assert session.is_game_over is True
        assert store.saved == [0]

    def test_failing_store_does_not_crash(self):
        """Store errors are logged, not raised into the tick."""
        session = Session(config=small_config(), store=FailingStore())
        session.start()
        run_into_wall(session)
        assert session.is_game_over is True

    def test_failing_store_result(self):
        session = Session(config=small_config(), store=FailingStore())
        session.start()
        assert session.get_result().high_scores == []


class TestRestart:
    """Test cases for restarting."""

    def test_restart_resets(self):
        """Restart gives a fresh snake, score, history and word."""
        session = Session(config=small_config(), dictionary=WORDS)
        sim = session.start()
        sim.score = 100
        sim.snake_letters = ["C"]
        run_into_wall(session)

        new_sim = session.restart()

        assert new_sim is not sim
        assert session.is_game_over is False
        assert new_sim.snake == [Cell(2, 2)]
        assert new_sim.score == 0
        assert new_sim.snake_letters == []
        assert new_sim.word_history == []
        assert new_sim.current_word == ""
        assert len(new_sim.tiles) == 2
        assert session.games_played == 2

    def test_restart_allows_new_save(self):
        store = CountingStore()
        session = Session(config=small_config(), store=store)
        session.start()
        run_into_wall(session)
        session.restart()
        run_into_wall(session)
        assert len(store.saved) == 2

    def test_restart_new_board(self):
        """A seeded session doesn't replay the same opening tiles on restart."""
        session = Session(config=GameConfig(seed=11))
        first = session.start().tiles
        second = session.restart().tiles
        assert first != second


class TestResult:
    """Test cases for result export."""

    def test_get_result(self):
        session = Session(config=small_config(), dictionary=WORDS)
        sim = session.start()
        sim.tiles = [Tile(x=3, y=2, letter="C")]
        session.tick()

        result = session.get_result()
        assert result.status == "running"
        assert result.ticks == 1
        assert result.snake_letters == ["C"]
        assert result.snake_length == 2
        assert result.started_at != ""

    def test_save_result(self, tmp_path):
        store = MemoryHighScoreStore()
        session = Session(config=small_config(), store=store)
        session.start()
        session.simulation.score = 400
        run_into_wall(session)

        path = tmp_path / "out" / "result.json"
        session.save_result(path)

        data = json.loads(path.read_text())
        assert data["status"] == "game_over"
        assert data["score"] == 400
        assert data["high_scores"][0]["score"] == 400
        assert data["config"]["canvas_width"] == 100

    def test_get_state(self):
        session = Session()
        assert session.get_state()["game_state"] is None
        session.start()
        state = session.get_state()
        assert state["games_played"] == 1
        assert state["game_state"]["status"] == "running"
