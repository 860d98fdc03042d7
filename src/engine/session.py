import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Protocol

from .models import GameConfig, GameSnapshot, SessionResult
from .simulation import Simulation
from ..storage.high_scores import HighScoreStore, MemoryHighScoreStore
from ..words.dictionary import Dictionary

logger = logging.getLogger(__name__)


class Display(Protocol):
    """Receives a snapshot after every tick and key press."""

    def render(self, snapshot: GameSnapshot) -> None: ...


class Session:
    """
    Top-level lifecycle for word-snake.

    Owns the running Simulation and wires it to its collaborators: the
    display is fed a snapshot after every tick and key press, and the high
    score is saved once when a game ends.

    Attributes:
        config: Game configuration
        dictionary: Valid lowercase words
        display: Render target (optional)
        store: High-score store
        simulation: The current game, None until start()
        games_played: Games started in this session (including restarts)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        dictionary: Optional[Dictionary] = None,
        display: Optional[Display] = None,
        store: Optional[HighScoreStore] = None,
    ):
        self.config = config or GameConfig()
        self.dictionary = dictionary if dictionary is not None else frozenset()
        self.display = display
        self.store = store if store is not None else MemoryHighScoreStore()
        self.simulation: Optional[Simulation] = None
        self.games_played = 0
        self.started_at: Optional[datetime] = None
        self._score_saved = False

    def _new_simulation(self) -> Simulation:
        # Each game gets its own seed so restarts don't replay the same board
        seed = None
        if self.config.seed is not None:
            seed = self.config.seed + self.games_played
        return Simulation.create(config=self.config, dictionary=self.dictionary, seed=seed)

    def start(self) -> Simulation:
        """
        Begin a fresh game.

        Returns:
            The new running Simulation
        """
        self.simulation = self._new_simulation()
        self.games_played += 1
        self._score_saved = False
        if self.started_at is None:
            self.started_at = datetime.now()
        logger.info(f"Game {self.games_played} started")
        self.sync_display()
        return self.simulation

    def restart(self) -> Simulation:
        """Discard the current game and start a new one."""
        logger.info("Restarting game")
        return self.start()

    @property
    def is_game_over(self) -> bool:
        return self.simulation is not None and not self.simulation.is_running

    def tick(self) -> bool:
        """
        Advance the game one tick and refresh the display.

        A no-op while the game is over, so a driver can keep ticking until
        restart() is called.

        Returns:
            True if this tick ended the game
        """
        if self.simulation is None:
            raise ValueError("Session not started. Call start() first.")

        if not self.simulation.is_running:
            return False

        ended = self.simulation.step()
        if ended:
            self._game_over()
        self.sync_display()
        return ended

    def handle_key(self, key: str, now_ms: float) -> bool:
        """
        Forward a key press to the game and refresh the display.

        Returns:
            True if the key was applied
        """
        if self.simulation is None:
            raise ValueError("Session not started. Call start() first.")

        handled = self.simulation.handle_key(key, now_ms)
        if handled:
            self.sync_display()
        return handled

    def _game_over(self) -> None:
        score = self.simulation.score
        logger.info(f"Game over after {self.simulation.tick_count} ticks, score {score}")
        if self._score_saved:
            return
        self._score_saved = True
        try:
            self.store.save(score)
        except Exception as e:
            logger.error(f"High score store failed: {e}")

    def sync_display(self) -> None:
        if self.display is None or self.simulation is None:
            return
        try:
            self.display.render(self.simulation.snapshot())
        except Exception as e:
            logger.error(f"Display failed to render: {e}")

    def snapshot(self) -> GameSnapshot:
        if self.simulation is None:
            raise ValueError("Session not started. Call start() first.")
        return self.simulation.snapshot()

    def get_state(self) -> Dict:
        """
        Get the current session state.

        Returns:
            Dictionary containing session state
        """
        return {
            "games_played": self.games_played,
            "is_game_over": self.is_game_over,
            "game_state": self.simulation.get_state() if self.simulation else None,
        }

    def get_result(self) -> SessionResult:
        """
        Get the session result for the current game.

        Returns:
            SessionResult containing final game data
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0
        sim = self.simulation

        try:
            high_scores = self.store.load()
        except Exception as e:
            logger.error(f"High score store failed: {e}")
            high_scores = []

        return SessionResult(
            config=self.config,
            status=sim.status if sim else "running",
            score=sim.score if sim else 0,
            ticks=sim.tick_count if sim else 0,
            games_played=self.games_played,
            snake_length=len(sim.snake) if sim else 0,
            snake_letters=list(sim.snake_letters) if sim else [],
            word_history=list(sim.word_history) if sim else [],
            high_scores=high_scores,
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the session result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)
