import asyncio
import time
from typing import Callable, Optional

from .session import Session


def monotonic_ms() -> float:
    """Milliseconds from a monotonic clock, for key timestamps."""
    return time.monotonic() * 1000


class Ticker:
    """
    Cooperative tick driver for a Session.

    Each tick runs to completion before the next one is scheduled, so a slow
    tick delays the following ones instead of being skipped. The loop keeps
    running while the game is over (ticks are no-ops) so a restart resumes
    play without a new driver.

    Attributes:
        session: The session to tick
        interval_ms: Pause between the end of one tick and the next
        max_ticks: Optional number of tick calls after which the loop stops
        ticks: Tick calls made so far
    """

    def __init__(
        self,
        session: Session,
        interval_ms: Optional[float] = None,
        max_ticks: Optional[int] = None,
        on_tick: Optional[Callable[[Session], None]] = None,
    ):
        self.session = session
        self.interval_ms = interval_ms if interval_ms is not None else session.config.tick_interval_ms
        self.max_ticks = max_ticks
        self.on_tick = on_tick
        self.ticks = 0
        self._stopped = asyncio.Event()

    def stop(self) -> None:
        """Ask the loop to exit after the current tick."""
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    async def run(self) -> int:
        """
        Tick until stopped or `max_ticks` is reached.

        Returns:
            Number of tick calls made
        """
        while not self._stopped.is_set():
            self.session.tick()
            self.ticks += 1
            if self.on_tick:
                self.on_tick(self.session)

            if self.max_ticks is not None and self.ticks >= self.max_ticks:
                break

            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval_ms / 1000)
            except asyncio.TimeoutError:
                pass

        return self.ticks
