"""
Key scripts for replaying games without a keyboard.

One command per line:

    TICK [n]        advance n ticks (default 1)
    WAIT ms         advance the clock without ticking
    UP | DOWN | LEFT | RIGHT
    TYPE letters    press each letter key in turn
    BACKSPACE
    ENTER
    RESTART
    # comment
"""

import asyncio
import re
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from .session import Session


Command = Literal["TICK", "WAIT", "KEY", "RESTART"]

DIRECTION_KEYS = {
    "UP": "ArrowUp",
    "DOWN": "ArrowDown",
    "LEFT": "ArrowLeft",
    "RIGHT": "ArrowRight",
}


class ScriptEvent(BaseModel):
    """A single scripted step."""
    command: Command
    key: Optional[str] = None
    amount: int = Field(default=1, ge=0)
    line: int = 0


class ScriptError(BaseModel):
    """A line that could not be parsed."""
    code: str
    message: str
    line: Optional[int] = None


def parse_script(text: str) -> Tuple[List[ScriptEvent], List[ScriptError]]:
    """
    Parse a key script into events with error collection.

    Returns a tuple of (events, errors).
    """
    events: List[ScriptEvent] = []
    errors: List[ScriptError] = []

    for i, raw in enumerate(text.splitlines(), start=1):
        line = raw.split('#', 1)[0].strip()
        if not line:
            continue

        parts = line.split()
        name = parts[0].upper()
        args = parts[1:]

        if name in DIRECTION_KEYS and not args:
            events.append(ScriptEvent(command="KEY", key=DIRECTION_KEYS[name], line=i))
        elif name in ("BACKSPACE", "ENTER") and not args:
            key = "Backspace" if name == "BACKSPACE" else "Enter"
            events.append(ScriptEvent(command="KEY", key=key, line=i))
        elif name == "RESTART" and not args:
            events.append(ScriptEvent(command="RESTART", line=i))
        elif name == "TICK" and len(args) <= 1:
            if args and not re.match(r'^\d+$', args[0]):
                errors.append(ScriptError(
                    code="INVALID_COUNT",
                    message=f"TICK count must be a whole number: '{args[0]}'",
                    line=i
                ))
                continue
            events.append(ScriptEvent(command="TICK", amount=int(args[0]) if args else 1, line=i))
        elif name == "WAIT" and len(args) == 1:
            if not re.match(r'^\d+$', args[0]):
                errors.append(ScriptError(
                    code="INVALID_COUNT",
                    message=f"WAIT needs milliseconds as a whole number: '{args[0]}'",
                    line=i
                ))
                continue
            events.append(ScriptEvent(command="WAIT", amount=int(args[0]), line=i))
        elif name == "TYPE" and len(args) == 1 and re.match(r'^[A-Za-z]+$', args[0]):
            for letter in args[0].upper():
                events.append(ScriptEvent(command="KEY", key=letter, line=i))
        else:
            errors.append(ScriptError(
                code="INVALID_LINE",
                message=f"Invalid script line: '{raw.strip()}'",
                line=i
            ))

    return events, errors


class ScriptRunner:
    """
    Replays script events against a session on a virtual clock.

    Each tick advances the clock by the tick interval and WAIT advances it
    by its amount, so double-tap timing replays exactly.
    """

    def __init__(self, session: Session, stop_on_game_over: bool = True):
        self.session = session
        self.stop_on_game_over = stop_on_game_over
        self.clock_ms = 0.0

    def _tick(self) -> bool:
        self.session.tick()
        self.clock_ms += self.session.config.tick_interval_ms
        return self.stop_on_game_over and self.session.is_game_over

    def apply(self, event: ScriptEvent) -> bool:
        """
        Apply one event.

        Returns:
            True if the replay should stop
        """
        if event.command == "TICK":
            for _ in range(event.amount):
                if self._tick():
                    return True
        elif event.command == "WAIT":
            self.clock_ms += event.amount
        elif event.command == "KEY":
            self.session.handle_key(event.key, self.clock_ms)
        elif event.command == "RESTART":
            self.session.restart()
        return False

    def run(self, events: List[ScriptEvent]) -> Session:
        """Apply events in order until they run out or the game ends."""
        if self.session.simulation is None:
            self.session.start()
        for event in events:
            if self.apply(event):
                break
        return self.session


async def feed_script(session: Session, events: List[ScriptEvent], interval_ms: float, clock) -> None:
    """
    Deliver script events in real time alongside a running Ticker.

    TICK n sleeps for n tick intervals and WAIT sleeps for its amount; keys
    are handed to the session as they come up.
    """
    for event in events:
        if event.command == "TICK":
            await asyncio.sleep(event.amount * interval_ms / 1000)
        elif event.command == "WAIT":
            await asyncio.sleep(event.amount / 1000)
        elif event.command == "KEY":
            session.handle_key(event.key, clock())
        elif event.command == "RESTART":
            session.restart()
