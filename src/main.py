"""
Main entry point for running word-snake sessions.

Usage:
    python -m src.main config.yaml --script keys.txt
    python -m src.main config.yaml --script keys.txt --output results/run1.json --verbose
    python -m src.main config.yaml --script keys.txt --realtime
"""

import argparse
import asyncio
import contextlib
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import yaml

from .engine import GameConfig, Session, Ticker, ScriptEvent, ScriptRunner, parse_script
from .engine.script import feed_script
from .engine.ticker import monotonic_ms
from .storage import JsonHighScoreStore, MemoryHighScoreStore
from .utils.text_renderer import TextRenderer
from .words import load_dictionary


def load_config(config_path: Optional[str]) -> GameConfig:
    """Load game configuration from a YAML file (defaults when no path is given)."""
    if config_path is None:
        return GameConfig()

    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def load_script(script_path: Optional[str]) -> List[ScriptEvent]:
    """Load and parse a key script, failing on any unparseable line."""
    if script_path is None:
        return []

    path = Path(script_path)
    if not path.exists():
        raise FileNotFoundError(f"Script file not found: {script_path}")

    events, errors = parse_script(path.read_text())
    if errors:
        details = "; ".join(f"line {e.line}: {e.message}" for e in errors)
        raise ValueError(f"Invalid script: {details}")
    return events


def build_session(config: GameConfig, verbose: bool = False) -> Session:
    """Create a session with the configured dictionary and high-score store."""
    dictionary = load_dictionary(config.dictionary_path)

    if config.high_scores_path:
        store = JsonHighScoreStore(config.high_scores_path)
    else:
        store = MemoryHighScoreStore()

    display = TextRenderer(only_changes=True) if verbose else None
    return Session(config=config, dictionary=dictionary, display=display, store=store)


async def run_realtime(session: Session, events: List[ScriptEvent], max_ticks: Optional[int]) -> None:
    """Tick on a real timer while feeding the script as live key presses."""
    interval = session.config.tick_interval_ms
    ticker = Ticker(session, interval_ms=interval, max_ticks=max_ticks)

    async def feed():
        await feed_script(session, events, interval, monotonic_ms)
        # Let the last scripted move play out before stopping
        await asyncio.sleep(interval / 1000)
        ticker.stop()

    session.start()
    feeder = asyncio.create_task(feed())
    await ticker.run()
    feeder.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await feeder


def main():
    parser = argparse.ArgumentParser(
        description="Run a word-snake session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  canvas_width: 400
  canvas_height: 400
  cell_size: 20
  tick_interval_ms: 150
  seed: 42
  dictionary_path: words.txt
  high_scores_path: results/high_scores.json

Example keys.txt:
  TICK 3
  DOWN
  TICK 2
  TYPE CAT
  ENTER
  TICK
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used when omitted)"
    )
    parser.add_argument(
        "--script", "-s",
        help="Path to a key script to replay"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Tick on a real timer instead of replaying as fast as possible"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        help="Stop after this many ticks in realtime mode"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print every frame to stdout"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        events = load_script(args.script)
        session = build_session(config, verbose=args.verbose)
    except Exception as e:
        print(f"Error loading session: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"session_{timestamp}.json"

    if args.verbose:
        print(f"Config: {args.config or '(defaults)'}")
        print(f"Script: {args.script or '(none)'} ({len(events)} events)")
        print(f"Output: {output_path}")
        print()

    try:
        if args.realtime:
            asyncio.run(run_realtime(session, events, args.max_ticks))
        else:
            ScriptRunner(session).run(events)
    except KeyboardInterrupt:
        print("\nSession interrupted by user")

    result = session.get_result()
    session.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    # Print summary
    print()
    print("=== Session Summary ===")
    print(f"Status: {result.status}")
    print(f"Score: {result.score}")
    print(f"Ticks: {result.ticks}")
    print(f"Words: {', '.join(e.word for e in result.word_history) or '(none)'}")
    if result.high_scores:
        print(f"Best: {result.high_scores[0].score}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
