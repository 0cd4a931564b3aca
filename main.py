#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,intermediate,hard,expert}] [--mines N]
    python main.py presets
    python main.py best [--clear]
"""
import argparse
import logging
import random
import sys
import time
from pathlib import Path

from src.minefield.best_time import BestTimeStore
from src.minefield.board import Difficulty, GameStatus, InvalidConfig, PRESETS
from src.minefield.environment import format_board
from src.minefield.session import GameSession

DEFAULT_BEST_TIME_FILE = Path.home() / ".minefield" / "best_time.json"

HELP_TEXT = """Commands:
  r ROW COL   reveal a tile
  f ROW COL   cycle flag / question mark on a tile
  c ROW COL   chord: reveal around a number whose flags are all placed
  n           new game
  q           quit"""


def print_board(session: GameSession) -> None:
    """Print the header line and the board."""
    print(
        f"\nMines left: {session.remaining_mines}   "
        f"Time: {session.elapsed}s   "
        f"[{session.difficulty.value}]"
    )
    print(format_board(session.snapshot(), session.config.width))


def parse_position(session: GameSession, parts: list) -> int:
    """Turn 'ROW COL' arguments into a tile id."""
    row, col = int(parts[0]), int(parts[1])
    if not (0 <= row < session.config.height and 0 <= col < session.config.width):
        raise ValueError(f"Position ({row}, {col}) is off the board")
    return row * session.config.width + col


def play(args: argparse.Namespace) -> int:
    """Run an interactive game in the terminal."""
    store = BestTimeStore(args.best_time_file)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(Difficulty(args.difficulty), store, rng)

    if args.mines is not None:
        try:
            session.set_custom_difficulty(session.difficulty, args.mines)
        except InvalidConfig as exc:
            print(f"Invalid configuration: {exc}")
            return 2

    actions = {
        "r": session.reveal,
        "f": session.toggle_flag,
        "c": session.chord,
    }

    print(HELP_TEXT)
    last_tick = time.monotonic()
    print_board(session)

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            return 0

        # The clock runs on wall time between commands
        now = time.monotonic()
        seconds = int(now - last_tick)
        if seconds:
            session.tick(seconds)
            last_tick += seconds

        if not line:
            continue
        command, *parts = line.split()

        if command == "q":
            return 0
        if command == "n":
            session.restart()
            last_tick = time.monotonic()
            print_board(session)
            continue
        if command not in actions or len(parts) != 2:
            print(HELP_TEXT)
            continue

        try:
            tile_id = parse_position(session, parts)
        except ValueError as exc:
            print(exc)
            continue

        actions[command](tile_id)
        print_board(session)

        if session.status == GameStatus.WON:
            print(f"\n*** WIN in {session.elapsed}s! ***")
            if session.new_record:
                print("New best time!")
            print("Type 'n' for a new game or 'q' to quit.")
        elif session.status == GameStatus.LOST:
            print("\n*** LOST (hit mine) ***")
            print("Type 'n' for a new game or 'q' to quit.")


def presets(args: argparse.Namespace) -> int:
    """List the built-in difficulties."""
    print(f"{'Difficulty':<14} {'Size':<8} {'Mines':>5}")
    print("-" * 29)
    for difficulty, config in PRESETS.items():
        size = f"{config.width}x{config.height}"
        print(f"{difficulty.value:<14} {size:<8} {config.num_mines:>5}")
    return 0


def best(args: argparse.Namespace) -> int:
    """Show or clear the stored best time."""
    store = BestTimeStore(args.best_time_file)
    if args.clear:
        store.clear()
        print("Best time cleared.")
        return 0
    record = store.get()
    if record is None:
        print("No best time recorded yet.")
    else:
        print(f"Best time: {record}s")
    return 0


def main() -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.EASY.value,
        help="Board preset",
    )
    play_parser.add_argument(
        "--mines", type=int, default=None, help="Custom number of mines"
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )
    play_parser.add_argument(
        "--best-time-file",
        type=Path,
        default=DEFAULT_BEST_TIME_FILE,
        help="Where the best time is kept",
    )

    # Presets command
    subparsers.add_parser("presets", help="List difficulty presets")

    # Best time command
    best_parser = subparsers.add_parser("best", help="Show the best time")
    best_parser.add_argument(
        "--best-time-file",
        type=Path,
        default=DEFAULT_BEST_TIME_FILE,
        help="Where the best time is kept",
    )
    best_parser.add_argument(
        "--clear", action="store_true", help="Forget the stored best time"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        return play(args)
    if args.command == "presets":
        return presets(args)
    if args.command == "best":
        return best(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
