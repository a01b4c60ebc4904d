#!/usr/bin/env python3
"""
termtris: a falling-block puzzle game for the terminal.
Main entry point and command-line interface.
"""

import argparse
import logging
import random
import sys
import time
from typing import Optional

from .tetris_engine import TetrisEngine, GameConfig, Command
from .exceptions import ConfigError

logger = logging.getLogger("termtris")

# Commands the demo bot picks from; hard drop is rolled separately
DEMO_MOVES = [Command.LEFT, Command.RIGHT, Command.ROTATE_CW, Command.SOFT_DROP, Command.NONE]


def setup_logging(level: str, log_file: Optional[str]):
    """Configure the package logger. Without a file, logs go nowhere so curses keeps the screen."""
    for old in list(logger.handlers):
        old.close()
        logger.removeHandler(old)
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))


def build_config(args) -> GameConfig:
    return GameConfig(width=args.width, height=args.height, seed=args.seed)


def play_game(args) -> int:
    """Run the interactive curses game."""
    from .terminal import play

    engine = TetrisEngine(build_config(args))
    stats = play(engine)

    print(f"Final Score: {stats['score']}")
    print(f"Lines Cleared: {stats['lines_cleared']}")
    print(f"Level Reached: {stats['level']}")
    return 0


def demo_game(args) -> int:
    """Run a headless game driven by random commands."""
    print("termtris demo")
    print("=" * 50)

    config = build_config(args)
    engine = TetrisEngine(config)
    bot = random.Random(config.seed)

    frame_count = 0
    start_time = time.time()

    while not engine.game_over and frame_count < args.max_ticks:
        frame_count += 1

        if bot.random() < args.hard_drop_rate:
            command = Command.HARD_DROP
        else:
            command = bot.choice(DEMO_MOVES)

        engine.tick(args.tick_ms, command)

        if args.show_every and frame_count % args.show_every == 0:
            print(f"\nTick: {frame_count}")
            print(engine)
            print("-" * 30)

    duration = time.time() - start_time

    print("\n" + "=" * 50)
    print("GAME OVER" if engine.game_over else "TICK LIMIT REACHED")
    print("=" * 50)
    print(engine)
    print(f"Final Score: {engine.score}")
    print(f"Lines Cleared: {engine.lines_cleared}")
    print(f"Level Reached: {engine.level}")
    print(f"Ticks: {frame_count}")
    print(f"Duration: {duration:.2f} seconds")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="termtris: falling-block puzzle game for the terminal")
    parser.add_argument('--width', type=int, default=10, help='Board width in cells')
    parser.add_argument('--height', type=int, default=20, help='Board height in cells')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for the piece sequence')
    parser.add_argument('--log-level', default='warning',
                        choices=['debug', 'info', 'warning', 'error'], help='Logging level')
    parser.add_argument('--log-file', default=None, help='Write logs to this file')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Play command
    subparsers.add_parser('play', help='Play in the terminal')

    # Demo command
    demo_parser = subparsers.add_parser('demo', help='Run a headless game with random inputs')
    demo_parser.add_argument('--max-ticks', type=int, default=5000, help='Stop after this many ticks')
    demo_parser.add_argument('--tick-ms', type=int, default=50, help='Simulated milliseconds per tick')
    demo_parser.add_argument('--hard-drop-rate', type=float, default=0.05,
                             help='Chance per tick of a hard drop')
    demo_parser.add_argument('--show-every', type=int, default=500,
                             help='Print the board every N ticks (0 disables)')

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        if args.command == 'play':
            return play_game(args)
        elif args.command == 'demo':
            return demo_game(args)
    except ConfigError as e:
        parser.error(str(e))

    parser.print_help()
    print("\nTo start a game, run: termtris play")
    return 0


if __name__ == "__main__":
    sys.exit(main())
