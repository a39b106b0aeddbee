"""Command-line entry point.

Run with: `python -m termtris` (or the installed `termtris` script).  The
terminal front-end is the default; pass ``--frontend pygame`` for a window.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .engine import Engine
from .randomizer import RandomPieceGenerator
from .run_terminal import FRAME_DELAY


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description="Falling-block puzzle game.")
    parser.add_argument(
        "--frontend",
        choices=("terminal", "pygame"),
        default="terminal",
        help="Where to play: a curses terminal or a pygame window.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--frame-delay",
        type=float,
        default=FRAME_DELAY,
        help="Seconds to sleep between terminal frames.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log messages to this file instead of stderr.",
    )
    return parser.parse_args(argv)


def configure_logging(level: str, filename: Optional[str]) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        filename=filename,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    engine = Engine(RandomPieceGenerator(args.seed))

    if args.frontend == "pygame":
        from .run_pygame import GameRunner

        GameRunner(engine).run()
    else:
        from .run_terminal import play

        play(engine, frame_delay=args.frame_delay)


if __name__ == "__main__":
    main()
