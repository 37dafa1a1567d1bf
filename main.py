"""
Main entry point for the triangle board game.
Opens the board viewer, or a plain text console with --headless.
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

# Add trifold to path if needed
sys.path.insert(0, str(Path(__file__).parent))

from trifold.board import GameBoard
from trifold.config import GameConfig
from trifold.errors import configure_logging
from trifold.session import GameSession


def run_headless(session: GameSession, lines=None, out=None) -> None:
    """
    Read commands line by line and print the board after every tick.

    Args:
        session: Session to drive
        lines: Iterable of input lines (defaults to stdin)
        out: Stream to print to (defaults to stdout)
    """
    lines = sys.stdin if lines is None else lines
    out = sys.stdout if out is None else out

    session.tick()
    print(session.board.pretty(), file=out)
    for line in lines:
        session.feed_line(line.rstrip("\r\n"))
        if session.tick():
            print(file=out)
            print(session.board.pretty(), file=out)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Triangle board game")
    parser.add_argument("--headless", action="store_true", help="Read commands from stdin, print the board as text")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides TRIFOLD_LOG_LEVEL)")
    args = parser.parse_args(argv)

    config = GameConfig.from_env()
    configure_logging(args.log_level or config.log_level)

    if args.headless:
        # No live echo when the console itself is the output
        session = GameSession(GameBoard(), replace(config, echo=False))
        run_headless(session)
        return

    from trifold.ui import BoardView

    session = GameSession(GameBoard(), config)
    BoardView(session).show()


if __name__ == "__main__":
    main()
