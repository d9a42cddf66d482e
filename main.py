#!/usr/bin/env python3
"""
Minesweeper service - Main entry point.

Usage:
    python main.py serve [--host HOST] [--port PORT]
    python main.py play [--seed N]
"""
import argparse
import dataclasses
import logging
import random
import sys
from pathlib import Path

import numpy as np

# Allow running from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from game import GameState, GameStatus, MINE_VALUE, SIZE  # noqa: E402
from service import GameEngine, ServiceConfig, create_app  # noqa: E402
from sessions import SessionStore  # noqa: E402

LOCAL_SESSION = "local"


def serve(args: argparse.Namespace) -> None:
    """Run the HTTP service."""
    import uvicorn

    config = ServiceConfig.from_env()
    if args.host:
        config = dataclasses.replace(config, host=args.host)
    if args.port:
        config = dataclasses.replace(config, port=args.port)

    logging.basicConfig(level=config.log_level)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


def render_board(observation: np.ndarray) -> str:
    """Render the player's view as ASCII."""
    lines = ["   " + " ".join(str(col) for col in range(SIZE))]
    for row in range(SIZE):
        row_str = f"{row:>2} "
        for col in range(SIZE):
            val = observation[row, col]
            if val == -1:
                row_str += "."
            elif val == MINE_VALUE:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str.rstrip())
    return "\n".join(lines)


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal against a local engine."""
    logging.basicConfig(level=logging.WARNING)
    rng = random.Random(args.seed)
    engine = GameEngine(SessionStore(state_factory=lambda: GameState(rng=rng)))

    response = engine.new_game(LOCAL_SESSION)
    print("Enter 'row col' to reveal, 'new' for a new game, 'quit' to exit.\n")
    print(render_board(engine.observe(LOCAL_SESSION)))

    for line in sys.stdin:
        command = line.strip().lower()
        if command in ("quit", "exit", "q"):
            break
        if command == "new":
            response = engine.new_game(LOCAL_SESSION)
        else:
            try:
                row, col = (int(part) for part in command.split())
            except ValueError:
                print("Expected two numbers: row col")
                continue
            response = engine.click(LOCAL_SESSION, row, col)

        print()
        print(render_board(engine.observe(LOCAL_SESSION)))
        print(f"Status: {response.status.name}")
        if response.status == GameStatus.WON:
            print("\n*** WIN! ***")
        elif response.status == GameStatus.LOST:
            print("\n*** LOST (hit mine) ***")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper service - serve games over HTTP or play locally"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument(
        "--host", default=None, help="Interface to bind (overrides MINESWEEPER_HOST)"
    )
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Port (overrides MINESWEEPER_PORT)"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible boards"
    )

    args = parser.parse_args()

    if args.command == "serve":
        serve(args)
    elif args.command == "play":
        play(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
