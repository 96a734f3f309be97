"""Command-line entry point for the flappy tile game."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace

from .config import GameConfig
from .errors import BackendError
from .pygame_backend import PygameApp
from .state import GameState
from .terminal_backend import TerminalApp

logger = logging.getLogger("flappy_tiles")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the flappy tile game.")
    parser.add_argument(
        "--seed",
        type=int,
        help="Optional random seed for deterministic obstacle gaps.",
    )
    parser.add_argument(
        "--terminal",
        action="store_true",
        help="Draw in the current text terminal instead of opening a window.",
    )
    parser.add_argument(
        "--keep-score",
        action="store_true",
        help="Keep the score when restarting after a death (reset only from the menu).",
    )
    parser.add_argument(
        "--fps",
        type=int,
        help="Override the target frame rate (default: config value).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging threshold (default: WARNING).",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig()
    overrides = {}
    if args.keep_score:
        overrides["keep_score"] = True
    if args.fps is not None:
        overrides["target_fps"] = args.fps
    if overrides:
        config = replace(config, **overrides)
    return config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = build_config(args)
    rng = random.Random(args.seed)
    state = GameState(config, rng=rng)

    try:
        app = TerminalApp(config, state) if args.terminal else PygameApp(config, state)
    except BackendError as exc:
        logger.error("%s", exc)
        return 1
    app.run()
    return 0
