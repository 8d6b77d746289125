"""
cli.py: Command line entry point and the interactive match setup prompt.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional, Sequence

from .config import Settings, load_config
from .logger import get_logger, setup_logging
from .match import FlappyMatch

log = get_logger("cli")


class SetupCancelled(Exception):
    """The user closed a setup prompt instead of answering it."""


def parse_positive_int(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError("Invalid input. Please enter a number.") from None
    if value <= 0:
        raise ValueError("Please enter a positive number.")
    return value


def positive_int(raw: str) -> int:
    """argparse type for player and round counts."""
    try:
        return parse_positive_int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _ask(prompt: str, read: Optional[Callable[[str], str]]) -> str:
    try:
        return (read or input)(prompt)
    except (EOFError, KeyboardInterrupt):
        raise SetupCancelled() from None


def prompt_number(message: str, read: Optional[Callable[[str], str]] = None,
                  write: Optional[Callable[[str], None]] = None) -> int:
    """Ask until a positive integer is entered."""
    while True:
        try:
            return parse_positive_int(_ask(f"{message} ", read))
        except ValueError as e:
            (write or print)(str(e))


def prompt_name(message: str, read: Optional[Callable[[str], str]] = None,
                write: Optional[Callable[[str], None]] = None) -> str:
    """Ask until a non-empty name is entered."""
    while True:
        name = _ask(f"{message} ", read).strip()
        if name:
            return name
        (write or print)("Please enter a name.")


def collect_names(num_players: int, given: Sequence[str], read: Optional[Callable[[str], str]] = None,
                  write: Optional[Callable[[str], None]] = None) -> List[str]:
    names = [n.strip() for n in given if n.strip()][:num_players]
    for i in range(len(names), num_players):
        names.append(prompt_name(f"Enter name for Player {i + 1}:", read, write))
    return names


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn-based Flappy Bird for several players.")
    parser.add_argument("-p", "--players", type=positive_int, help="Number of players.")
    parser.add_argument("-r", "--rounds", type=positive_int, help="Number of rounds.")
    parser.add_argument("-n", "--name", action="append", default=[], dest="names",
                        help="Player name, repeat once per player.")
    parser.add_argument("--seed", type=int, help="Seed for pipe placement.")
    parser.add_argument("--log-level", help="Log level (debug, info, warning...).")
    parser.add_argument("--log-file", help="Also write NDJSON logs to this file.")
    return parser.parse_args(argv)


def build_match(settings: Settings, num_players: int, num_rounds: int,
                names: Sequence[str]) -> FlappyMatch:
    return FlappyMatch(
        num_players,
        num_rounds,
        config=settings.game,
        rng=random.Random(settings.seed),
        player_names=names,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = load_config().with_overrides(
        seed=args.seed, log_level=args.log_level, log_file=args.log_file)
    setup_logging(settings.log_level, settings.log_file, settings.log_levels)

    try:
        num_players = args.players or prompt_number("Enter number of players:")
        num_rounds = args.rounds or prompt_number("Enter number of rounds:")
        names = collect_names(num_players, args.names)
    except SetupCancelled:
        print()
        log.info("Setup cancelled")
        return 0

    match = build_match(settings, num_players, num_rounds, names)

    # Imported late so the setup prompt works without a display.
    from .client import FlappyClient
    FlappyClient(match, settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
