"""
Main entry point for Code Wordle.

Usage:
    python -m codewordle.main
    python -m codewordle.main play guess --config config.yaml
    python -m codewordle.main add 1001 --file snippet.cpp
    python -m codewordle.main stats --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .engine import split_text
from .game import Console, GameConfig

MODES = {
    "guess": "guess_limited",
    "time": "time_attack",
    "point": "point",
}


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Code Wordle: uncover a hidden code snippet by guessing substrings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  snippet_dir: CodeSnippets
  statistics_path: Statistics.dat
  seed: 42
  point:
    guess_penalty: 100
    point_factor: 500
    reward_factor: 1.5
        """
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log game events to stderr"
    )

    commands = parser.add_subparsers(dest="command")

    play = commands.add_parser("play", help="Play one game")
    play.add_argument("mode", choices=sorted(MODES), help="Game mode")

    commands.add_parser("rules", help="Show the rules")
    commands.add_parser("list", help="List stored snippets")

    read = commands.add_parser("read", help="Print a stored snippet")
    read.add_argument("identifier")

    add = commands.add_parser("add", help="Store a snippet (replaces an existing one)")
    add.add_argument("identifier")
    add.add_argument(
        "--file", "-f",
        help="Read the snippet from a file instead of standard input"
    )

    remove = commands.add_parser("remove", help="Delete a stored snippet")
    remove.add_argument("identifier")

    commands.add_parser("stats", help="Show statistics and game history")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    try:
        console = Console.create(config, interactive=args.command in (None, "play"))

        if args.command is None:
            console.mainloop()
        elif args.command == "play":
            console.play(MODES[args.mode])
        elif args.command == "rules":
            console.show_rules()
        elif args.command == "list":
            console.list_snippets()
        elif args.command == "read":
            if console.read_snippet(args.identifier) is None:
                return 1
        elif args.command == "add":
            if args.file:
                lines = split_text(Path(args.file).read_text(encoding="utf-8"))
            else:
                lines = console.read_snippet_lines()
            console.add_snippet(args.identifier, lines)
        elif args.command == "remove":
            if not console.remove_snippet(args.identifier):
                return 1
        elif args.command == "stats":
            console.show_statistics()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
