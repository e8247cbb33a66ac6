#!/usr/bin/env python3
"""Play a Sokoban level from the terminal."""

from __future__ import annotations

import argparse
from pathlib import Path

from sokoban.board import Board, display_board
from sokoban.game import WON, GameSession, Intent
from sokoban.levels import DEFAULT_LEVEL, LevelFormatError, level_names, load_level, parse_level


def print_play_help() -> None:
    print("Play commands:")
    print("  up | down | left | right  - move (also w / s / a / d)")
    print("  u | undo                  - take back the last input (costs a point)")
    print("  board                     - display board")
    print("  reset                     - restart the level")
    print("  quit                      - exit")


def print_status(game: GameSession) -> None:
    satisfied, total = game.current.count_targets()
    last = game.last_move.value if game.last_move is not None else "-"
    print(
        f"Score: {game.score} | targets: {satisfied}/{total} | "
        f"last move: {last} | undo: {'yes' if game.can_undo() else 'no'}"
    )


def read_intent(game: GameSession) -> Intent:
    """Read commands from stdin until one maps to a game intent."""
    while True:
        raw = input("move> ").strip()
        if not raw:
            continue
        low = raw.lower()

        if low in {"help", "?"}:
            print_play_help()
            continue
        if low in {"quit", "exit", "q"}:
            raise SystemExit(0)
        if low in {"board", "show"}:
            display_board(game.current)
            continue
        if low == "reset":
            game.reset()
            print("Level restarted.")
            display_board(game.current)
            continue

        intent = Intent.parse(low)
        if intent is None:
            print("Unknown command. Type: help")
            continue
        return intent


def load_board(args: argparse.Namespace) -> Board:
    if args.ground or args.occupants:
        if not (args.ground and args.occupants):
            raise SystemExit("--ground and --occupants must be given together.")
        try:
            ground = Path(args.ground).read_text()
            occupants = Path(args.occupants).read_text()
        except OSError as exc:
            raise SystemExit(f"Cannot read level file: {exc}")
        try:
            return parse_level(ground, occupants)
        except LevelFormatError as exc:
            raise SystemExit(f"Invalid level: {exc}")
    return load_level(args.level)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Sokoban in the terminal.")
    parser.add_argument(
        "--level",
        choices=level_names(),
        default=DEFAULT_LEVEL,
        help=f"Built-in level to play (default: {DEFAULT_LEVEL}).",
    )
    parser.add_argument(
        "--ground",
        help="Path to a ground-layer level file (custom level).",
    )
    parser.add_argument(
        "--occupants",
        help="Path to an occupant-layer level file (custom level).",
    )
    parser.add_argument(
        "--list-levels",
        action="store_true",
        help="List built-in levels and exit.",
    )
    parser.add_argument(
        "--max-inputs",
        type=int,
        default=1000,
        help="Safety stop after N inputs (default: 1000).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if args.list_levels:
        for name in level_names():
            board = load_level(name)
            print(f"  {name:<14} {board.height}x{board.width}")
        return 0

    game = GameSession(load_board(args))
    print_play_help()

    inputs = 0
    while not game.should_end() and inputs < args.max_inputs:
        print()
        display_board(game.current)
        print_status(game)
        game.handle(read_intent(game))
        inputs += 1

    print()
    display_board(game.current)
    message = game.terminal_message()
    if message is None:
        print(f"Stopped after {args.max_inputs} inputs.")
    else:
        result = "YOU WIN" if game.outcome == WON else "YOU FELL IN A HOLE"
        print(f"{message}: {result}")
    print(f"Final Score: {game.score}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
