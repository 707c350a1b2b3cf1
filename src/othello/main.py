import argparse
import asyncio
import logging
import random
from typing import Any, cast

import flet as ft

from othello.cli.console import run_console
from othello.cli.duel import build_engine_spec, run_duel_series
from othello.engine.board import DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE, Color
from othello.engine.game import TIE
from othello.engine.registry import build_engine_instance, get_engine_choices
from othello.sync.netplay import play_networked
from othello.sync.peer import DEFAULT_PORT
from othello.ui.app import OthelloApp

ENGINE_NAMES = sorted(get_engine_choices().keys())

DEFAULT_PROTOCOL_ENGINE = "greedy"


def board_size(value: str) -> int:
    size = int(value)
    if not 1 <= size <= MAX_BOARD_SIZE:
        raise argparse.ArgumentTypeError(f"board size must be between 1 and {MAX_BOARD_SIZE}")
    return size


def run_play(args: argparse.Namespace) -> None:
    run_console(args.size, seed=args.seed, autopilot=args.autopilot)


def run_ui(args: argparse.Namespace) -> None:
    print(f"Starting UI with board size {args.size}...")
    engine = build_engine_instance(args.engine, board_size=args.size, rng_seed=args.seed)
    app = OthelloApp(engine, board_size=args.size)
    ft.app(target=app.main)


def run_net(args: argparse.Namespace) -> None:
    asyncio.run(play_networked(args.size, args.host, args.port, seed=args.seed))


def run_duel(args: argparse.Namespace) -> None:
    same = args.black_engine == args.white_engine
    black_spec = build_engine_spec(args.black_engine, " #1" if same else "")
    white_spec = build_engine_spec(args.white_engine, " #2" if same else "")

    stats, results = run_duel_series(
        board_size=args.size,
        black_spec=black_spec,
        white_spec=white_spec,
        games=max(1, args.games),
        swap_colors=not args.no_swap,
        rng=random.Random(args.seed),
    )

    print("\nGame results:")
    for index, result in enumerate(results, start=1):
        black_label = result.color_to_label[Color.BLACK]
        white_label = result.color_to_label[Color.WHITE]
        if result.winner is TIE:
            verdict = "Draw"
        else:
            verdict = f"Winner: {result.color_to_label[result.winner]}"
        print(
            f"Game {index}: {black_label} (Black) {result.scores[Color.BLACK]} - "
            f"{white_label} (White) {result.scores[Color.WHITE]} | {verdict}"
        )

    summary: dict[str, Any] = stats.summary()
    engines = cast(dict[str, Any], summary["engines"])
    print(f"\nDuel complete: {summary['total_games']} games, {summary['draws']} draws.")
    print(f"Average moves per game: {summary['average_moves']:.2f}")
    print("\nEngine breakdown:")
    for label, data in engines.items():
        print(
            f"- {label}: {data['wins']} wins / {data['games']} games, "
            f"avg score {data['avg_score']:.2f}, avg margin {data['avg_margin']:+.2f}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Othello Game CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common(sub: argparse.ArgumentParser):
        sub.add_argument(
            "--size",
            type=board_size,
            default=DEFAULT_BOARD_SIZE,
            help=f"Board size (default: {DEFAULT_BOARD_SIZE})",
        )
        sub.add_argument("--seed", type=int, default=None, help="Seed for the random source")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_common(play_parser)
    play_parser.add_argument("--autopilot", action="store_true", help="Let the greedy heuristic play both sides")
    play_parser.set_defaults(func=run_play)

    ui_parser = subparsers.add_parser("ui", help="Start the GUI")
    add_common(ui_parser)
    ui_parser.add_argument(
        "--engine",
        choices=ENGINE_NAMES,
        default=DEFAULT_PROTOCOL_ENGINE,
        help="Engine used for auto moves",
    )
    ui_parser.set_defaults(func=run_ui)

    net_parser = subparsers.add_parser("net", help="Play against a peer over the network")
    add_common(net_parser)
    net_parser.add_argument("--host", default=None, help="Host to connect to; omit to become the host")
    net_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})")
    net_parser.set_defaults(func=run_net)

    duel_parser = subparsers.add_parser("duel", help="Run engine vs engine duels")
    add_common(duel_parser)
    duel_parser.add_argument("--games", type=int, default=2, help="Number of games to run (default: 2)")
    duel_parser.add_argument("--no-swap", action="store_true", help="Disable color swapping between games")
    duel_parser.add_argument(
        "--black-engine",
        choices=ENGINE_NAMES,
        default="greedy",
        help="Engine used as black in the first game",
    )
    duel_parser.add_argument(
        "--white-engine",
        choices=ENGINE_NAMES,
        default="random",
        help="Engine used as white in the first game",
    )
    duel_parser.set_defaults(func=run_duel)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
