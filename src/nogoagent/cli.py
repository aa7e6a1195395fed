"""Command line entrypoint: play NoGo games between two agents."""
import argparse
import json
import logging
from collections import Counter

from . import __version__
from .ai import SearchConfig, TimeSchedule, create_agent, play_episode
from .ai.agent import AGENT_KINDS
from .config import env_time_scale, resolve_log_level
from .engine import Color, render_board, serialize_state


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="nogoagent")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--black",
        default="name=mcts",
        help='Options for the black agent, e.g. "name=mcts seed=7".',
    )
    parser.add_argument(
        "--white",
        default="name=random",
        help='Options for the white agent, e.g. "name=random seed=3".',
    )
    parser.add_argument("--black-kind", choices=sorted(AGENT_KINDS), default="mcts")
    parser.add_argument("--white-kind", choices=sorted(AGENT_KINDS), default="random")
    parser.add_argument("--games", type=int, default=1, help="Number of games (default: 1).")
    parser.add_argument(
        "--time-scale",
        type=float,
        default=None,
        help="Multiply the per-move time table (default: $NOGO_TIME_SCALE or 1.0).",
    )
    parser.add_argument(
        "--max-plies",
        type=int,
        default=None,
        help="Stop a game without a winner after this many plies.",
    )
    parser.add_argument("--show-board", action="store_true", help="Print the final board.")
    parser.add_argument("--json", default=None, help="Write the last game's final state here.")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $NOGO_LOG_LEVEL or WARNING).",
    )
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    try:
        logging.basicConfig(
            level=resolve_log_level(args.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        scale = args.time_scale if args.time_scale is not None else env_time_scale()
        search = SearchConfig(schedule=TimeSchedule().scaled(scale))
        black_kwargs = {"search": search} if args.black_kind == "mcts" else {}
        white_kwargs = {"search": search} if args.white_kind == "mcts" else {}
        black = create_agent(args.black_kind, f"{args.black} role=black", **black_kwargs)
        white = create_agent(args.white_kind, f"{args.white} role=white", **white_kwargs)
    except ValueError as exc:
        print(f"error: {exc}")
        return 2

    wins: Counter = Counter()
    result = None
    for game_idx in range(args.games):
        result = play_episode(black, white, max_plies=args.max_plies)
        winner = result.winner.value if result.winner else "none"
        wins[winner] += 1
        print(
            f"game {game_idx + 1}: winner={winner} plies={result.plies} "
            f"reason={result.end_reason} "
            f"think={result.think_time[Color.BLACK]:.1f}s/{result.think_time[Color.WHITE]:.1f}s"
        )

    print(
        f"{black.name} (black): {wins[Color.BLACK.value]}  "
        f"{white.name} (white): {wins[Color.WHITE.value]}  "
        f"unfinished: {wins['none']}"
    )
    if result is not None:
        if args.show_board:
            print(render_board(result.state))
        if args.json:
            with open(args.json, "w", encoding="utf-8") as handle:
                json.dump(serialize_state(result.state), handle, indent=2)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
