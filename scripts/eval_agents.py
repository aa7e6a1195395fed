#!/usr/bin/env python3
"""
Head-to-head evaluator for NoGo agents.

Example:
  PYTHONPATH=src python3 scripts/eval_agents.py \
    --challenger "name=mcts seed=1" --challenger-kind mcts \
    --baseline "name=random seed=2" --baseline-kind random \
    --games 20 --time-scale 0.25
"""

from __future__ import annotations

import argparse
import math
import os
import sys
from collections import Counter
from typing import Optional, Tuple

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from nogoagent.ai import SearchConfig, TimeSchedule, create_agent, play_episode
from nogoagent.engine import Color


def elo_difference(score: float, eps: float = 1e-4) -> float:
    """Logistic Elo gap implied by an expected score."""
    score = min(1.0 - eps, max(eps, score))
    return 400.0 * math.log10(score / (1.0 - score))


def wilson_interval(wins: int, games: int, z: float = 1.96) -> Tuple[float, float]:
    if games == 0:
        return 0.0, 1.0
    p = wins / games
    denom = 1.0 + z * z / games
    centre = (p + z * z / (2 * games)) / denom
    half = z * math.sqrt(p * (1.0 - p) / games + z * z / (4 * games * games)) / denom
    return max(0.0, centre - half), min(1.0, centre + half)


def build(kind: str, args: str, role: Color, search: SearchConfig):
    kwargs = {"search": search} if kind == "mcts" else {}
    return create_agent(kind, f"{args} role={role.value}", **kwargs)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate a challenger agent vs a baseline.")
    parser.add_argument("--challenger", default="name=mcts seed=1", help="Challenger options.")
    parser.add_argument("--challenger-kind", default="mcts", help="mcts or random (default: mcts).")
    parser.add_argument("--baseline", default="name=random seed=2", help="Baseline options.")
    parser.add_argument("--baseline-kind", default="random", help="mcts or random (default: random).")
    parser.add_argument("--games", type=int, default=20, help="Number of games (default: 20).")
    parser.add_argument(
        "--time-scale",
        type=float,
        default=0.25,
        help="Multiply the per-move time table (default: 0.25).",
    )
    args = parser.parse_args(argv)

    search = SearchConfig(schedule=TimeSchedule().scaled(args.time_scale))
    # One agent per color so each keeps its own RNG stream across games.
    challengers = {
        color: build(args.challenger_kind, args.challenger, color, search) for color in Color
    }
    baselines = {color: build(args.baseline_kind, args.baseline, color, search) for color in Color}

    # NoGo has no draws and episodes run to completion, so every game has a winner.
    wins: Counter = Counter()
    played: Counter = Counter()

    for game_idx in range(args.games):
        challenger_color = Color.BLACK if game_idx % 2 == 0 else Color.WHITE
        if challenger_color is Color.BLACK:
            black, white = challengers[Color.BLACK], baselines[Color.WHITE]
        else:
            black, white = baselines[Color.BLACK], challengers[Color.WHITE]
        result = play_episode(black, white)
        played[challenger_color] += 1
        if result.winner is challenger_color:
            wins[challenger_color] += 1

    total = sum(played.values())
    won = sum(wins.values())
    low, high = wilson_interval(won, total)
    score = won / total if total else 0.0

    print(f"challenger won {won}/{total} ({score:.1%}, 95% Wilson {low:.1%}..{high:.1%})")
    for color in Color:
        print(f"  as {color.value}: {wins[color]}/{played[color]}")
    print(
        f"Elo gap {elo_difference(score):+.0f} "
        f"[{elo_difference(low):+.0f}, {elo_difference(high):+.0f}]"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
