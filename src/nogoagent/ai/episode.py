from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from nogoagent.engine import (
    Color,
    GameState,
    IllegalMoveError,
    Move,
    apply_move,
    initial_state,
)

from .agent import Agent

logger = logging.getLogger(__name__)


@dataclass
class EpisodeResult:
    winner: Optional[Color]
    plies: int
    end_reason: str
    state: GameState
    history: List[Move] = field(default_factory=list)
    think_time: Dict[Color, float] = field(
        default_factory=lambda: {Color.BLACK: 0.0, Color.WHITE: 0.0}
    )


def play_episode(
    black: Agent,
    white: Agent,
    state: Optional[GameState] = None,
    max_plies: Optional[int] = None,
) -> EpisodeResult:
    """Play one game; the side that cannot (or does not) place legally loses."""
    if black.color is not Color.BLACK or white.color is not Color.WHITE:
        raise ValueError(
            f"Agents must play their configured roles (got {black.role}/{white.role})."
        )
    agents = {Color.BLACK: black, Color.WHITE: white}
    state = state.copy() if state is not None else initial_state()
    think_time = {Color.BLACK: 0.0, Color.WHITE: 0.0}
    plies = 0
    end_reason = "max_plies" if state.active else "terminal"

    for agent in agents.values():
        agent.open_episode()

    while state.active:
        if max_plies is not None and plies >= max_plies:
            break
        mover = state.turn
        started = time.perf_counter()
        move = agents[mover].take_action(state)
        think_time[mover] += time.perf_counter() - started
        if move is None:
            state.winner = mover.opponent()
            state.summary = f"{mover.value} has no legal move."
            end_reason = "no_legal_move"
            break
        try:
            state = apply_move(state, move)
        except IllegalMoveError as exc:
            state.winner = mover.opponent()
            state.summary = f"{mover.value} played an illegal move: {exc}"
            end_reason = "illegal_move"
            break
        plies += 1

    for agent in agents.values():
        agent.close_episode()

    logger.info(
        "episode finished after %d plies: winner=%s reason=%s",
        plies,
        state.winner.value if state.winner else None,
        end_reason,
    )
    return EpisodeResult(
        winner=state.winner,
        plies=plies,
        end_reason=end_reason,
        state=state,
        history=list(state.history),
        think_time=think_time,
    )
