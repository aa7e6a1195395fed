from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional, Protocol

from nogoagent.config import AgentConfig, parse_agent_args
from nogoagent.engine import Color, GameState, Move, all_moves

from .mcts import MCTSEngine, SearchConfig, SearchResult, StopCondition

PLAYER_DEFAULTS = "name=random role=unknown"


class Agent(Protocol):
    config: AgentConfig

    @property
    def name(self) -> str: ...

    @property
    def role(self) -> str: ...

    @property
    def color(self) -> Color: ...

    def open_episode(self, flag: str = "") -> None: ...

    def close_episode(self, flag: str = "") -> None: ...

    def take_action(self, state: GameState) -> Optional[Move]: ...

    def property(self, key: str) -> str: ...

    def notify(self, msg: str) -> None: ...


class _ConfiguredPlayer:
    """Shared option handling: validated config, free-form meta, seeded RNG."""

    def __init__(self, args: str = "") -> None:
        self.meta: Dict[str, str] = parse_agent_args(f"{PLAYER_DEFAULTS} {args}")
        self.config = AgentConfig(**self.meta)
        self.rng = random.Random(self.config.seed)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def role(self) -> str:
        return self.config.role

    @property
    def color(self) -> Color:
        return self.config.color

    def property(self, key: str) -> str:
        return self.meta[key]

    def notify(self, msg: str) -> None:
        """Update one option; name and role changes are validated like construction."""
        key, sep, value = msg.partition("=")
        meta = dict(self.meta)
        meta[key] = value if sep else msg
        self.config = AgentConfig(**meta)
        self.meta = meta

    def open_episode(self, flag: str = "") -> None:
        pass

    def close_episode(self, flag: str = "") -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, role={self.role!r})"


class RandomPlayer(_ConfiguredPlayer):
    """Baseline: first legal placement from a freshly shuffled candidate list."""

    def __init__(self, args: str = "") -> None:
        super().__init__(args)
        self.space: List[Move] = all_moves(self.color)

    def take_action(self, state: GameState) -> Optional[Move]:
        if self.space[0].color is not self.color:
            self.space = all_moves(self.color)
        self.rng.shuffle(self.space)
        board = dict(state.board)
        for move in self.space:
            if move.apply(board):
                return move
        return None


class MCTSPlayer(_ConfiguredPlayer):
    """Plays the most visited root move of a fresh time-bounded search each turn."""

    def __init__(
        self,
        args: str = "",
        search: Optional[SearchConfig] = None,
        stop: Optional[Callable[[GameState], StopCondition]] = None,
    ) -> None:
        super().__init__(args)
        self.engine = MCTSEngine(self.rng, search)
        self.stop = stop
        self.last_result: Optional[SearchResult] = None

    def take_action(self, state: GameState) -> Optional[Move]:
        stop = self.stop(state) if self.stop is not None else None
        self.last_result = self.engine.search(state, self.color, stop)
        return self.last_result.move


AGENT_KINDS = {
    "random": RandomPlayer,
    "mcts": MCTSPlayer,
}


def create_agent(kind: str, args: str = "", **kwargs) -> Agent:
    try:
        factory = AGENT_KINDS[kind.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported agent kind '{kind}'. Valid kinds: {sorted(AGENT_KINDS)}"
        ) from None
    return factory(args, **kwargs)
