"""Monte Carlo tree search with uniformly random playouts.

One search per turn: the root is the live position, children are every legal
placement, playouts alternate random legal placements until one side cannot
move. The move returned is the most visited root child. Nothing survives
between turns.
"""
from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from nogoagent.engine import Color, GameState, Move, all_moves, is_legal

from .tree import SearchTree

logger = logging.getLogger(__name__)

# Move number is MOVE_NUMBER_OFFSET - empty_cells // 2, clamped into the table.
MOVE_NUMBER_OFFSET = 36

# Seconds per move, indexed by move number.
DEFAULT_TIME_TABLE: Tuple[float, ...] = (
    0.2, 0.2, 0.2, 0.4, 0.4, 0.4,
    0.7, 0.7, 0.7, 1.4, 1.4, 1.4,
    1.7, 1.7, 1.7, 2.0, 2.0, 2.0,
    1.7, 1.7, 1.7, 1.7, 1.7, 1.7,
    1.0, 1.0, 1.0, 0.5, 0.5, 0.5,
    0.4, 0.4, 0.4, 0.2, 0.2, 0.2,
)

StopCondition = Callable[[int], bool]


def deadline(seconds: float, clock: Callable[[], float] = time.perf_counter) -> StopCondition:
    """Stop once ``seconds`` of ``clock`` time have passed since creation."""
    started = clock()

    def expired(_simulations: int) -> bool:
        return clock() - started >= seconds

    return expired


def simulation_limit(limit: int) -> StopCondition:
    """Stop after exactly ``limit`` simulation rounds (at least one always runs)."""

    def reached(simulations: int) -> bool:
        return simulations >= limit

    return reached


@dataclass(frozen=True)
class TimeSchedule:
    table: Tuple[float, ...] = DEFAULT_TIME_TABLE
    fraction: float = 0.95

    def __post_init__(self) -> None:
        if not self.table:
            raise ValueError("time table must have at least one entry")

    def index_for(self, state: GameState) -> int:
        move_number = MOVE_NUMBER_OFFSET - state.empty_count() // 2
        return min(max(move_number, 0), len(self.table) - 1)

    def budget_for(self, state: GameState) -> float:
        return self.table[self.index_for(state)]

    def target_for(self, state: GameState) -> float:
        return self.fraction * self.budget_for(state)

    def scaled(self, factor: float) -> "TimeSchedule":
        return TimeSchedule(table=tuple(t * factor for t in self.table), fraction=self.fraction)


@dataclass
class SearchConfig:
    # UCB exploration weight. Textbook UCB1 uses sqrt(2).
    exploration: float = 0.5
    schedule: TimeSchedule = field(default_factory=TimeSchedule)


@dataclass
class SearchResult:
    move: Optional[Move]
    simulations: int
    nodes_created: int
    nodes_released: int
    elapsed: float
    target: Optional[float]
    root_visits: Dict[Move, int] = field(default_factory=dict)


class MCTSEngine:
    """Single-threaded UCT search that owns the RNG and per-color candidate lists."""

    def __init__(self, rng: random.Random, config: Optional[SearchConfig] = None) -> None:
        self.rng = rng
        self.config = config or SearchConfig()
        # Expansion walks these lists in their current order; playouts reshuffle them in place.
        self._space: Dict[Color, List[Move]] = {color: all_moves(color) for color in Color}
        for space in self._space.values():
            self.rng.shuffle(space)

    # --- MCTS internals ---
    def compute_score(self, visits: int, wins: int, total_simulations: int) -> float:
        return wins / visits + self.config.exploration * math.sqrt(
            math.log(total_simulations) / visits
        )

    def select(self, tree: SearchTree, handle: int) -> int:
        node = tree.node(handle)
        while node.children:
            best_score = 0.0
            best = node.children[0]
            for child in node.children:
                score = tree.node(child).score
                if best_score < score:
                    best_score = score
                    best = child
            handle, node = best, tree.node(best)
        return handle

    def expand(self, tree: SearchTree, handle: int) -> int:
        node = tree.node(handle)
        mover = node.node_side.opponent()
        created = 0
        for move in self._space[mover]:
            if not is_legal(node.state.board, move):
                continue
            after = node.state.copy()
            move.apply(after.board)
            after.history.append(move)
            after.turn = mover.opponent()
            tree.add_child(handle, after, mover, move)
            created += 1
        return created

    def simulate(self, state: GameState, node_side: Color) -> Color:
        board = dict(state.board)
        who = node_side
        while True:
            who = who.opponent()
            space = self._space[who]
            self.rng.shuffle(space)
            for move in space:
                if move.apply(board):
                    break
            else:
                return who.opponent()

    def backpropagate(
        self, tree: SearchTree, handle: Optional[int], winner: Color, total_simulations: int
    ) -> None:
        win = winner is not tree.node(tree.root).node_side
        while handle is not None:
            node = tree.node(handle)
            node.visit_count += 1
            if win:
                node.win_count += 1
            node.score = self.compute_score(node.visit_count, node.win_count, total_simulations)
            handle = node.parent

    def best_move(self, tree: SearchTree) -> Optional[Move]:
        best: Optional[Move] = None
        max_visits = 0
        for child in tree.node(tree.root).children:
            node = tree.node(child)
            if node.visit_count > max_visits:
                max_visits = node.visit_count
                best = node.last_move
        return best

    # --- top level ---
    def run(self, state: GameState, side: Color, stop: StopCondition) -> Tuple[SearchTree, int]:
        """Grow a tree for ``side`` to move in ``state``; return the live tree and simulation count."""
        tree = SearchTree()
        root = tree.add_root(state.copy(), side.opponent())
        if self.expand(tree, root) == 0:
            return tree, 0

        simulations = 0
        while True:
            leaf = self.select(tree, root)
            self.expand(tree, leaf)
            leaf_node = tree.node(leaf)
            winner = self.simulate(leaf_node.state, leaf_node.node_side)
            simulations += 1
            self.backpropagate(tree, leaf, winner, simulations)
            if stop(simulations):
                break
        return tree, simulations

    def search(
        self, state: GameState, side: Color, stop: Optional[StopCondition] = None
    ) -> SearchResult:
        started = time.perf_counter()
        target: Optional[float] = None
        if stop is None:
            target = self.config.schedule.target_for(state)
            stop = deadline(target)

        tree, simulations = self.run(state, side, stop)
        move = self.best_move(tree)
        root_visits = {}
        for child in tree.node(tree.root).children:
            node = tree.node(child)
            root_visits[node.last_move] = node.visit_count
        created = tree.created
        released = tree.release()
        elapsed = time.perf_counter() - started

        logger.debug(
            "search %s: move=%s simulations=%d nodes=%d elapsed=%.3fs target=%s",
            side.value,
            move,
            simulations,
            created,
            elapsed,
            "n/a" if target is None else f"{target:.3f}s",
        )
        return SearchResult(
            move=move,
            simulations=simulations,
            nodes_created=created,
            nodes_released=released,
            elapsed=elapsed,
            target=target,
            root_visits=root_visits,
        )
