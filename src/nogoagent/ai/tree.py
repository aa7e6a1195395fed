"""Arena-backed search tree for MCTS.

Nodes live in one list owned by :class:`SearchTree` and refer to each other
by integer handle. A node owns its ``children`` handles; ``parent`` is a
back-reference only.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from nogoagent.engine import Color, GameState, Move


@dataclass
class Node:
    state: GameState
    node_side: Color  # color whose move produced this state
    visit_count: int = 0
    win_count: int = 0
    score: float = math.inf
    last_move: Optional[Move] = None
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)


class SearchTree:
    def __init__(self) -> None:
        self._nodes: List[Optional[Node]] = []
        self.created = 0
        self.released = 0

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> int:
        if not self._nodes:
            raise LookupError("Search tree has no root.")
        return 0

    def node(self, handle: int) -> Node:
        node = self._nodes[handle]
        if node is None:
            raise LookupError(f"Node {handle} was released.")
        return node

    def _add(self, node: Node) -> int:
        self._nodes.append(node)
        self.created += 1
        return len(self._nodes) - 1

    def add_root(self, state: GameState, node_side: Color) -> int:
        if self._nodes:
            raise ValueError("Search tree already has a root.")
        return self._add(Node(state=state, node_side=node_side))

    def add_child(self, parent: int, state: GameState, node_side: Color, move: Move) -> int:
        handle = self._add(Node(state=state, node_side=node_side, last_move=move, parent=parent))
        self.node(parent).children.append(handle)
        return handle

    def walk(self) -> Iterator[int]:
        """Pre-order handles starting at the root."""
        if not self._nodes:
            return
        stack = [self.root]
        while stack:
            handle = stack.pop()
            yield handle
            stack.extend(reversed(self.node(handle).children))

    def release(self) -> int:
        """Release every node post-order and empty the arena; return how many were released."""
        if not self._nodes:
            return 0
        released = 0
        # (handle, children_done) pairs; a node is released only after all of its children.
        stack = [(self.root, False)]
        while stack:
            handle, children_done = stack.pop()
            node = self.node(handle)
            if not children_done:
                stack.append((handle, True))
                stack.extend((child, False) for child in node.children)
                continue
            node.children.clear()
            self._nodes[handle] = None
            released += 1
        self.released += released
        self._nodes.clear()
        return released
