"""Core rules engine for 9x9 NoGo.

NoGo is played on an empty Go board. Players alternately place one stone; a
placement is illegal if it captures an opposing group or leaves the new
stone's own group without liberties. The player unable to place loses.

Coordinates are zero-based tuples (x, y). Helpers for Go-style notation
(e.g. "A1", columns skip the letter I) are provided for CLI output.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

BOARD_SIZE = 9
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE
FILES = "ABCDEFGHJ"
Coord = Tuple[int, int]  # (x, y), zero-based
Board = Dict[Coord, "Color"]


class Color(str, Enum):
    BLACK = "black"
    WHITE = "white"

    def opponent(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK


class IllegalMoveError(ValueError):
    """Raised by apply_move for placements the rules reject."""


DIRECTIONS: Sequence[Coord] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def coord_in_bounds(coord: Coord) -> bool:
    x, y = coord
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def coord_to_notation(coord: Coord) -> str:
    x, y = coord
    return f"{FILES[x]}{y + 1}"


def notation_to_coord(token: str) -> Coord:
    if len(token) < 2:
        raise ValueError(f"Invalid coordinate token: {token}")
    file_char, rank_str = token[0].upper(), token[1:]
    if file_char not in FILES:
        raise ValueError(f"Invalid file: {file_char}")
    coord = (FILES.index(file_char), int(rank_str) - 1)
    if not coord_in_bounds(coord):
        raise ValueError(f"Out of bounds coordinate: {token}")
    return coord


def _neighbors(coord: Coord) -> List[Coord]:
    x, y = coord
    return [
        (x + dx, y + dy) for dx, dy in DIRECTIONS if coord_in_bounds((x + dx, y + dy))
    ]


def _has_liberty(board: Board, start: Coord) -> bool:
    """Flood-fill the group at start and stop at the first liberty found."""
    color = board[start]
    seen: Set[Coord] = {start}
    frontier = [start]
    while frontier:
        current = frontier.pop()
        for adjacent in _neighbors(current):
            occupant = board.get(adjacent)
            if occupant is None:
                return True
            if occupant is color and adjacent not in seen:
                seen.add(adjacent)
                frontier.append(adjacent)
    return False


@dataclass(frozen=True)
class Move:
    coord: Coord
    color: Color

    @classmethod
    def from_index(cls, index: int, color: Color) -> "Move":
        return cls(coord=(index % BOARD_SIZE, index // BOARD_SIZE), color=color)

    @property
    def index(self) -> int:
        return self.coord[1] * BOARD_SIZE + self.coord[0]

    def apply(self, board: Board) -> bool:
        """Place this stone on board in place; return False and leave it untouched if illegal."""
        if not is_legal(board, self):
            return False
        board[self.coord] = self.color
        return True

    def __str__(self) -> str:
        return f"{self.color.value[0].upper()}{coord_to_notation(self.coord)}"


def is_legal(board: Board, move: Move) -> bool:
    if not coord_in_bounds(move.coord) or move.coord in board:
        return False
    board[move.coord] = move.color
    try:
        if not _has_liberty(board, move.coord):
            return False
        for adjacent in _neighbors(move.coord):
            occupant = board.get(adjacent)
            if occupant is not None and occupant is not move.color:
                if not _has_liberty(board, adjacent):
                    return False
        return True
    finally:
        del board[move.coord]


def all_moves(color: Color) -> List[Move]:
    """Every placement for color in linear index order, legal or not."""
    return [Move.from_index(i, color) for i in range(BOARD_CELLS)]


@dataclass
class GameState:
    board: Board = field(default_factory=dict)
    turn: Color = Color.BLACK
    history: List[Move] = field(default_factory=list)
    winner: Optional[Color] = None
    summary: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.winner is None

    def at(self, coord: Coord) -> Optional[Color]:
        return self.board.get(coord)

    def empty_count(self) -> int:
        return BOARD_CELLS - len(self.board)

    def copy(self) -> "GameState":
        return GameState(
            board=dict(self.board),
            turn=self.turn,
            history=list(self.history),
            winner=self.winner,
            summary=self.summary,
        )


def initial_state() -> GameState:
    return GameState()


def legal_moves(state: GameState, color: Optional[Color] = None) -> List[Move]:
    color = color or state.turn
    return [move for move in all_moves(color) if is_legal(state.board, move)]


def apply_move(state: GameState, move: Move) -> GameState:
    if not state.active:
        raise IllegalMoveError("Game already finished")
    if move.color is not state.turn:
        raise IllegalMoveError("Not this color's turn")
    next_state = state.copy()
    if not move.apply(next_state.board):
        raise IllegalMoveError(f"Illegal placement: {coord_to_notation(move.coord)}")
    next_state.history.append(move)
    next_state.turn = state.turn.opponent()
    return next_state


def render_board(state: GameState) -> str:
    """Text diagram with rank 9 on top; X is black, O is white."""
    symbols = {Color.BLACK: "X", Color.WHITE: "O"}
    rows = ["  " + " ".join(FILES)]
    for y in reversed(range(BOARD_SIZE)):
        cells = [symbols.get(state.board.get((x, y)), ".") for x in range(BOARD_SIZE)]
        rows.append(f"{y + 1} " + " ".join(cells))
    return "\n".join(rows)


def serialize_state(state: GameState) -> Dict:
    """Serialize GameState to a JSON-friendly dict."""
    return {
        "turn": state.turn.value,
        "winner": state.winner.value if state.winner else None,
        "history": [
            {"coord": coord_to_notation(m.coord), "color": m.color.value}
            for m in state.history
        ],
        "board": [
            {"coord": coord_to_notation(coord), "color": color.value}
            for coord, color in sorted(state.board.items(), key=lambda item: (item[0][1], item[0][0]))
        ],
        "summary": state.summary,
    }


def deserialize_state(payload: Dict) -> GameState:
    board: Board = {}
    for item in payload.get("board", []):
        board[notation_to_coord(item["coord"])] = Color(item["color"])
    history = [
        Move(coord=notation_to_coord(m["coord"]), color=Color(m["color"]))
        for m in payload.get("history") or []
    ]
    return GameState(
        board=board,
        turn=Color(payload.get("turn", "black")),
        history=history,
        winner=Color(payload["winner"]) if payload.get("winner") else None,
        summary=payload.get("summary"),
    )
