from __future__ import annotations

import pytest

from nogoagent.engine import BOARD_SIZE, Color, GameState


@pytest.fixture()
def one_move_state() -> GameState:
    """Black to move with exactly one legal placement, A1.

    Black fills the board except A1, J9 and J8; white holds J8 with J9 as its
    only liberty. Black J9 would capture, so A1 is black's only move. White
    has no legal move in this position at all.
    """
    board = {}
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            board[(x, y)] = Color.BLACK
    del board[(0, 0)]
    del board[(8, 8)]
    board[(8, 7)] = Color.WHITE
    return GameState(board=board, turn=Color.BLACK)


@pytest.fixture()
def layered_state() -> GameState:
    """Bands of stones with two empty rows (18 empty cells), black to move.

    Rows 1-3 and 8-9 are black, rows 5-6 white; rows 4 and 7 are empty and
    every empty cell is legal for black.
    """
    board = {}
    for x in range(BOARD_SIZE):
        for y in (0, 1, 2, 7, 8):
            board[(x, y)] = Color.BLACK
        for y in (4, 5):
            board[(x, y)] = Color.WHITE
    return GameState(board=board, turn=Color.BLACK)
