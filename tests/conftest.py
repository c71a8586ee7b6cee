"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import pytest

from src.core.shared_types import Side
from src.reversi.board import Board
from src.reversi.game import GameState
from tests.helpers import board_from_rows


@pytest.fixture
def opening_board() -> Board:
    return Board.starting_position()


@pytest.fixture
def forced_pass_state() -> GameState:
    """
    Black to move. Playing (0,0) captures (0,1), after which white has no legal move left
    while black can still capture (7,1) by playing (7,2).
    """
    board = board_from_rows({0: ".WB.....", 7: "BW......"})
    return GameState.from_board(board, Side.BLACK)


@pytest.fixture
def final_move_state() -> GameState:
    """Black to move. Playing (0,2) captures the last white disc: nobody can move afterwards."""
    board = board_from_rows({0: "BW......"})
    return GameState.from_board(board, Side.BLACK)
