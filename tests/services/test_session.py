"""Unit tests for src/services/session.py"""

import pytest

from src.core.shared_types import ErrorMessage, Outcome, Side
from src.reversi.game import GameState
from src.services.session import Accepted, GameSession, Rejected


def test_new_session_starts_from_opening() -> None:
    session = GameSession()
    assert session.state == GameState.new_game()


def test_accepted_move_replaces_state() -> None:
    session = GameSession()
    previous = session.state

    result = session.submit_move(Side.BLACK, 2, 3)

    assert isinstance(result, Accepted)
    assert session.state is result.state
    assert session.state.side_to_move == Side.WHITE
    assert previous == GameState.new_game()


@pytest.mark.parametrize(
    "side, row, col, reason",
    [
        (Side.WHITE, 2, 4, ErrorMessage.NOT_YOUR_TURN),
        (Side.BLACK, 0, 0, ErrorMessage.INVALID_MOVE),
        (Side.BLACK, 3, 3, ErrorMessage.INVALID_MOVE),
    ],
)
def test_rejected_move_leaves_state_unchanged(
    side: Side, row: int, col: int, reason: ErrorMessage
) -> None:
    session = GameSession()
    before = session.state

    result = session.submit_move(side, row, col)

    assert isinstance(result, Rejected)
    assert result.reason == reason
    assert session.state is before


def test_move_after_game_over_is_rejected(final_move_state: GameState) -> None:
    session = GameSession(final_move_state)
    assert isinstance(session.submit_move(Side.BLACK, 0, 2), Accepted)
    assert session.state.game_over
    assert session.state.winner == Outcome.BLACK

    result = session.submit_move(session.state.side_to_move, 0, 3)
    assert isinstance(result, Rejected)
    assert result.reason == ErrorMessage.GAME_OVER


def test_forced_pass_keeps_mover(forced_pass_state: GameState) -> None:
    session = GameSession(forced_pass_state)
    result = session.submit_move(Side.BLACK, 0, 0)
    assert isinstance(result, Accepted)
    assert session.state.side_to_move == Side.BLACK

    # white is still not allowed to move
    assert isinstance(session.submit_move(Side.WHITE, 7, 2), Rejected)


def test_restart_from_any_state(final_move_state: GameState) -> None:
    session = GameSession(final_move_state)
    session.submit_move(Side.BLACK, 0, 2)
    assert session.state.game_over

    restarted = session.restart()
    assert restarted == GameState.new_game()
    assert session.state is restarted


def test_snapshot_reflects_current_state() -> None:
    session = GameSession()
    session.submit_move(Side.BLACK, 2, 3)
    snapshot = session.snapshot()
    assert snapshot.side_to_move == "white"
    assert (snapshot.black_count, snapshot.white_count) == (4, 1)
    assert snapshot.legal_moves == [(2, 2), (2, 4), (4, 2)]
