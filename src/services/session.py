"""
The single authoritative game of a room.

Owns the current GameState, mediates move requests, and reports every outcome as an explicit result
(Accepted or Rejected) instead of raising: a rejected move is a normal outcome for the requester, not a failure of the session.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import ErrorMessage, Side
from src.reversi.game import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Accepted:
    state: GameState


@dataclass(frozen=True)
class Rejected:
    reason: ErrorMessage


MoveResult = Accepted | Rejected

# Most specific first: NotYourTurnError etc. all derive from GameError
REJECTION_REASONS: list[tuple[type[GameError], ErrorMessage]] = [
    (NotYourTurnError, ErrorMessage.NOT_YOUR_TURN),
    (GameStateError, ErrorMessage.GAME_OVER),
    (IllegalMoveError, ErrorMessage.INVALID_MOVE),
]


class GameSession:
    """Turn state machine around the current GameState."""

    def __init__(self, state: Optional[GameState] = None) -> None:
        self._state = state if state is not None else GameState.new_game()

    @property
    def state(self) -> GameState:
        return self._state

    def submit_move(self, side: Side, row: int, col: int) -> MoveResult:
        """Try the move for `side`. On success the new state replaces the current one wholesale."""
        try:
            new_state = self._state.play(side, row, col)
        except GameError as exc:
            reason = _rejection_reason(exc)
            logger.debug("Rejected move %s at (%s, %s): %s", side, row, col, exc)
            return Rejected(reason=reason)

        self._log_transition(side, new_state)
        self._state = new_state
        return Accepted(new_state)

    def restart(self) -> GameState:
        """Fresh opening position, independent of how the previous game ended."""
        self._state = GameState.new_game()
        logger.info("Game restarted")
        return self._state

    def snapshot(self) -> GameModel:
        return self._state.to_model()

    def _log_transition(self, mover: Side, new_state: GameState) -> None:
        if new_state.game_over:
            logger.info(
                "Game over. winner: %s (black %d - white %d)",
                new_state.winner,
                new_state.black_count,
                new_state.white_count,
            )
        elif new_state.side_to_move == mover:
            logger.info("%s has no legal move, %s plays again", mover.opponent, mover)


def _rejection_reason(exc: GameError) -> ErrorMessage:
    for error_type, reason in REJECTION_REASONS:
        if isinstance(exc, error_type):
            return reason
    return ErrorMessage.INVALID_MOVE
