"""
The GameState is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating the business logic required to play a turn of the board game -->
every accepted move produces a brand new GameState, which the service layer then passes onwards to the API layer.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from src.core.models import GameModel
from src.core.shared_types import Outcome, Side, Status
from src.reversi import rules
from src.reversi.board import Board
from src.reversi.square import Square


@dataclass(frozen=True)
class GameState:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    side_to_move: Side
    winner: Optional[Outcome] = None
    game_over: bool = False
    black_count: int = 2
    white_count: int = 2

    @classmethod
    def new_game(cls) -> Self:
        """Standard opening position, black to move."""
        return cls.from_board(Board.starting_position(), Side.BLACK)

    @classmethod
    def from_board(cls, board: Board, side_to_move: Side) -> Self:
        """
        Build a consistent state for an arbitrary position.
        ----

        The requested side keeps the move if it has one. Otherwise the move passes to the opponent,
        and when neither side can move the game is over.
        """
        return cls._settle(board, preferred=side_to_move)

    @property
    def status(self) -> Status:
        return Status.GAME_OVER if self.game_over else Status.IN_PROGRESS

    def legal_moves(self) -> set[Square]:
        """Moves for the side to move. Nothing is legal anymore once the game ended."""
        if self.game_over:
            return set()
        return rules.legal_moves(self.board, self.side_to_move)

    def play(self, side: Side, row: int, col: int) -> Self:
        """
        Attempt a move
        -----

        1. the game must still be in progress
        2. it must be `side`'s turn
        3. the cell must be a legal move
        4. place + flip (new board), recount, and decide who moves next:
            * opponent has a move --> normal alternation
            * only the mover has a move --> forced pass, mover plays again
            * nobody has a move --> game over, most discs wins

        Raises a GameError subclass when the move is rejected. `self` is never modified.
        """
        # make sure the game is (still) in progress
        if self.game_over:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

        # make sure it is your turn
        self._assert_your_turn(side)

        # check if move is legal
        if not rules.is_legal_move(self.board, row, col, side):
            raise IllegalMoveError(f"Move not allowed: ({row}, {col})")

        new_board = rules.apply_move(self.board, row, col, side)
        return self._settle(new_board, preferred=side.opponent)

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_matrix(),
            side_to_move=self.side_to_move.value,
            winner=self.winner.value if self.winner is not None else None,
            game_over=self.game_over,
            black_count=self.black_count,
            white_count=self.white_count,
            legal_moves=[(square.row, square.col) for square in sorted(self.legal_moves())],
        )

    # -- PRIVATE HELPERS ---
    def _assert_your_turn(self, side: Side) -> None:
        """You must wait for your turn before making a move."""
        if side != self.side_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.side_to_move} to make a move first."
            )

    @classmethod
    def _settle(cls, board: Board, preferred: Side) -> Self:
        """Pick the side to move on `board` (or end the game). Guarantees the side to move has a legal move."""
        black_count, white_count = rules.piece_counts(board)

        if rules.has_legal_move(board, preferred):
            side_to_move = preferred
        elif rules.has_legal_move(board, preferred.opponent):
            # forced pass
            side_to_move = preferred.opponent
        else:
            return cls(
                board=board,
                side_to_move=preferred,
                winner=_determine_winner(black_count, white_count),
                game_over=True,
                black_count=black_count,
                white_count=white_count,
            )

        return cls(
            board=board,
            side_to_move=side_to_move,
            black_count=black_count,
            white_count=white_count,
        )


def _determine_winner(black_count: int, white_count: int) -> Outcome:
    """Strictly more discs wins, equal counts is a draw."""
    if black_count > white_count:
        return Outcome.BLACK
    if white_count > black_count:
        return Outcome.WHITE
    return Outcome.DRAW
