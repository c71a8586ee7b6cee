"""
Placement and capturing rules

Key idea: raycasting. From the target cell, walk along each of the 8 directions collecting a contiguous run of
opponent discs. The run gets captured (flipped) when it is closed off by a disc of the mover's own side.

Every function in here is pure: boards are immutable values and nothing is cached between calls.
"""

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Side
from src.reversi.board import Board
from src.reversi.square import Square

Vector = tuple[int, int]

DIRECTIONS: list[Vector] = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]  # fmt: skip


def captured_run(board: Board, origin: Square, side: Side, direction: Vector) -> list[Square]:
    """Opponent discs flipped along a single direction (empty list if the run is not closed off by `side`)."""
    opponent = side.opponent
    run: list[Square] = []
    square = origin.shifted(*direction)
    while square.is_within_bounds() and board.cell(square) == opponent:
        run.append(square)
        square = square.shifted(*direction)

    # the run only counts if, still on the board, it ends in one of our own discs
    if run and square.is_within_bounds() and board.cell(square) == side:
        return run
    return []


def captures(board: Board, row: int, col: int, side: Side) -> list[Square]:
    """Union of the runs in all 8 directions that a disc of `side` placed on (row, col) would flip."""
    origin = Square(row, col)
    flipped: list[Square] = []
    for direction in DIRECTIONS:
        flipped.extend(captured_run(board, origin, side, direction))
    return flipped


def is_legal_move(board: Board, row: int, col: int, side: Side) -> bool:
    """Empty cell + at least one disc captured."""
    square = Square(row, col)
    if not square.is_within_bounds():
        return False
    if not board.is_empty(square):
        return False
    return len(captures(board, row, col, side)) > 0


def legal_moves(board: Board, side: Side) -> set[Square]:
    return {
        square
        for square in board.empty_squares()
        if is_legal_move(board, square.row, square.col, side)
    }


def has_legal_move(board: Board, side: Side) -> bool:
    return any(
        is_legal_move(board, square.row, square.col, side)
        for square in board.empty_squares()
    )


def apply_move(board: Board, row: int, col: int, side: Side) -> Board:
    """
    Place a disc and flip every captured run
    ----

    Returns a new Board. The board passed in is never modified, so older game states keep a consistent snapshot.
    """
    if not is_legal_move(board, row, col, side):
        raise IllegalMoveError(f"Move not allowed for {side}: ({row}, {col})")

    flipped = captures(board, row, col, side)
    return board.place(side, [Square(row, col), *flipped])


def piece_counts(board: Board) -> tuple[int, int]:
    """(black count, white count)"""
    return board.count(Side.BLACK), board.count(Side.WHITE)
