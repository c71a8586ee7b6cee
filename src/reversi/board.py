"""The Board holds the configuration of discs. It is an immutable value: every change returns a new Board."""

from dataclasses import dataclass
from typing import Iterable, Optional, Self

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side
from src.reversi.square import BOARD_DIMENSIONS, Square, all_squares

# An empty cell is None
Cell = Optional[Side]
Row = tuple[Cell, ...]

TEXT_TO_CELL: dict[str, Cell] = {".": None, "B": Side.BLACK, "W": Side.WHITE}
CELL_TO_TEXT: dict[Cell, str] = {value: key for key, value in TEXT_TO_CELL.items()}

STARTING_POSITION = "......../......../......../...WB.../...BW.../......../......../........"


@dataclass(frozen=True)
class Board:
    rows: tuple[Row, ...]

    def __post_init__(self) -> None:
        if len(self.rows) != BOARD_DIMENSIONS[0] or any(
            len(row) != BOARD_DIMENSIONS[1] for row in self.rows
        ):
            raise InvalidRequestError(
                f"Board must have {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} cells."
            )

    @classmethod
    def empty(cls) -> Self:
        return cls(
            tuple(
                tuple(None for _ in range(BOARD_DIMENSIONS[1]))
                for _ in range(BOARD_DIMENSIONS[0])
            )
        )

    @classmethod
    def starting_position(cls) -> Self:
        """Four discs in the centre, diagonal pattern: white on (3,3)/(4,4), black on (3,4)/(4,3)."""
        return cls.from_text(STARTING_POSITION)

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Construct a board from its text notation.

        8 rows separated by slashes, top row first. Every row has 8 characters:
        * '.' an empty cell
        * 'B' a black disc
        * 'W' a white disc

        ex. the opening position:
        ......../......../......../...WB.../...BW.../......../......../........
        """
        text_rows = text.strip().split("/")
        if len(text_rows) != BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Board text must contain {BOARD_DIMENSIONS[0]} rows, got {len(text_rows)}."
            )

        rows: list[Row] = []
        for text_row in text_rows:
            if len(text_row) != BOARD_DIMENSIONS[1]:
                raise InvalidRequestError(f"Cannot interpret row {text_row!r}.")
            try:
                rows.append(tuple(TEXT_TO_CELL[character] for character in text_row))
            except KeyError as exc:
                raise InvalidRequestError(
                    f"Unknown cell character in row {text_row!r}."
                ) from exc
        return cls(tuple(rows))

    def to_text(self) -> str:
        return "/".join(
            "".join(CELL_TO_TEXT[cell] for cell in row) for row in self.rows
        )

    def __str__(self) -> str:
        return "\n".join(self.to_text().split("/"))

    def cell(self, square: Square) -> Cell:
        return self.rows[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.cell(square) is None

    def locate_side(self, side: Side) -> list[Square]:
        return [square for square in all_squares() if self.cell(square) == side]

    def empty_squares(self) -> list[Square]:
        return [square for square in all_squares() if self.is_empty(square)]

    def count(self, side: Side) -> int:
        return sum(row.count(side) for row in self.rows)

    def place(self, side: Side, squares: Iterable[Square]) -> Self:
        """Return a new board with `side` discs on every given square. This board is left untouched."""
        targets = set(squares)
        return type(self)(
            tuple(
                tuple(
                    side if Square(row_idx, col_idx) in targets else cell
                    for col_idx, cell in enumerate(row)
                )
                for row_idx, row in enumerate(self.rows)
            )
        )

    def to_matrix(self) -> list[list[Optional[str]]]:
        """Transport-friendly version: nested lists of side names (None for empty cells)."""
        return [
            [cell.value if cell is not None else None for cell in row]
            for row in self.rows
        ]
