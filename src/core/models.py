"""
Boundary layer data model(s).

GameState.to_model() flattens a game into plain strings, ints and lists here,
so the session can hand a snapshot to the transport without exposing Board, Square or Side objects.
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
SideName = str
CellName = Optional[str]
Coordinate = tuple[int, int]


@dataclass
class GameModel:
    """Transport-safe representation of a Reversi game used between the Game, Service, and API layers."""

    board: list[list[CellName]]
    side_to_move: SideName
    winner: Optional[str]
    game_over: bool
    black_count: int
    white_count: int
    legal_moves: list[Coordinate] = field(default_factory=list)
