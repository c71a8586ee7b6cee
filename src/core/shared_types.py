"""
Type definitions used across layers
"""

from enum import StrEnum


class Side(StrEnum):
    """The two competing players. Black (side A) always moves first."""

    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> "Side":
        return Side.WHITE if self == Side.BLACK else Side.BLACK


class Outcome(StrEnum):
    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    GAME_OVER = "game over"


# --- Messages sent to the participants inside ERROR frames. Clients may match on these so keep them stable.
class ErrorMessage(StrEnum):
    ROOM_FULL = "room full"
    NOT_YOUR_TURN = "not your turn"
    GAME_OVER = "game over"
    INVALID_MOVE = "invalid move"
    MALFORMED = "malformed message"
    UNKNOWN_TYPE = "unknown message type"
