"""
Custom exceptions shared across layers.

The domain layer raises these. The service layer translates them into rejection results / ERROR messages for the participants.
"""


class GameError(Exception):
    """Root of every error raised by the game (domain + request validation)."""


class GameStateError(GameError):
    """The requested operation is not allowed in the current state of the game."""


class IllegalMoveError(GameError):
    """The target cell is not a legal move for the side that requested it."""


class NotYourTurnError(GameError):
    """A participant attempted to move while it is the opponent's turn."""


class InvalidRequestError(GameError):
    """Inbound message could not be interpreted."""


class RoomFullError(GameError):
    """Both participant slots are already taken."""


class UnknownMessageTypeError(InvalidRequestError):
    """Inbound message is well-formed but of a type the server does not handle."""
