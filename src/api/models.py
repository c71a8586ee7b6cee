"""Inbound and outbound message models for the game channel.

Every frame on the wire is a JSON object {"type": <TYPE>, "payload": {...}}. Field names on the wire are camelCase.
"""

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError, UnknownMessageTypeError
from src.core.shared_types import Outcome, Side
from src.reversi.square import BOARD_DIMENSIONS

Coordinate = tuple[int, int]


class MessageType(StrEnum):
    # inbound
    MOVE = "MOVE"
    RESTART = "RESTART"
    # outbound
    ASSIGNED = "ASSIGNED"
    UPDATE = "UPDATE"
    ERROR = "ERROR"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- REQUEST MODELS ---
class Envelope(BaseModel):
    type: str
    payload: Optional[dict[str, Any]] = None


class MoveRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    row: int
    col: int

    @field_validator("row")
    @classmethod
    def validate_row(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(f"Row {value} is outside the board.")
        return value

    @field_validator("col")
    @classmethod
    def validate_col(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[1]:
            raise InvalidRequestError(f"Column {value} is outside the board.")
        return value


class RestartRequest(BaseModel):
    pass


InboundRequest = MoveRequest | RestartRequest


def parse_inbound(text: str) -> InboundRequest:
    """Interpret a raw text frame. Raises InvalidRequestError for anything that is not a valid MOVE / RESTART."""
    try:
        envelope = Envelope.model_validate_json(text)
    except ValidationError as exc:
        raise InvalidRequestError("Message is not a JSON object with a 'type'.") from exc

    if envelope.type == MessageType.RESTART:
        return RestartRequest()

    if envelope.type == MessageType.MOVE:
        if envelope.payload is None:
            raise InvalidRequestError("MOVE requires a payload with 'row' and 'col'.")
        try:
            return MoveRequest.model_validate(envelope.payload)
        except ValidationError as exc:
            raise InvalidRequestError(f"Cannot interpret move: {envelope.payload!r}") from exc

    raise UnknownMessageTypeError(f"Unknown message type: {envelope.type!r}")


# --- RESPONSE MODELS ---
class AssignedPayload(CamelModel):
    side: Side


class UpdatePayload(CamelModel):
    board: list[list[Optional[Side]]]
    side_to_move: Side
    winner: Optional[Outcome]
    game_over: bool
    black_count: int
    white_count: int
    legal_moves: list[Coordinate]


class ErrorPayload(CamelModel):
    message: str


class OutboundMessage(BaseModel):
    type: MessageType
    payload: AssignedPayload | UpdatePayload | ErrorPayload

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class HealthResponse(BaseModel):
    status: str
    players: int
