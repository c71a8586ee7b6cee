"""Helpers shared by the test modules (imported explicitly, unlike the fixtures in conftest.py)."""

import asyncio
from typing import Any, Coroutine, TypeVar

from src.reversi.board import Board

T = TypeVar("T")

EMPTY_ROW = "........"


def board_from_rows(rows: dict[int, str]) -> Board:
    """Only spell out the rows that matter, every other row is empty."""
    return Board.from_text("/".join(rows.get(idx, EMPTY_ROW) for idx in range(8)))


def run(coroutine: Coroutine[Any, Any, T]) -> T:
    """Drive a coroutine of the (async) service layer to completion."""
    return asyncio.run(coroutine)


def move_frame(row: Any, col: Any) -> str:
    return f'{{"type": "MOVE", "payload": {{"row": {row}, "col": {col}}}}}'


class FakeConnection:
    """Stands in for a WebSocket: records everything the service sends to it."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False

    async def send_json(self, data: Any) -> None:
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.closed = True

    def types(self) -> list[str]:
        return [message["type"] for message in self.sent]

    def last(self) -> dict[str, Any]:
        return self.sent[-1]


class BrokenConnection(FakeConnection):
    """Accepts the first `healthy_sends` messages, then behaves like a socket that went away."""

    def __init__(self, healthy_sends: int) -> None:
        super().__init__()
        self.healthy_sends = healthy_sends

    async def send_json(self, data: Any) -> None:
        if len(self.sent) >= self.healthy_sends:
            raise RuntimeError("Cannot call 'send' once a close message has been sent.")
        await super().send_json(data)
