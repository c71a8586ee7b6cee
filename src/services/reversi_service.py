"""Orchestration of communication from the transport (one connection per participant) to the game session (and the reverse direction)."""

import asyncio
import logging
from typing import Any, Optional, Protocol
from uuid import uuid4

from src.api.models import (
    AssignedPayload,
    ErrorPayload,
    MessageType,
    MoveRequest,
    OutboundMessage,
    RestartRequest,
    UpdatePayload,
    parse_inbound,
)
from src.core.exceptions import (
    InvalidRequestError,
    RoomFullError,
    UnknownMessageTypeError,
)
from src.core.models import GameModel
from src.core.shared_types import ErrorMessage, Side
from src.services.registry import ConnectionId, ConnectionRegistry
from src.services.session import Accepted, GameSession

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Just the parts of a (WebSocket) connection the service needs"""

    async def send_json(self, data: Any) -> None: ...
    async def close(self, code: int = 1000) -> None: ...


class ReversiService:
    """
    One game room: a GameSession shared by the (at most two) registered connections.
    ----

    Every inbound event (connect, message, disconnect) is processed under a single lock, one at a time in arrival order.
    Broadcasts happen while the lock is held, so every UPDATE reflects the state right after the event that caused it.
    """

    def __init__(
        self,
        session: Optional[GameSession] = None,
        registry: Optional[ConnectionRegistry] = None,
    ) -> None:
        self.session = session if session is not None else GameSession()
        self.registry = registry if registry is not None else ConnectionRegistry()
        self._connections: dict[ConnectionId, Connection] = {}
        self._lock = asyncio.Lock()

    @property
    def player_count(self) -> int:
        return len(self.registry)

    # -- Transport events ---
    async def connect(self, connection: Connection) -> Optional[ConnectionId]:
        """
        Register a new connection.
        ----

        Success: the newcomer is told its side, then everybody receives the current state.
        Room full: the connection is told so and closed without being registered (returns None).
        A newcomer whose socket fails while being synced is dropped again (the ASSIGNED failure is re-raised).
        """
        connection_id = uuid4().hex
        async with self._lock:
            try:
                side: Optional[Side] = self.registry.register(connection_id)
            except RoomFullError as exc:
                logger.info("Refusing connection %s: %s", connection_id, exc)
                side = None

            if side is not None:
                self._connections[connection_id] = connection
                logger.info("Player connected: %s (%s)", connection_id, side)
                try:
                    await self._send(connection_id, _assigned_message(side))
                except Exception:
                    # the socket died before it could be told its side: give the slot back
                    self._drop(connection_id)
                    raise
                await self._broadcast(self.current_update())

        if side is None:
            await connection.send_json(_error_message(ErrorMessage.ROOM_FULL).to_wire())
            await connection.close()
            return None
        if self.registry.side_of(connection_id) is None:
            # dropped by the sync broadcast
            return None
        return connection_id

    async def disconnect(self, connection_id: ConnectionId) -> None:
        """Free the slot. The game itself carries on untouched."""
        async with self._lock:
            side = self._drop(connection_id)
        logger.info(
            "Player disconnected: %s (%s). Remaining players: %d",
            connection_id,
            side,
            self.player_count,
        )

    async def handle_message(self, connection_id: ConnectionId, text: str) -> None:
        """Interpret a raw frame from the connection and act on it."""
        try:
            request = parse_inbound(text)
        except UnknownMessageTypeError as exc:
            logger.warning("Unknown message from %s: %s", connection_id, exc)
            await self._send_error(connection_id, ErrorMessage.UNKNOWN_TYPE)
            return
        except InvalidRequestError as exc:
            logger.warning("Malformed message from %s: %s", connection_id, exc)
            await self._send_error(connection_id, ErrorMessage.MALFORMED)
            return

        async with self._lock:
            side = self.registry.side_of(connection_id)
            if side is None:
                logger.debug("Ignoring message from unregistered connection %s", connection_id)
                return

            if isinstance(request, MoveRequest):
                await self._handle_move(connection_id, side, request)
            elif isinstance(request, RestartRequest):
                self.session.restart()
                await self._broadcast(self.current_update())

    # -- Outbound payloads ---
    def current_update_payload(self) -> UpdatePayload:
        return _update_payload(self.session.snapshot())

    def current_update(self) -> OutboundMessage:
        return OutboundMessage(type=MessageType.UPDATE, payload=self.current_update_payload())

    # -- Internal helpers --
    async def _handle_move(
        self, connection_id: ConnectionId, side: Side, request: MoveRequest
    ) -> None:
        result = self.session.submit_move(side, request.row, request.col)
        if not isinstance(result, Accepted):
            await self._send(connection_id, _error_message(result.reason))
            return

        logger.info("%s played (%d, %d)", side, request.row, request.col)
        await self._broadcast(self.current_update())

    async def _send_error(self, connection_id: ConnectionId, reason: ErrorMessage) -> None:
        async with self._lock:
            await self._send(connection_id, _error_message(reason))

    async def _send(self, connection_id: ConnectionId, message: OutboundMessage) -> None:
        connection = self._connections.get(connection_id)
        if connection is None:
            return
        await connection.send_json(message.to_wire())

    async def _broadcast(self, message: OutboundMessage) -> None:
        """Send to every registered connection. A connection that fails is dropped, the others still get the message."""
        recipients = self.registry.connections()
        data = message.to_wire()
        results = await asyncio.gather(
            *(self._connections[connection_id].send_json(data) for connection_id in recipients),
            return_exceptions=True,
        )
        for connection_id, result in zip(recipients, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Could not deliver %s to %s, dropping it: %s", message.type, connection_id, result
                )
                self._drop(connection_id)

    def _drop(self, connection_id: ConnectionId) -> Optional[Side]:
        """Free the slot and forget the connection. Caller holds the lock."""
        self._connections.pop(connection_id, None)
        return self.registry.unregister(connection_id)


def _assigned_message(side: Side) -> OutboundMessage:
    return OutboundMessage(type=MessageType.ASSIGNED, payload=AssignedPayload(side=side))


def _error_message(reason: ErrorMessage) -> OutboundMessage:
    return OutboundMessage(type=MessageType.ERROR, payload=ErrorPayload(message=reason.value))


def _update_payload(model: GameModel) -> UpdatePayload:
    """Convert info in GameModel to the UPDATE payload."""
    return UpdatePayload(
        board=model.board,
        side_to_move=model.side_to_move,
        winner=model.winner,
        game_over=model.game_over,
        black_count=model.black_count,
        white_count=model.white_count,
        legal_moves=model.legal_moves,
    )
