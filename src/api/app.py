"""FastAPI application: the WebSocket game channel plus a couple of read-only HTTP endpoints."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from src.api.models import HealthResponse, UpdatePayload
from src.core.config import Settings, configure_logging
from src.services.reversi_service import ReversiService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """One app serves one room: the ReversiService lives on `app.state`."""
    settings = settings if settings is not None else Settings.from_env()

    app = FastAPI(
        title="Reversi Server",
        description="Authoritative two-player Reversi game over WebSockets",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.service = ReversiService()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        service: ReversiService = app.state.service
        return HealthResponse(status="ok", players=service.player_count)

    @app.get("/state", response_model=UpdatePayload)
    async def state() -> UpdatePayload:
        """Current game state (same content as the UPDATE frames), for polling clients."""
        service: ReversiService = app.state.service
        return service.current_update_payload()

    @app.websocket("/ws")
    async def game_channel(websocket: WebSocket) -> None:
        """
        Game channel for one participant.

        Frames from the client are handed to the service one by one. The connection
        keeps its slot until the socket closes.
        """
        service: ReversiService = app.state.service
        await websocket.accept()
        connection_id = await service.connect(websocket)
        if connection_id is None:
            return

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logger.debug("Socket of %s closed by peer", connection_id)
                    break
                text = message.get("text")
                if text is None:
                    # binary frames are interpreted as UTF-8 text, garbage ends up as a malformed message
                    text = (message.get("bytes") or b"").decode("utf-8", errors="replace")
                await service.handle_message(connection_id, text)
        finally:
            await service.disconnect(connection_id)

    return app


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings)
    logger.info("Server starting on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
