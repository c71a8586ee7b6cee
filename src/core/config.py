"""
Runtime configuration, read from environment variables.

REVERSI_HOST / REVERSI_PORT: where uvicorn binds
REVERSI_LOG_LEVEL: root log level name (DEBUG, INFO, ...)
REVERSI_CORS_ORIGINS: comma separated list of origins allowed to reach the HTTP endpoints
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Self

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            host=os.getenv("REVERSI_HOST", DEFAULT_HOST),
            port=_parse_port(os.getenv("REVERSI_PORT")),
            log_level=_parse_log_level(os.getenv("REVERSI_LOG_LEVEL")),
            cors_origins=[
                origin.strip()
                for origin in os.getenv("REVERSI_CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def _parse_port(value: str | None) -> int:
    if value is None:
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        logger.warning("Invalid REVERSI_PORT %r, using %d", value, DEFAULT_PORT)
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning("REVERSI_PORT %d out of range, using %d", port, DEFAULT_PORT)
        return DEFAULT_PORT
    return port


def _parse_log_level(value: str | None) -> str:
    if value is None:
        return DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("Invalid REVERSI_LOG_LEVEL %r, using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level
