"""Server configuration loaded from environment variables."""

import os
from dataclasses import dataclass

ENV_PREFIX = "TASKBOARD"

VALID_TRANSPORTS = frozenset({"stdio", "sse", "streamable-http"})
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass
class ServerConfig:
    """Settings for the Taskboard MCP server."""

    name: str = "taskboard"
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"


def _env(suffix: str) -> str | None:
    raw = os.getenv(f"{ENV_PREFIX}_{suffix}")
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def load_config() -> ServerConfig:
    """Build a ServerConfig from ``TASKBOARD_*`` environment variables.

    Raises:
        ValueError: if a variable holds an unsupported value
    """
    config = ServerConfig()

    if (transport := _env("TRANSPORT")) is not None:
        transport = transport.lower()
        if transport not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid {ENV_PREFIX}_TRANSPORT '{transport}'. "
                f"Must be one of: {', '.join(sorted(VALID_TRANSPORTS))}"
            )
        config.transport = transport

    if (host := _env("HOST")) is not None:
        config.host = host

    if (port := _env("PORT")) is not None:
        try:
            config.port = int(port)
        except ValueError:
            raise ValueError(f"Invalid {ENV_PREFIX}_PORT '{port}': not an integer") from None
        if not 0 < config.port < 65536:
            raise ValueError(f"Invalid {ENV_PREFIX}_PORT '{port}': out of range")

    if (level := _env("LOG_LEVEL")) is not None:
        level = level.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid {ENV_PREFIX}_LOG_LEVEL '{level}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        config.log_level = level

    return config
