# =============================================================================
# core/config.py  —  Runtime configuration from the environment
# =============================================================================
#
# All configuration comes from environment variables, optionally loaded from
# a .env file in the working directory (python-dotenv).  Real environment
# variables always win over .env values (override=False).
#
#   FRIHET_API_KEY                 Frihet API key (required for stdio)
#   FRIHET_API_URL                 Base URL override (staging, proxies)
#   FRIHET_HTTP_TIMEOUT_SECONDS    Per-attempt deadline, stdio server (30)
#   FRIHET_REMOTE_TIMEOUT_SECONDS  Per-attempt deadline, HTTP server (25)
#   FRIHET_MCP_TRANSPORT           "stdio" or "http"
#   FRIHET_MCP_HOST / _PORT        Bind address for the HTTP server
#   FRIHET_LOG_LEVEL               DEBUG / INFO / WARNING ...
#
# The remote timeout is shorter because the HTTP deployment sits behind a
# platform with a ~30s ceiling on the whole request.  If that ceiling changes,
# re-derive the value rather than copying it.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.frihet.io/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_REMOTE_TIMEOUT_SECONDS = 25.0

TRANSPORTS = ("stdio", "http")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    remote_timeout_seconds: float = DEFAULT_REMOTE_TIMEOUT_SECONDS
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(override=False)

        transport = os.environ.get("FRIHET_MCP_TRANSPORT", "stdio").strip().lower()
        if transport not in TRANSPORTS:
            raise ValueError(
                f"FRIHET_MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}"
            )

        log_level = os.environ.get("FRIHET_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"FRIHET_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(
            api_key=os.environ.get("FRIHET_API_KEY", "").strip() or None,
            base_url=os.environ.get("FRIHET_API_URL", "").strip() or DEFAULT_BASE_URL,
            timeout_seconds=_float_env("FRIHET_HTTP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            remote_timeout_seconds=_float_env(
                "FRIHET_REMOTE_TIMEOUT_SECONDS", DEFAULT_REMOTE_TIMEOUT_SECONDS
            ),
            transport=transport,
            host=os.environ.get("FRIHET_MCP_HOST", "127.0.0.1"),
            port=_int_env("FRIHET_MCP_PORT", 8000),
            log_level=log_level,
        )
