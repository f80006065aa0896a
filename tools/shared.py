# =============================================================================
# tools/shared.py  —  Helpers shared by every tool module
# =============================================================================
#
# WHAT LIVES HERE:
#   1. Log helpers (request / status / response lines, color-coded)
#   2. Client resolution: which FrihetClient serves THIS tool call
#   3. Error mapping: FrihetApiError → friendly text raised as ToolError
#   4. Text formatting of records and paginated results
#
# CLIENT RESOLUTION:
#   - stdio server: one process-wide client, built from FRIHET_API_KEY.
#   - HTTP server: every request carries its own API key (Bearer token,
#     X-API-Key header or ?api_key=), so a fresh client is built per call.
#     Nothing about one caller's key can leak into another caller's call.
#
# ERRORS:
#   Tools never return an error dict.  They raise fastmcp's ToolError with a
#   readable message, which the MCP layer turns into an `isError` result.
# =============================================================================

import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

from fastmcp.exceptions import ToolError
from fastmcp.server.dependencies import get_http_request

from core.client import FrihetClient
from core.config import Settings
from core.errors import FrihetApiError
from core.models import ApiRecord, PaginatedResult

T = TypeVar("T")

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Failures
_RESET = "\033[0m"     # Reset to default terminal color


def log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, text: str) -> str:
    """Log the first line of a tool response in GREEN, then return it."""
    first_line = text.splitlines()[0] if text else ""
    logging.info(f"{_GREEN}  ← {tool_name} response: {first_line}{_RESET}")
    return text


# =============================================================================
# Client resolution
# =============================================================================
_settings: Optional[Settings] = None
_default_client: Optional[FrihetClient] = None


def configure(settings: Settings) -> None:
    """Install the settings used to build clients (called by main())."""
    global _settings, _default_client
    _settings = settings
    _default_client = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_default_client(client: Optional[FrihetClient]) -> None:
    """Override the process-wide client (tests, embedding)."""
    global _default_client
    _default_client = client


def default_client() -> FrihetClient:
    """The process-wide client for the stdio server, created on first use."""
    global _default_client
    if _default_client is None:
        _default_client = FrihetClient.from_settings(get_settings())
    return _default_client


def extract_api_key(
    headers: Mapping[str, str],
    query_params: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Find the caller's Frihet API key in an HTTP request.

    Checked in order: `Authorization: Bearer <key>`, `X-API-Key: <key>`,
    then the `api_key` query parameter.
    """
    lowered = {k.lower(): v for k, v in headers.items()}

    auth_header = lowered.get("authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[len("Bearer "):].strip()
        if token:
            return token

    x_api_key = lowered.get("x-api-key", "").strip()
    if x_api_key:
        return x_api_key

    param_key = (query_params or {}).get("api_key", "").strip()
    return param_key or None


def current_client() -> FrihetClient:
    """The client that should serve the tool call in progress."""
    try:
        request = get_http_request()
    except RuntimeError:
        # No HTTP request in flight: stdio or in-process use.
        return default_client()

    api_key = extract_api_key(request.headers, request.query_params)
    if not api_key:
        raise FrihetApiError(
            401,
            "authentication_required",
            "Frihet API key is required. Pass it via Authorization: Bearer <key>, "
            "X-API-Key header, or ?api_key= query param.",
        )
    settings = get_settings()
    return FrihetClient.from_settings(
        settings,
        api_key=api_key,
        timeout_seconds=settings.remote_timeout_seconds,
    )


# =============================================================================
# Error mapping
# =============================================================================
_FRIENDLY_MESSAGES: dict[int, str] = {
    400: "Bad request. Check your input parameters. / Solicitud incorrecta. Revisa los parametros.",
    401: "Authentication failed. Check your API key. / Autenticacion fallida. Revisa tu API key.",
    403: "Access denied. Your API key does not have permission for this action. / Acceso denegado.",
    404: "Resource not found. / Recurso no encontrado.",
    405: "Method not allowed. / Metodo no permitido.",
    413: "Request body too large (max 1MB). / Cuerpo de la solicitud demasiado grande (max 1MB).",
    429: "Rate limit exceeded. Try again later. / Limite de peticiones excedido. Intenta mas tarde.",
    500: "Internal server error. Try again later. / Error interno del servidor.",
}


def tool_error_message(error: BaseException) -> str:
    """Render any exception raised under a tool as user-facing text."""
    if isinstance(error, FrihetApiError):
        friendly = _FRIENDLY_MESSAGES.get(
            error.status_code,
            f"API error {error.status_code}: {error.message}",
        )
        details = f"\nDetails: {error.message}" if error.message else ""
        return f"Error: {friendly}{details}"

    message = str(error) or "An unexpected error occurred."
    return f"Error: {message}"


async def call_api(
    tool_name: str,
    operation: Callable[[FrihetClient], Awaitable[T]],
) -> T:
    """Run `operation` against the current client, mapping failures to ToolError."""
    try:
        return await operation(current_client())
    except Exception as error:
        message = tool_error_message(error)
        logging.warning(f"{_RED}  ✗ {tool_name} failed: {error!r}{_RESET}")
        raise ToolError(message) from error


# =============================================================================
# Formatting
# =============================================================================
def _dump(record: Any) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False)


def format_paginated_response(resource_name: str, payload: Mapping[str, Any]) -> str:
    """Render a page of records, with a hint for the next page if any."""
    page = PaginatedResult.from_payload(dict(payload))
    lines = [
        f"Found {page.total} {resource_name} "
        f"(showing {len(page.data)}, offset {page.offset}):",
        "",
    ]
    for item in page.data:
        lines.append(_dump(item))
        lines.append("---")

    if page.has_more:
        lines.append(
            f"More results available. Use offset={page.next_offset} to see the next page."
        )
    return "\n".join(lines)


def format_record(label: str, record: ApiRecord) -> str:
    return f"{label}:\n{_dump(record)}"


def compact(**fields: Any) -> dict[str, Any]:
    """Request body from tool arguments: None means "not provided"."""
    return {key: value for key, value in fields.items() if value is not None}
