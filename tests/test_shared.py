from types import SimpleNamespace

import httpx
import pytest
from fastmcp.exceptions import ToolError

from core.config import Settings
from core.errors import FrihetApiError
from tools import shared
from tools.shared import (
    call_api,
    compact,
    extract_api_key,
    format_paginated_response,
    format_record,
    tool_error_message,
)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def test_paginated_response_with_more_results() -> None:
    text = format_paginated_response(
        "invoices",
        {"data": [{"id": "1"}, {"id": "2"}], "total": 5, "limit": 2, "offset": 0},
    )

    lines = text.splitlines()
    assert lines[0] == "Found 5 invoices (showing 2, offset 0):"
    assert text.count("---") == 2
    assert lines[-1] == "More results available. Use offset=2 to see the next page."


def test_paginated_response_last_page_has_no_hint() -> None:
    text = format_paginated_response(
        "clients", {"data": [{"id": "c"}], "total": 3, "limit": 2, "offset": 2}
    )

    assert text.startswith("Found 3 clients (showing 1, offset 2):")
    assert "More results available" not in text


def test_paginated_response_empty_page() -> None:
    text = format_paginated_response(
        "webhooks", {"data": [], "total": 0, "limit": 50, "offset": 0}
    )
    assert text == "Found 0 webhooks (showing 0, offset 0):\n"


def test_paginated_response_with_null_total() -> None:
    text = format_paginated_response(
        "invoices", {"data": [{"id": "1"}], "total": None, "limit": 50, "offset": 0}
    )

    assert text.startswith("Found 1 invoices (showing 1, offset 0):")
    assert "More results available" not in text


def test_format_record_keeps_unicode() -> None:
    text = format_record("Client", {"name": "Peña S.L."})
    assert text == 'Client:\n{\n  "name": "Peña S.L."\n}'


def test_compact_drops_only_none() -> None:
    assert compact(a=1, b=None, c=0, d="", e=False) == {"a": 1, "c": 0, "d": "", "e": False}


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "status, expected",
    [
        (400, "Bad request"),
        (401, "Authentication failed"),
        (403, "Access denied"),
        (404, "Resource not found"),
        (405, "Method not allowed"),
        (413, "Request body too large"),
        (429, "Rate limit exceeded"),
        (500, "Internal server error"),
    ],
)
def test_known_statuses_get_friendly_text(status, expected) -> None:
    message = tool_error_message(FrihetApiError(status, "code", "upstream says no"))

    assert message.startswith(f"Error: {expected}")
    assert message.endswith("\nDetails: upstream says no")


def test_unknown_status_falls_back_to_api_message() -> None:
    message = tool_error_message(FrihetApiError(502, "http_502", "Bad Gateway"))
    assert message == "Error: API error 502: Bad Gateway\nDetails: Bad Gateway"


def test_timeout_uses_fallback_text() -> None:
    message = tool_error_message(
        FrihetApiError(408, "request_timeout", "Request timed out after 30 seconds")
    )
    assert message.startswith("Error: API error 408: Request timed out after 30 seconds")


def test_non_api_errors_use_their_own_text() -> None:
    assert tool_error_message(RuntimeError("boom")) == "Error: boom"
    assert tool_error_message(RuntimeError()) == "Error: An unexpected error occurred."


@pytest.mark.asyncio
async def test_call_api_raises_tool_error(make_client) -> None:
    client, _ = make_client(lambda request: httpx.Response(404, json={"error": "not_found"}))
    shared.set_default_client(client)

    with pytest.raises(ToolError, match="Resource not found") as excinfo:
        await call_api("get_invoice", lambda api: api.get_invoice("missing"))

    assert isinstance(excinfo.value.__cause__, FrihetApiError)


@pytest.mark.asyncio
async def test_call_api_returns_result(make_client) -> None:
    client, _ = make_client(lambda request: httpx.Response(200, json={"id": "p1"}))
    shared.set_default_client(client)

    assert await call_api("get_product", lambda api: api.get_product("p1")) == {"id": "p1"}


# ---------------------------------------------------------------------------
# API key extraction and client resolution
# ---------------------------------------------------------------------------


def test_bearer_token_wins() -> None:
    headers = {"Authorization": "Bearer fri_bearer", "X-API-Key": "fri_header"}
    assert extract_api_key(headers, {"api_key": "fri_query"}) == "fri_bearer"


def test_x_api_key_header_is_case_insensitive() -> None:
    assert extract_api_key({"x-api-key": "fri_header"}, {"api_key": "fri_query"}) == "fri_header"


def test_query_param_is_last_resort() -> None:
    headers = {"Authorization": "Basic dXNlcjpwYXNz"}
    assert extract_api_key(headers, {"api_key": "fri_query"}) == "fri_query"


def test_no_key_anywhere() -> None:
    assert extract_api_key({"Authorization": "Bearer "}) is None
    assert extract_api_key({}, {}) is None


def _fake_request(headers=None, query_params=None):
    return SimpleNamespace(headers=headers or {}, query_params=query_params or {})


def test_stdio_uses_one_process_wide_client(monkeypatch) -> None:
    def no_request():
        raise RuntimeError("No active HTTP request found.")

    monkeypatch.setattr(shared, "get_http_request", no_request)
    shared.configure(Settings(api_key="fri_local", timeout_seconds=30.0))

    first = shared.current_client()
    assert first is shared.current_client()
    assert first.timeout_seconds == 30.0


def test_http_request_gets_its_own_client(monkeypatch) -> None:
    monkeypatch.setattr(
        shared,
        "get_http_request",
        lambda: _fake_request({"Authorization": "Bearer fri_remote"}),
    )
    shared.configure(
        Settings(api_key=None, base_url="https://staging.frihet.io/v1", remote_timeout_seconds=25.0)
    )

    first = shared.current_client()
    second = shared.current_client()

    assert first is not second
    assert first._api_key == "fri_remote"
    assert first.timeout_seconds == 25.0
    assert first.base_url == "https://staging.frihet.io/v1"


def test_http_request_without_key_is_rejected(monkeypatch) -> None:
    monkeypatch.setattr(shared, "get_http_request", lambda: _fake_request())
    shared.configure(Settings())

    with pytest.raises(FrihetApiError) as excinfo:
        shared.current_client()

    assert excinfo.value.status_code == 401
    assert excinfo.value.error_code == "authentication_required"
