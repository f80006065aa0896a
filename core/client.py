# =============================================================================
# core/client.py  —  Frihet ERP API client (request engine + resource facade)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps the Frihet REST API (https://api.frihet.io/v1) in one async class.
#   Every public method is a one-liner on top of a single routine,
#   FrihetClient.request(), which owns ALL the interesting behavior:
#
#     1. Build the URL (base + path + query, None values dropped)
#     2. Attach the X-API-Key / Content-Type / Accept headers
#     3. Send under a hard deadline (asyncio.wait_for → abort on expiry)
#     4. 429 → wait (Retry-After or exponential backoff), retry, max 3 times
#     5. Non-2xx → FrihetApiError built from the API's error body
#     6. 204 → None
#     7. 2xx → decoded JSON, which must not be empty
#
# THE RETRY IS RECURSIVE, NOT A LOOP:
#   request(..., retry_count=N) re-invokes itself with retry_count=N+1.
#   Each attempt carries its own counter and gets a fresh deadline, so an
#   attempt can be reasoned about (and tested) in isolation.
#
# CONCURRENCY:
#   Each call opens its own httpx.AsyncClient.  The only thing concurrent
#   calls share is the (api_key, base_url, timeout) triple, which never
#   changes after __init__.  No locks needed.
#
# FAILURE SHAPES (callers can tell them apart):
#   - FrihetApiError          → the API answered, or our deadline expired
#   - httpx.TransportError    → we never got an answer (DNS, refused, TLS)
# =============================================================================

import asyncio
import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

from core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, Settings
from core.errors import (
    INVALID_RESPONSE,
    RATE_LIMIT_EXCEEDED,
    REQUEST_TIMEOUT,
    FrihetApiError,
)
from core.models import ApiError, ApiRecord

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 1.0      # 1s, 2s, 4s for retries 0, 1, 2
MAX_RETRY_DELAY_SECONDS = 60.0         # Upper bound on any single wait

QueryParams = Mapping[str, Any]


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Retry-After in seconds, or None if missing or not a number.

    The HTTP-date form of Retry-After is not used by the Frihet API; it is
    treated like a missing header.
    """
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def _encode_id(record_id: str) -> str:
    return quote(str(record_id), safe="")


class FrihetClient:
    """Async client for the Frihet ERP REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = MAX_RETRIES,
        max_retry_delay: float = MAX_RETRY_DELAY_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ValueError(
                "FRIHET_API_KEY is required. Set it as an environment variable "
                "or pass it to the constructor."
            )
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._max_retry_delay = max_retry_delay
        self._transport = transport
        # Indirection so tests can observe backoff without actually waiting.
        self._sleep = asyncio.sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> "FrihetClient":
        return cls(
            api_key or settings.api_key,
            settings.base_url,
            timeout_seconds=timeout_seconds or settings.timeout_seconds,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    # ------------------------------------------------------------------ HTTP

    def _headers(self) -> dict[str, str]:
        return {
            API_KEY_HEADER: self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @staticmethod
    def _query_params(query: Optional[QueryParams]) -> Optional[dict[str, str]]:
        if not query:
            return None
        params: dict[str, str] = {}
        for key, value in query.items():
            if value is None:
                continue
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            else:
                params[key] = str(value)
        return params or None

    def _retry_delay(self, response: httpx.Response, retry_count: int) -> float:
        backoff = DEFAULT_RETRY_DELAY_SECONDS * (2 ** retry_count)
        retry_after = _parse_retry_after(response.headers.get("Retry-After"))
        delay = backoff if retry_after is None else max(retry_after, backoff)
        return min(delay, self._max_retry_delay)

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, str]],
        content: Optional[bytes],
    ) -> httpx.Response:
        # timeout=None: the only deadline is the asyncio.wait_for in request().
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as http:
            return await http.request(
                method,
                url,
                params=params,
                headers=self._headers(),
                content=content,
            )

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[QueryParams] = None,
        retry_count: int = 0,
    ) -> Any:
        """Issue one logical API call and return the decoded JSON body.

        Returns None for 204 responses.  Raises FrihetApiError for timeouts,
        exhausted rate limiting, non-2xx responses and empty/undecodable
        success bodies.  Transport failures propagate unchanged.
        """
        url = f"{self._base_url}{path}"
        params = self._query_params(query)
        content = json.dumps(body).encode("utf-8") if body is not None else None

        logger.debug("%s %s attempt=%d", method, url, retry_count + 1)
        try:
            response = await asyncio.wait_for(
                self._send(method, url, params, content),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise FrihetApiError(
                408,
                REQUEST_TIMEOUT,
                f"Request timed out after {self._timeout_seconds:g} seconds",
            ) from None

        # --- Rate limiting: bounded, self-recursive retry ---
        if response.status_code == 429:
            if retry_count >= self._max_retries:
                raise FrihetApiError(
                    429,
                    RATE_LIMIT_EXCEEDED,
                    "Rate limit exceeded after multiple retries. Please try again later.",
                )
            delay = self._retry_delay(response, retry_count)
            logger.warning(
                "Rate limited on %s %s, retry %d/%d in %.1fs",
                method, path, retry_count + 1, self._max_retries, delay,
            )
            await self._sleep(delay)
            return await self.request(method, path, body, query, retry_count + 1)

        # --- Error responses ---
        if not response.is_success:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            api_error = ApiError.from_payload(payload) or ApiError.from_status(
                response.status_code, response.reason_phrase
            )
            raise FrihetApiError(
                response.status_code,
                api_error.error,
                api_error.message or api_error.error,
            )

        # --- 204 No Content (DELETE) ---
        if response.status_code == 204:
            return None

        try:
            data = response.json()
        except ValueError:
            data = None
        if data is None:
            raise FrihetApiError(
                response.status_code,
                INVALID_RESPONSE,
                "API returned empty response",
            )
        return data

    async def request_paginated(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[QueryParams] = None,
    ) -> dict[str, Any]:
        """Like request(), but the body must be a {data: [...], ...} envelope."""
        result = await self.request(method, path, body, query)
        if not isinstance(result, dict) or not isinstance(result.get("data"), list):
            raise FrihetApiError(
                200,
                INVALID_RESPONSE,
                "API returned invalid paginated response",
            )
        return result

    # ---------------------------------------------------------------- Invoices

    async def list_invoices(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET", "/invoices", query={"limit": limit, "offset": offset}
        )

    async def get_invoice(self, invoice_id: str) -> ApiRecord:
        return await self.request("GET", f"/invoices/{_encode_id(invoice_id)}")

    async def create_invoice(self, data: ApiRecord) -> ApiRecord:
        return await self.request("POST", "/invoices", data)

    async def update_invoice(self, invoice_id: str, data: ApiRecord) -> ApiRecord:
        return await self.request("PUT", f"/invoices/{_encode_id(invoice_id)}", data)

    async def delete_invoice(self, invoice_id: str) -> None:
        await self.request("DELETE", f"/invoices/{_encode_id(invoice_id)}")

    async def search_invoices(
        self,
        client_name: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET",
            "/invoices",
            query={"clientName": client_name, "limit": limit, "offset": offset},
        )

    # ---------------------------------------------------------------- Expenses

    async def list_expenses(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET", "/expenses", query={"limit": limit, "offset": offset}
        )

    async def get_expense(self, expense_id: str) -> ApiRecord:
        return await self.request("GET", f"/expenses/{_encode_id(expense_id)}")

    async def create_expense(self, data: ApiRecord) -> ApiRecord:
        return await self.request("POST", "/expenses", data)

    async def update_expense(self, expense_id: str, data: ApiRecord) -> ApiRecord:
        return await self.request("PUT", f"/expenses/{_encode_id(expense_id)}", data)

    async def delete_expense(self, expense_id: str) -> None:
        await self.request("DELETE", f"/expenses/{_encode_id(expense_id)}")

    # ----------------------------------------------------------------- Clients

    async def list_clients(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET", "/clients", query={"limit": limit, "offset": offset}
        )

    async def get_client(self, client_id: str) -> ApiRecord:
        return await self.request("GET", f"/clients/{_encode_id(client_id)}")

    async def create_client(self, data: ApiRecord) -> ApiRecord:
        return await self.request("POST", "/clients", data)

    async def update_client(self, client_id: str, data: ApiRecord) -> ApiRecord:
        return await self.request("PUT", f"/clients/{_encode_id(client_id)}", data)

    async def delete_client(self, client_id: str) -> None:
        await self.request("DELETE", f"/clients/{_encode_id(client_id)}")

    # ---------------------------------------------------------------- Products

    async def list_products(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET", "/products", query={"limit": limit, "offset": offset}
        )

    async def get_product(self, product_id: str) -> ApiRecord:
        return await self.request("GET", f"/products/{_encode_id(product_id)}")

    async def create_product(self, data: ApiRecord) -> ApiRecord:
        return await self.request("POST", "/products", data)

    async def update_product(self, product_id: str, data: ApiRecord) -> ApiRecord:
        return await self.request("PUT", f"/products/{_encode_id(product_id)}", data)

    async def delete_product(self, product_id: str) -> None:
        await self.request("DELETE", f"/products/{_encode_id(product_id)}")

    # ------------------------------------------------------------------ Quotes

    async def list_quotes(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET", "/quotes", query={"limit": limit, "offset": offset}
        )

    async def get_quote(self, quote_id: str) -> ApiRecord:
        return await self.request("GET", f"/quotes/{_encode_id(quote_id)}")

    async def create_quote(self, data: ApiRecord) -> ApiRecord:
        return await self.request("POST", "/quotes", data)

    async def update_quote(self, quote_id: str, data: ApiRecord) -> ApiRecord:
        return await self.request("PUT", f"/quotes/{_encode_id(quote_id)}", data)

    async def delete_quote(self, quote_id: str) -> None:
        await self.request("DELETE", f"/quotes/{_encode_id(quote_id)}")

    # ---------------------------------------------------------------- Webhooks

    async def list_webhooks(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.request_paginated(
            "GET", "/webhooks", query={"limit": limit, "offset": offset}
        )

    async def get_webhook(self, webhook_id: str) -> ApiRecord:
        return await self.request("GET", f"/webhooks/{_encode_id(webhook_id)}")

    async def create_webhook(self, data: ApiRecord) -> ApiRecord:
        return await self.request("POST", "/webhooks", data)

    async def update_webhook(self, webhook_id: str, data: ApiRecord) -> ApiRecord:
        return await self.request("PUT", f"/webhooks/{_encode_id(webhook_id)}", data)

    async def delete_webhook(self, webhook_id: str) -> None:
        await self.request("DELETE", f"/webhooks/{_encode_id(webhook_id)}")
