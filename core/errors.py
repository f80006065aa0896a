# =============================================================================
# core/errors.py  —  The one error type the request engine raises
# =============================================================================
#
# Every failure the Frihet API (or our own deadline) can produce ends up as a
# FrihetApiError with three fields:
#
#   status_code  →  HTTP status, or 408 for our own timeout
#   error_code   →  machine-readable code ("not_found", "request_timeout",
#                   "rate_limit_exceeded", "invalid_response", "http_502"...)
#   message      →  human-readable text
#
# What is NOT a FrihetApiError: network failures (DNS, refused connection,
# TLS).  Those propagate as the raw httpx exception, so a caller can still
# tell "the server said no" from "we never reached the server".
# =============================================================================

from typing import Optional

REQUEST_TIMEOUT = "request_timeout"
RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
INVALID_RESPONSE = "invalid_response"


class FrihetApiError(Exception):
    """A normalized failure from the Frihet API or from the request engine."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message or error_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"FrihetApiError(status_code={self.status_code}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )
