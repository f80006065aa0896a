# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the Frihet API)
# =============================================================================
#
# The Frihet API is schema-less from our point of view: an invoice, an
# expense or a webhook is just a JSON object that we pass through untouched.
# The only shapes this project actually relies on are the ENVELOPES around
# those records:
#
#   - PaginatedResult  →  what every list/search endpoint returns
#   - ApiError         →  what the API returns in the body of a failed call
#
# DESIGN PRINCIPLE — "Pass-through, don't reinterpret":
#   The engine never inspects or validates record fields.  Tax math, invoice
#   numbering and totals are the upstream service's job.  If a field exists
#   in a record, it reaches the agent exactly as the API sent it.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

# One invoice / expense / client / product / quote / webhook.
ApiRecord = dict[str, Any]


def _int_or(value: Any, default: int) -> int:
    # null, strings and bools in the envelope count as "not sent".
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


# -----------------------------------------------------------------------------
# PaginatedResult — the envelope of every list and search endpoint
# -----------------------------------------------------------------------------
# The client hands the decoded dict back unchanged; this dataclass is the
# typed view the formatter uses to render a page and compute "next offset".
# -----------------------------------------------------------------------------
@dataclass
class PaginatedResult:
    """One page of records plus the window that produced it."""

    data: list[ApiRecord] = field(default_factory=list)
    total: int = 0                     # Total matching records upstream
    limit: int = 0                     # Page size the API applied
    offset: int = 0                    # Records skipped before this page

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PaginatedResult":
        data = list(payload.get("data") or [])
        return cls(
            data=data,
            total=_int_or(payload.get("total"), len(data)),
            limit=_int_or(payload.get("limit"), len(data)),
            offset=_int_or(payload.get("offset"), 0),
        )

    @property
    def has_more(self) -> bool:
        return self.total > self.offset + len(self.data)

    @property
    def next_offset(self) -> int:
        return self.offset + len(self.data)


# -----------------------------------------------------------------------------
# ApiError — the wire shape of a failed call
# -----------------------------------------------------------------------------
# e.g. {"error": "not_found", "message": "no such expense"}
# When the body can't be parsed we synthesize one from the HTTP status line
# so callers always get a machine-readable code.
# -----------------------------------------------------------------------------
@dataclass
class ApiError:
    error: str
    message: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["ApiError"]:
        """Build from a decoded error body, or None if it isn't one."""
        if not isinstance(payload, dict):
            return None
        code = payload.get("error")
        if not isinstance(code, str) or not code:
            return None
        message = payload.get("message")
        return cls(error=code, message=message if isinstance(message, str) else None)

    @classmethod
    def from_status(cls, status_code: int, reason: str) -> "ApiError":
        return cls(error=f"http_{status_code}", message=reason or None)
