# =============================================================================
# tools/quotes.py  —  Quote (estimate) tools
# =============================================================================
#
# Quotes share the invoice line-item shape, so a quote the customer accepts
# can be turned into an invoice by the agent with the same items.
# =============================================================================

from typing import Annotated, Optional

from pydantic import Field

from tools.schemas import (
    LineItem,
    PageLimit,
    PageOffset,
    QuoteStatus,
    RecordId,
    items_to_api,
)
from tools.shared import (
    call_api,
    compact,
    format_paginated_response,
    format_record,
    log_request,
    log_response,
)


def register_quote_tools(mcp) -> None:
    @mcp.tool()
    async def list_quotes(limit: PageLimit = None, offset: PageOffset = None) -> str:
        """List all quotes/estimates with optional pagination.

        / Lista todos los presupuestos.
        """
        log_request("list_quotes", limit=limit, offset=offset)
        result = await call_api(
            "list_quotes",
            lambda client: client.list_quotes(limit=limit, offset=offset),
        )
        return log_response("list_quotes", format_paginated_response("quotes", result))

    @mcp.tool()
    async def get_quote(id: RecordId) -> str:
        """Get a single quote by its ID. / Obtiene un presupuesto por su ID."""
        log_request("get_quote", id=id)
        result = await call_api("get_quote", lambda client: client.get_quote(id))
        return log_response("get_quote", format_record("Quote", result))

    @mcp.tool()
    async def create_quote(
        client_name: Annotated[str, Field(description="Client name / Nombre del cliente")],
        items: Annotated[
            list[LineItem],
            Field(min_length=1, description="Line items / Conceptos del presupuesto"),
        ],
        valid_until: Annotated[
            Optional[str],
            Field(description="Expiry date in ISO 8601 (YYYY-MM-DD) / Fecha de validez"),
        ] = None,
        notes: Annotated[Optional[str], Field(description="Additional notes / Notas adicionales")] = None,
        status: Optional[QuoteStatus] = None,
    ) -> str:
        """Create a new quote/estimate for a client.

        Requires a client name and at least one line item.  Quotes can later
        be converted to invoices.
        / Crea un nuevo presupuesto para un cliente.

        Args:
            client_name: Client name.
            items: Line items, each with description, quantity and unitPrice (EUR).
            valid_until: Expiry date, YYYY-MM-DD.
            notes: Free-text notes.
            status: draft (default), sent, accepted, rejected or expired.
        """
        log_request("create_quote", client_name=client_name, items=len(items), status=status)
        body = compact(
            clientName=client_name,
            items=items_to_api(items),
            validUntil=valid_until,
            notes=notes,
            status=status,
        )
        result = await call_api("create_quote", lambda client: client.create_quote(body))
        return log_response("create_quote", format_record("Quote created", result))

    @mcp.tool()
    async def update_quote(
        id: RecordId,
        client_name: Annotated[Optional[str], Field(description="Client name / Nombre del cliente")] = None,
        items: Annotated[
            Optional[Annotated[list[LineItem], Field(min_length=1)]],
            Field(description="Line items / Conceptos"),
        ] = None,
        valid_until: Annotated[Optional[str], Field(description="Expiry date / Fecha de validez")] = None,
        notes: Annotated[Optional[str], Field(description="Notes / Notas")] = None,
        status: Optional[QuoteStatus] = None,
    ) -> str:
        """Update an existing quote. Only the provided fields are changed.

        / Actualiza un presupuesto existente.
        """
        log_request("update_quote", id=id, status=status)
        body = compact(
            clientName=client_name,
            items=items_to_api(items),
            validUntil=valid_until,
            notes=notes,
            status=status,
        )
        result = await call_api("update_quote", lambda client: client.update_quote(id, body))
        return log_response("update_quote", format_record("Quote updated", result))

    @mcp.tool()
    async def delete_quote(id: RecordId) -> str:
        """Permanently delete a quote by its ID. This action cannot be undone.

        / Elimina permanentemente un presupuesto.
        """
        log_request("delete_quote", id=id)
        await call_api("delete_quote", lambda client: client.delete_quote(id))
        return log_response(
            "delete_quote",
            f"Quote {id} deleted successfully. / Presupuesto {id} eliminado correctamente.",
        )
