# =============================================================================
# tools/invoices.py  —  Invoice tools (list, get, create, update, delete, search)
# =============================================================================
#
# Invoices are the only resource with a search tool: the agent usually knows
# WHO it is asking about ("what does Acme owe us?") long before it knows an
# invoice id.  search_invoices filters server-side by client name.
#
# Invoice numbers and totals are generated by Frihet.  We never compute them.
# =============================================================================

from typing import Annotated, Optional

from pydantic import Field

from tools.schemas import (
    InvoiceStatus,
    LineItem,
    PageLimit,
    PageOffset,
    RecordId,
    TaxRate,
    items_to_api,
)
from tools.shared import (
    call_api,
    compact,
    format_paginated_response,
    format_record,
    log_request,
    log_response,
    log_status,
)


def register_invoice_tools(mcp) -> None:
    @mcp.tool()
    async def list_invoices(limit: PageLimit = None, offset: PageOffset = None) -> str:
        """List all invoices with optional pagination, sorted by creation date.

        / Lista todas las facturas con paginacion opcional.

        Args:
            limit: Max results per page (1-100, default 50).
            offset: Number of results to skip.
        """
        log_request("list_invoices", limit=limit, offset=offset)
        result = await call_api(
            "list_invoices",
            lambda client: client.list_invoices(limit=limit, offset=offset),
        )
        log_status(f"Got {len(result['data'])} of {result.get('total', '?')} invoices")
        return log_response("list_invoices", format_paginated_response("invoices", result))

    @mcp.tool()
    async def get_invoice(id: RecordId) -> str:
        """Get a single invoice by its ID, including line items, totals and status.

        / Obtiene una factura por su ID.
        """
        log_request("get_invoice", id=id)
        result = await call_api("get_invoice", lambda client: client.get_invoice(id))
        return log_response("get_invoice", format_record("Invoice", result))

    @mcp.tool()
    async def create_invoice(
        client_name: Annotated[str, Field(description="Client/customer name / Nombre del cliente")],
        items: Annotated[
            list[LineItem],
            Field(min_length=1, description="Line items / Conceptos de la factura"),
        ],
        status: Optional[InvoiceStatus] = None,
        due_date: Annotated[
            Optional[str],
            Field(description="Due date in ISO 8601 format (YYYY-MM-DD) / Fecha de vencimiento"),
        ] = None,
        notes: Annotated[Optional[str], Field(description="Additional notes / Notas adicionales")] = None,
        tax_rate: TaxRate = None,
    ) -> str:
        """Create a new invoice. Requires a client name and at least one line item.

        The invoice number is generated automatically by Frihet.
        / Crea una nueva factura. El numero se genera automaticamente.

        Args:
            client_name: Client/customer name.
            items: Line items, each with description, quantity and unitPrice (EUR).
            status: draft (default), sent, paid, overdue or cancelled.
            due_date: Due date, YYYY-MM-DD.
            notes: Free-text notes printed on the invoice.
            tax_rate: Tax percentage, e.g. 21 for 21% IVA.
        """
        log_request("create_invoice", client_name=client_name, items=len(items), status=status)
        body = compact(
            clientName=client_name,
            items=items_to_api(items),
            status=status,
            dueDate=due_date,
            notes=notes,
            taxRate=tax_rate,
        )
        result = await call_api("create_invoice", lambda client: client.create_invoice(body))
        return log_response("create_invoice", format_record("Invoice created", result))

    @mcp.tool()
    async def update_invoice(
        id: RecordId,
        client_name: Annotated[Optional[str], Field(description="Client name / Nombre del cliente")] = None,
        items: Annotated[
            Optional[Annotated[list[LineItem], Field(min_length=1)]],
            Field(description="Line items / Conceptos"),
        ] = None,
        status: Optional[InvoiceStatus] = None,
        due_date: Annotated[Optional[str], Field(description="Due date (YYYY-MM-DD) / Fecha de vencimiento")] = None,
        notes: Annotated[Optional[str], Field(description="Notes / Notas")] = None,
        tax_rate: TaxRate = None,
    ) -> str:
        """Update an existing invoice. Only the provided fields are changed.

        / Actualiza una factura existente. Solo se modifican los campos proporcionados.
        """
        log_request("update_invoice", id=id, client_name=client_name, status=status)
        body = compact(
            clientName=client_name,
            items=items_to_api(items),
            status=status,
            dueDate=due_date,
            notes=notes,
            taxRate=tax_rate,
        )
        result = await call_api("update_invoice", lambda client: client.update_invoice(id, body))
        return log_response("update_invoice", format_record("Invoice updated", result))

    @mcp.tool()
    async def delete_invoice(id: RecordId) -> str:
        """Permanently delete an invoice by its ID. This action cannot be undone.

        / Elimina permanentemente una factura. Esta accion no se puede deshacer.
        """
        log_request("delete_invoice", id=id)
        await call_api("delete_invoice", lambda client: client.delete_invoice(id))
        return log_response(
            "delete_invoice",
            f"Invoice {id} deleted successfully. / Factura {id} eliminada correctamente.",
        )

    @mcp.tool()
    async def search_invoices(
        client_name: Annotated[str, Field(description="Client name to search for / Nombre del cliente a buscar")],
        limit: PageLimit = None,
        offset: PageOffset = None,
    ) -> str:
        """Search invoices by client name.

        WHEN TO CALL THIS: when the user asks about a specific customer's
        invoices and you don't have invoice ids yet.
        / Busca facturas por nombre de cliente.
        """
        log_request("search_invoices", client_name=client_name, limit=limit, offset=offset)
        result = await call_api(
            "search_invoices",
            lambda client: client.search_invoices(client_name, limit=limit, offset=offset),
        )
        log_status(f"Got {len(result['data'])} invoices for {client_name!r}")
        return log_response(
            "search_invoices",
            format_paginated_response(f'invoices matching "{client_name}"', result),
        )
