# =============================================================================
# tools/expenses.py  —  Expense tools
# =============================================================================

from typing import Annotated, Optional

from pydantic import Field

from tools.schemas import PageLimit, PageOffset, RecordId
from tools.shared import (
    call_api,
    compact,
    format_paginated_response,
    format_record,
    log_request,
    log_response,
)


def register_expense_tools(mcp) -> None:
    @mcp.tool()
    async def list_expenses(limit: PageLimit = None, offset: PageOffset = None) -> str:
        """List all expenses with optional pagination.

        / Lista todos los gastos con paginacion opcional.
        """
        log_request("list_expenses", limit=limit, offset=offset)
        result = await call_api(
            "list_expenses",
            lambda client: client.list_expenses(limit=limit, offset=offset),
        )
        return log_response("list_expenses", format_paginated_response("expenses", result))

    @mcp.tool()
    async def get_expense(id: RecordId) -> str:
        """Get a single expense by its ID. / Obtiene un gasto por su ID."""
        log_request("get_expense", id=id)
        result = await call_api("get_expense", lambda client: client.get_expense(id))
        return log_response("get_expense", format_record("Expense", result))

    @mcp.tool()
    async def create_expense(
        description: Annotated[str, Field(description="Expense description / Descripcion del gasto")],
        amount: Annotated[float, Field(description="Amount in EUR / Importe en EUR")],
        category: Annotated[
            Optional[str],
            Field(description="Expense category (e.g. 'office', 'travel', 'software') / Categoria"),
        ] = None,
        date: Annotated[
            Optional[str],
            Field(description="Expense date in ISO 8601 (YYYY-MM-DD) / Fecha del gasto"),
        ] = None,
        vendor: Annotated[Optional[str], Field(description="Vendor/supplier name / Nombre del proveedor")] = None,
        tax_deductible: Annotated[
            Optional[bool],
            Field(description="Whether the expense is tax deductible / Si el gasto es deducible fiscalmente"),
        ] = None,
    ) -> str:
        """Record a new expense. Requires a description and an amount.

        Useful for tracking business costs, deductible expenses and vendor
        payments.
        / Registra un nuevo gasto. Requiere descripcion e importe.
        """
        log_request("create_expense", description=description, amount=amount, vendor=vendor)
        body = compact(
            description=description,
            amount=amount,
            category=category,
            date=date,
            vendor=vendor,
            taxDeductible=tax_deductible,
        )
        result = await call_api("create_expense", lambda client: client.create_expense(body))
        return log_response("create_expense", format_record("Expense created", result))

    @mcp.tool()
    async def update_expense(
        id: RecordId,
        description: Annotated[Optional[str], Field(description="Description / Descripcion")] = None,
        amount: Annotated[Optional[float], Field(description="Amount in EUR / Importe")] = None,
        category: Annotated[Optional[str], Field(description="Category / Categoria")] = None,
        date: Annotated[Optional[str], Field(description="Date (YYYY-MM-DD) / Fecha")] = None,
        vendor: Annotated[Optional[str], Field(description="Vendor / Proveedor")] = None,
        tax_deductible: Annotated[Optional[bool], Field(description="Tax deductible / Deducible")] = None,
    ) -> str:
        """Update an existing expense. Only the provided fields are changed.

        / Actualiza un gasto existente.
        """
        log_request("update_expense", id=id, amount=amount)
        body = compact(
            description=description,
            amount=amount,
            category=category,
            date=date,
            vendor=vendor,
            taxDeductible=tax_deductible,
        )
        result = await call_api("update_expense", lambda client: client.update_expense(id, body))
        return log_response("update_expense", format_record("Expense updated", result))

    @mcp.tool()
    async def delete_expense(id: RecordId) -> str:
        """Permanently delete an expense by its ID. This action cannot be undone.

        / Elimina permanentemente un gasto.
        """
        log_request("delete_expense", id=id)
        await call_api("delete_expense", lambda client: client.delete_expense(id))
        return log_response(
            "delete_expense",
            f"Expense {id} deleted successfully. / Gasto {id} eliminado correctamente.",
        )
