# =============================================================================
# tools/clients.py  —  Client (customer) tools
# =============================================================================
#
# NAMING NOTE: "client" is overloaded here.  In this module it means a
# CUSTOMER record in Frihet; the HTTP client object is always passed in as
# `api` inside the lambdas to keep the two apart.
# =============================================================================

from typing import Annotated, Optional

from pydantic import Field

from tools.schemas import Address, PageLimit, PageOffset, RecordId
from tools.shared import (
    call_api,
    compact,
    format_paginated_response,
    format_record,
    log_request,
    log_response,
)


def _address_to_api(address: Optional[Address]):
    return address.to_api() if address is not None else None


def register_client_tools(mcp) -> None:
    @mcp.tool()
    async def list_clients(limit: PageLimit = None, offset: PageOffset = None) -> str:
        """List all clients (customers) with optional pagination.

        / Lista todos los clientes con paginacion opcional.
        """
        log_request("list_clients", limit=limit, offset=offset)
        result = await call_api(
            "list_clients",
            lambda api: api.list_clients(limit=limit, offset=offset),
        )
        return log_response("list_clients", format_paginated_response("clients", result))

    @mcp.tool()
    async def get_client(id: RecordId) -> str:
        """Get a single client by its ID, with contact details and address.

        / Obtiene un cliente por su ID.
        """
        log_request("get_client", id=id)
        result = await call_api("get_client", lambda api: api.get_client(id))
        return log_response("get_client", format_record("Client", result))

    @mcp.tool()
    async def create_client(
        name: Annotated[str, Field(description="Client/company name / Nombre del cliente o empresa")],
        email: Annotated[Optional[str], Field(description="Email address / Correo electronico")] = None,
        phone: Annotated[Optional[str], Field(description="Phone number / Telefono")] = None,
        tax_id: Annotated[Optional[str], Field(description="Tax ID (NIF/CIF/VAT) / NIF o CIF")] = None,
        address: Annotated[Optional[Address], Field(description="Postal address / Direccion")] = None,
    ) -> str:
        """Create a new client/customer. Requires at minimum a name.

        Clients are referenced when creating invoices and quotes.
        / Crea un nuevo cliente. Requiere como minimo un nombre.
        """
        log_request("create_client", name=name, email=email)
        body = compact(
            name=name,
            email=email,
            phone=phone,
            taxId=tax_id,
            address=_address_to_api(address),
        )
        result = await call_api("create_client", lambda api: api.create_client(body))
        return log_response("create_client", format_record("Client created", result))

    @mcp.tool()
    async def update_client(
        id: RecordId,
        name: Annotated[Optional[str], Field(description="Name / Nombre")] = None,
        email: Annotated[Optional[str], Field(description="Email / Correo")] = None,
        phone: Annotated[Optional[str], Field(description="Phone / Telefono")] = None,
        tax_id: Annotated[Optional[str], Field(description="Tax ID / NIF/CIF")] = None,
        address: Annotated[Optional[Address], Field(description="Address / Direccion")] = None,
    ) -> str:
        """Update an existing client. Only the provided fields are changed.

        / Actualiza un cliente existente.
        """
        log_request("update_client", id=id, name=name)
        body = compact(
            name=name,
            email=email,
            phone=phone,
            taxId=tax_id,
            address=_address_to_api(address),
        )
        result = await call_api("update_client", lambda api: api.update_client(id, body))
        return log_response("update_client", format_record("Client updated", result))

    @mcp.tool()
    async def delete_client(id: RecordId) -> str:
        """Permanently delete a client by its ID. This action cannot be undone.

        / Elimina permanentemente un cliente.
        """
        log_request("delete_client", id=id)
        await call_api("delete_client", lambda api: api.delete_client(id))
        return log_response(
            "delete_client",
            f"Client {id} deleted successfully. / Cliente {id} eliminado correctamente.",
        )
