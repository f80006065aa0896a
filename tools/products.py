# =============================================================================
# tools/products.py  —  Product / service catalog tools
# =============================================================================

from typing import Annotated, Optional

from pydantic import Field

from tools.schemas import PageLimit, PageOffset, RecordId, TaxRate
from tools.shared import (
    call_api,
    compact,
    format_paginated_response,
    format_record,
    log_request,
    log_response,
)


def register_product_tools(mcp) -> None:
    @mcp.tool()
    async def list_products(limit: PageLimit = None, offset: PageOffset = None) -> str:
        """List all products and services with optional pagination.

        / Lista todos los productos y servicios.
        """
        log_request("list_products", limit=limit, offset=offset)
        result = await call_api(
            "list_products",
            lambda client: client.list_products(limit=limit, offset=offset),
        )
        return log_response("list_products", format_paginated_response("products", result))

    @mcp.tool()
    async def get_product(id: RecordId) -> str:
        """Get a single product by its ID. / Obtiene un producto por su ID."""
        log_request("get_product", id=id)
        result = await call_api("get_product", lambda client: client.get_product(id))
        return log_response("get_product", format_record("Product", result))

    @mcp.tool()
    async def create_product(
        name: Annotated[str, Field(description="Product/service name / Nombre del producto o servicio")],
        unit_price: Annotated[float, Field(description="Unit price in EUR / Precio unitario en EUR")],
        description: Annotated[Optional[str], Field(description="Product description / Descripcion")] = None,
        unit: Annotated[
            Optional[str],
            Field(description="Unit of measurement (e.g. 'hour', 'unit', 'kg') / Unidad de medida"),
        ] = None,
        tax_rate: TaxRate = None,
        sku: Annotated[Optional[str], Field(description="SKU / Reference code / Codigo de referencia")] = None,
    ) -> str:
        """Create a new product or service. Requires a name and a unit price.

        Products can be referenced when creating invoices and quotes.
        / Crea un nuevo producto o servicio. Requiere nombre y precio unitario.
        """
        log_request("create_product", name=name, unit_price=unit_price)
        body = compact(
            name=name,
            unitPrice=unit_price,
            description=description,
            unit=unit,
            taxRate=tax_rate,
            sku=sku,
        )
        result = await call_api("create_product", lambda client: client.create_product(body))
        return log_response("create_product", format_record("Product created", result))

    @mcp.tool()
    async def update_product(
        id: RecordId,
        name: Annotated[Optional[str], Field(description="Name / Nombre")] = None,
        unit_price: Annotated[Optional[float], Field(description="Unit price / Precio unitario")] = None,
        description: Annotated[Optional[str], Field(description="Description / Descripcion")] = None,
        unit: Annotated[Optional[str], Field(description="Unit / Unidad")] = None,
        tax_rate: TaxRate = None,
        sku: Annotated[Optional[str], Field(description="SKU / Referencia")] = None,
    ) -> str:
        """Update an existing product. Only the provided fields are changed.

        / Actualiza un producto existente.
        """
        log_request("update_product", id=id, name=name, unit_price=unit_price)
        body = compact(
            name=name,
            unitPrice=unit_price,
            description=description,
            unit=unit,
            taxRate=tax_rate,
            sku=sku,
        )
        result = await call_api("update_product", lambda client: client.update_product(id, body))
        return log_response("update_product", format_record("Product updated", result))

    @mcp.tool()
    async def delete_product(id: RecordId) -> str:
        """Permanently delete a product by its ID. This action cannot be undone.

        / Elimina permanentemente un producto.
        """
        log_request("delete_product", id=id)
        await call_api("delete_product", lambda client: client.delete_product(id))
        return log_response(
            "delete_product",
            f"Product {id} deleted successfully. / Producto {id} eliminado correctamente.",
        )
