# =============================================================================
# tools/schemas.py  —  Argument types shared by the tool signatures
# =============================================================================
#
# FastMCP turns type hints into the JSON schema the agent sees, and validates
# incoming arguments against it before our code runs.  Keeping the common
# pieces here means every list tool advertises the same paging limits and
# every line item has the same shape.
#
# These are DESCRIPTIVE constraints only (ranges, enums).  Business rules
# (totals, numbering, tax math) stay with the Frihet API.
# =============================================================================

from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PageLimit = Annotated[
    Optional[Annotated[int, Field(ge=1, le=100)]],
    Field(description="Max results per page (1-100, default 50) / Resultados por pagina"),
]
PageOffset = Annotated[
    Optional[Annotated[int, Field(ge=0)]],
    Field(description="Number of results to skip / Resultados a saltar"),
]
TaxRate = Annotated[
    Optional[Annotated[float, Field(ge=0, le=100)]],
    Field(description="Tax rate percentage (e.g. 21 for 21% IVA) / Porcentaje de impuesto"),
]
RecordId = Annotated[str, Field(min_length=1)]

InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]
QuoteStatus = Literal["draft", "sent", "accepted", "rejected", "expired"]

WebhookUrl = Annotated[str, Field(pattern=r"^https?://\S+$")]


class _CamelModel(BaseModel):
    # Accept both snake_case and the API's camelCase; dump as camelCase.
    model_config = ConfigDict(populate_by_name=True)

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LineItem(_CamelModel):
    """One line of an invoice or quote."""

    description: str = Field(description="Description of the line item / Descripcion del concepto")
    quantity: float = Field(description="Quantity / Cantidad")
    unit_price: float = Field(
        alias="unitPrice",
        description="Unit price in EUR / Precio unitario en EUR",
    )


class Address(_CamelModel):
    street: Optional[str] = Field(default=None, description="Street address / Direccion")
    city: Optional[str] = Field(default=None, description="City / Ciudad")
    postal_code: Optional[str] = Field(
        default=None, alias="postalCode", description="Postal code / Codigo postal"
    )
    country: Optional[str] = Field(default=None, description="Country (ISO code) / Pais")


def items_to_api(items: Optional[list[LineItem]]) -> Optional[list[dict[str, Any]]]:
    if items is None:
        return None
    return [item.to_api() for item in items]
