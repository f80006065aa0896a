# =============================================================================
# tools/webhooks.py  —  Webhook subscription tools
# =============================================================================
#
# Webhooks let other systems hear about Frihet events ("invoice.paid",
# "expense.created", ...).  The signing secret is passed through to the API
# as-is and is never logged.
# =============================================================================

from typing import Annotated, Optional

from pydantic import Field

from tools.schemas import PageLimit, PageOffset, RecordId, WebhookUrl
from tools.shared import (
    call_api,
    compact,
    format_paginated_response,
    format_record,
    log_request,
    log_response,
)

EventList = Annotated[
    list[str],
    Field(
        min_length=1,
        description="Events to subscribe to (e.g. ['invoice.created', 'invoice.paid']) / Eventos a suscribir",
    ),
]


def register_webhook_tools(mcp) -> None:
    @mcp.tool()
    async def list_webhooks(limit: PageLimit = None, offset: PageOffset = None) -> str:
        """List all configured webhooks with optional pagination.

        / Lista todos los webhooks configurados.
        """
        log_request("list_webhooks", limit=limit, offset=offset)
        result = await call_api(
            "list_webhooks",
            lambda client: client.list_webhooks(limit=limit, offset=offset),
        )
        return log_response("list_webhooks", format_paginated_response("webhooks", result))

    @mcp.tool()
    async def get_webhook(id: RecordId) -> str:
        """Get a single webhook by its ID. / Obtiene un webhook por su ID."""
        log_request("get_webhook", id=id)
        result = await call_api("get_webhook", lambda client: client.get_webhook(id))
        return log_response("get_webhook", format_record("Webhook", result))

    @mcp.tool()
    async def create_webhook(
        url: Annotated[WebhookUrl, Field(description="Webhook endpoint URL / URL del endpoint del webhook")],
        events: EventList,
        active: Annotated[
            Optional[bool],
            Field(description="Whether the webhook is active (default: true) / Si el webhook esta activo"),
        ] = None,
        secret: Annotated[
            Optional[str],
            Field(description="Signing secret for payload verification / Secreto para verificar las notificaciones"),
        ] = None,
    ) -> str:
        """Register a new webhook endpoint.

        You must give the URL that receives notifications and the events to
        subscribe to (e.g. 'invoice.created', 'invoice.paid', 'expense.created').
        / Registra un nuevo endpoint de webhook.
        """
        log_request("create_webhook", url=url, events=events, active=active)
        body = compact(url=url, events=events, active=active, secret=secret)
        result = await call_api("create_webhook", lambda client: client.create_webhook(body))
        return log_response("create_webhook", format_record("Webhook created", result))

    @mcp.tool()
    async def update_webhook(
        id: RecordId,
        url: Annotated[Optional[WebhookUrl], Field(description="Endpoint URL / URL")] = None,
        events: Annotated[
            Optional[Annotated[list[str], Field(min_length=1)]],
            Field(description="Events / Eventos"),
        ] = None,
        active: Annotated[Optional[bool], Field(description="Active / Activo")] = None,
        secret: Annotated[Optional[str], Field(description="Signing secret / Secreto")] = None,
    ) -> str:
        """Update an existing webhook. Only the provided fields are changed.

        / Actualiza un webhook existente.
        """
        log_request("update_webhook", id=id, url=url, events=events, active=active)
        body = compact(url=url, events=events, active=active, secret=secret)
        result = await call_api("update_webhook", lambda client: client.update_webhook(id, body))
        return log_response("update_webhook", format_record("Webhook updated", result))

    @mcp.tool()
    async def delete_webhook(id: RecordId) -> str:
        """Permanently delete a webhook by its ID. This action cannot be undone.

        / Elimina permanentemente un webhook.
        """
        log_request("delete_webhook", id=id)
        await call_api("delete_webhook", lambda client: client.delete_webhook(id))
        return log_response(
            "delete_webhook",
            f"Webhook {id} deleted successfully. / Webhook {id} eliminado correctamente.",
        )
