# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (entry point)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the "frihet-erp" FastMCP server, registers all 31 tools (one
#   register_* function per resource module), and runs it over the transport
#   chosen by FRIHET_MCP_TRANSPORT:
#
#     stdio  →  local process I/O (Claude Desktop, Cursor, the agent/ demo)
#     http   →  streamable HTTP behind uvicorn, per-request API keys
#
# TOOL NAMING CONVENTIONS:
#   - list_*   → paginated read (idempotent, safe to retry)
#   - get_*    → single-record read (idempotent, safe to retry)
#   - search_* → filtered paginated read (idempotent, safe to retry)
#   - create_* / update_* / delete_*  → writes; NOT safe to blindly retry
#
# RUNNING THIS SERVER:
#     a) frihet-mcp                   (console script, reads env / .env)
#     b) python -m tools.mcp_server
#     c) FRIHET_MCP_TRANSPORT=http frihet-mcp   → http://127.0.0.1:8000/mcp
# =============================================================================

import logging
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from core.config import Settings
from tools.clients import register_client_tools
from tools.expenses import register_expense_tools
from tools.http_app import MCP_PATH, create_http_app
from tools.invoices import register_invoice_tools
from tools.products import register_product_tools
from tools.quotes import register_quote_tools
from tools.shared import configure
from tools.webhooks import register_webhook_tools

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because in stdio mode the MCP server talks to its client
# over STDOUT.  Anything else printed to stdout would corrupt the protocol
# stream.
# =============================================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

SERVER_NAME = "frihet-erp"
SERVER_VERSION = "1.0.0"
TOOL_COUNT = 31
RESOURCES = ["invoices", "expenses", "clients", "products", "quotes", "webhooks"]

_MISSING_KEY_HELP = (
    "Error: FRIHET_API_KEY environment variable is required.\n"
    "Set it in your MCP configuration or export it in your shell.\n\n"
    "Example:\n"
    '  export FRIHET_API_KEY="fri_your_api_key_here"\n'
)


def server_info() -> dict:
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "transport": "streamable-http",
        "description": "Frihet ERP MCP Server",
        "tools": TOOL_COUNT,
        "resources": RESOURCES,
        "auth": {
            "methods": [
                "Authorization: Bearer <api_key>",
                "X-API-Key: <api_key>",
                "?api_key=<api_key>",
            ],
        },
        "endpoints": {"mcp": MCP_PATH, "health": "/health"},
    }


def create_server() -> FastMCP:
    """Create the FastMCP server with every Frihet tool registered."""
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Tools for the Frihet ERP: invoices, expenses, clients, products, "
            "quotes and webhooks. List tools are paginated; follow the "
            "'Use offset=...' hint to read further pages."
        ),
    )

    register_invoice_tools(server)
    register_expense_tools(server)
    register_client_tools(server)
    register_product_tools(server)
    register_quote_tools(server)
    register_webhook_tools(server)

    async def info(request: Request) -> JSONResponse:
        return JSONResponse(server_info())

    server.custom_route("/", methods=["GET"])(info)
    server.custom_route("/health", methods=["GET"])(info)
    return server


# The name "frihet-erp" becomes the server identity in MCP.
mcp = create_server()


def main() -> None:
    try:
        settings = Settings.from_env()
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    configure(settings)

    if settings.transport == "http":
        import uvicorn

        logging.info(
            f"Frihet MCP server listening on http://{settings.host}:{settings.port}{MCP_PATH}"
        )
        uvicorn.run(
            create_http_app(mcp),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
        return

    if not settings.api_key:
        print(_MISSING_KEY_HELP, file=sys.stderr)
        sys.exit(1)

    logging.info("Frihet MCP server running on stdio")
    mcp.run()


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
