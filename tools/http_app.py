# =============================================================================
# tools/http_app.py  —  The remote (streamable HTTP) front door
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Wraps the FastMCP server in an ASGI app that can be served by uvicorn:
#
#     POST/GET/DELETE /mcp   →  MCP over streamable HTTP (stateless)
#     GET /, GET /health     →  server info (registered in mcp_server.py)
#
# AUTH:
#   There is no server-side API key in HTTP mode.  Every caller brings their
#   own Frihet key (Bearer token, X-API-Key header or ?api_key=) and the
#   tools build a client for that key (see tools/shared.current_client).
#   Requests to /mcp without a key are rejected here with a 401, before any
#   MCP session work happens.
#
# STATELESS:
#   No MCP session ids are kept between requests, so any replica can serve
#   any request.
# =============================================================================

from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from tools.shared import extract_api_key

MCP_PATH = "/mcp"

ALLOWED_ORIGINS = [
    "https://claude.ai",
    "https://app.frihet.io",
    "https://frihet.io",
    "https://cursor.sh",
    "https://www.cursor.sh",
]


class ApiKeyMiddleware:
    """Reject MCP requests that carry no Frihet API key."""

    def __init__(self, app, path_prefix: str = MCP_PATH) -> None:
        self.app = app
        self.path_prefix = path_prefix

    def _guards(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def __call__(self, scope, receive, send) -> None:
        if (
            scope["type"] == "http"
            and self._guards(scope["path"])
            and scope["method"] != "OPTIONS"
        ):
            request = Request(scope)
            if not extract_api_key(request.headers, request.query_params):
                response = JSONResponse(
                    {
                        "error": "authentication_required",
                        "message": (
                            "Frihet API key is required. Pass via Authorization: Bearer <key>, "
                            "X-API-Key header, or ?api_key= query param."
                        ),
                    },
                    status_code=401,
                )
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)


def create_http_app(mcp, path: str = MCP_PATH):
    """Build the ASGI app for the remote deployment."""
    middleware = [
        # Outermost, so 401s and preflights carry CORS headers too.
        Middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=[
                "Content-Type",
                "Authorization",
                "X-API-Key",
                "mcp-session-id",
                "MCP-Protocol-Version",
            ],
            expose_headers=["mcp-session-id"],
        ),
        Middleware(ApiKeyMiddleware, path_prefix=path),
    ]
    return mcp.http_app(path=path, middleware=middleware, stateless_http=True)
