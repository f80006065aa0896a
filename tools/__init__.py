# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers around core.client.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and the Frihet API client.
#   Each resource module:
#     1. Declares its tools' argument schemas through type hints
#     2. Forwards the provided fields to a FrihetClient method
#     3. Renders the result as text for the agent
#     4. Turns failures into a readable ToolError
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT retry, time out or decode HTTP (that's core/client.py)
#   - They do NOT validate business data (that's the Frihet API's job)
# =============================================================================
