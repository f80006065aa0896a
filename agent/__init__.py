# =============================================================================
# agent/__init__.py
# =============================================================================
# A small bookkeeping assistant built on Google ADK that drives the Frihet
# tool server.  It is a CONSUMER of tools/mcp_server.py, exactly like Claude
# Desktop or Cursor would be:
#
#   agent/erp_agent.py  →  spawns the tool server over stdio (MCPToolset)
#   agent/prompt.py     →  the assistant's system prompt
#
# It holds no Frihet logic of its own.  Everything it knows about invoices,
# clients or expenses it learns by calling tools.
# =============================================================================
