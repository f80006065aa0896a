# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the Frihet ERP API client and its data model.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any agent
#   framework.  The request engine only knows about HTTP (httpx) and the
#   environment (python-dotenv).
#
# Why?  The tools/ layer and the agent/ layer are wiring.  The part that
# decides how a call is authenticated, retried and failed lives here, where
# it can be tested against a fake transport with no MCP session at all.
# =============================================================================
