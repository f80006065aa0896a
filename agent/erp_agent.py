# =============================================================================
# agent/erp_agent.py  —  Google ADK agent wired to the Frihet tool server
# =============================================================================
#
# HOW IT WORKS:
#
#   ┌──────────────────────────────────────────────┐
#   │              Google ADK Agent                │
#   │  system prompt ─▶ LLM (LiteLlm) ─▶ MCPToolset │
#   └──────────────────────────────────────────────┘
#                                         │ stdio
#                                         ▼
#                        ┌──────────────────────────────┐
#                        │  tools/mcp_server.py         │
#                        │  (31 Frihet tools)           │
#                        └──────────────────────────────┘
#                                         │ HTTPS
#                                         ▼
#                              https://api.frihet.io/v1
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess (`python -m tools.mcp_server`
#   from the project root) and talks to it over stdin/stdout.  The Frihet
#   credentials are forwarded through the subprocess environment; the
#   server itself refuses to start without FRIHET_API_KEY.
#
# MODEL:
#   Any LiteLlm model string works.  FRIHET_AGENT_MODEL picks it; the
#   default routes GPT-4o through OpenRouter (needs OPENROUTER_API_KEY).
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool.mcp_toolset import MCPToolset, StdioServerParameters

from agent.prompt import get_erp_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

# Variables the tool server subprocess needs to see.
_FORWARDED_ENV = (
    "FRIHET_API_KEY",
    "FRIHET_API_URL",
    "FRIHET_HTTP_TIMEOUT_SECONDS",
    "FRIHET_LOG_LEVEL",
    "PATH",
)


def _server_env() -> dict[str, str]:
    env = {name: os.environ[name] for name in _FORWARDED_ENV if name in os.environ}
    # The assistant always talks to its own subprocess over stdio.
    env["FRIHET_MCP_TRANSPORT"] = "stdio"
    return env


def create_agent(model: str | None = None) -> Agent:
    """Create the Frihet bookkeeping assistant.

    Raises:
        ValueError: if FRIHET_API_KEY is not set; the tool server would
            exit immediately without it.
    """
    if not os.environ.get("FRIHET_API_KEY"):
        raise ValueError("FRIHET_API_KEY is required to start the Frihet tool server.")

    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    frihet_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
            env=_server_env(),
        ),
    )

    return Agent(
        name="frihet_erp_assistant",
        model=LiteLlm(model=model or os.environ.get("FRIHET_AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_erp_assistant_prompt(),
        tools=[frihet_tools],
    )
