# =============================================================================
# main.py  —  Console front end for the Frihet bookkeeping assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py                              interactive session
#   python main.py "Which invoices are overdue?"  one question, then exit
#
#   Needs FRIHET_API_KEY plus the model provider's key (OPENROUTER_API_KEY
#   for the default model), from the shell or a .env file.
#
# WHAT HAPPENS:
#   1. agent/erp_agent.py builds the ADK agent, which spawns the Frihet tool
#      server (tools/mcp_server.py) as a stdio subprocess
#   2. Each question runs through an ADK Runner in one in-memory session, so
#      follow-up questions keep their context
#   3. Tool calls are echoed as "[tool] name" while the agent works
#
# The MCP server can also be used on its own (Claude Desktop, Cursor...):
# see tools/mcp_server.py.
# =============================================================================

import asyncio
import sys

from dotenv import load_dotenv

# Before the agent import: LiteLlm and the tool server read keys from os.environ.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.erp_agent import create_agent

APP_NAME = "frihet_assistant"
USER_ID = "console_user"
QUIT_WORDS = {"quit", "exit", "q", "salir"}
RULE = "-" * 70


async def ask(runner: Runner, session_id: str, question: str) -> str:
    """Send one question and return the agent's last text reply."""
    message = types.Content(role="user", parts=[types.Part(text=question)])
    answer = ""
    async for event in runner.run_async(
        user_id=USER_ID, session_id=session_id, new_message=message
    ):
        for part in (event.content.parts if event.content else None) or []:
            call = getattr(part, "function_call", None)
            if call:
                print(f"  [tool] {call.name}")
            elif getattr(part, "text", None):
                answer = part.text
    return answer


def print_answer(answer: str) -> None:
    print(RULE)
    if answer:
        print(f"\nAssistant:\n\n{answer}")
    else:
        print("\nNo response generated. The agent may have encountered an error.")


async def main(argv: list[str]) -> int:
    try:
        agent = create_agent()
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    sessions = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=sessions)
    session = await sessions.create_session(app_name=APP_NAME, user_id=USER_ID)

    if argv:
        print_answer(await ask(runner, session.id, " ".join(argv)))
        return 0

    print("Frihet ERP assistant. Ask about invoices, expenses, clients...")
    print("Type 'quit' to exit.")
    print(RULE)
    while True:
        try:
            question = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if question.lower() in QUIT_WORDS:
            return 0
        if question:
            print_answer(await ask(runner, session.id, question))


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
