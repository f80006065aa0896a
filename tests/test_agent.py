from datetime import date

import pytest

from agent.prompt import get_erp_assistant_prompt


def test_prompt_injects_todays_date() -> None:
    prompt = get_erp_assistant_prompt()

    assert f"TODAY'S DATE: {date.today().isoformat()}" in prompt
    assert "search_invoices" in prompt


def test_create_agent_requires_api_key(monkeypatch) -> None:
    pytest.importorskip("google.adk")
    pytest.importorskip("litellm")
    from agent.erp_agent import create_agent

    monkeypatch.delenv("FRIHET_API_KEY", raising=False)

    with pytest.raises(ValueError, match="FRIHET_API_KEY"):
        create_agent()


def test_tool_server_always_runs_on_stdio(monkeypatch) -> None:
    pytest.importorskip("google.adk")
    pytest.importorskip("litellm")
    from agent.erp_agent import _server_env

    monkeypatch.setenv("FRIHET_API_KEY", "fri_x")
    monkeypatch.setenv("FRIHET_MCP_TRANSPORT", "http")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-not-forwarded")

    env = _server_env()

    assert env["FRIHET_API_KEY"] == "fri_x"
    assert env["FRIHET_MCP_TRANSPORT"] == "stdio"
    assert "OPENROUTER_API_KEY" not in env
