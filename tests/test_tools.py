"""End-to-end tool calls through an in-memory MCP client."""

import json

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from tools import shared
from tools.mcp_server import TOOL_COUNT, mcp

_PAGE = {"data": [{"id": "inv_1", "clientName": "Acme"}], "total": 3, "limit": 1, "offset": 0}


@pytest.fixture
def fake_api(make_client):
    """Route tool calls to `handler`; returns the list of captured requests."""

    def _install(handler):
        requests: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client, _ = make_client(recording)
        shared.set_default_client(client)
        return requests

    return _install


@pytest.mark.asyncio
async def test_all_tools_are_registered() -> None:
    async with Client(mcp) as client:
        tools = await client.list_tools()

    names = {tool.name for tool in tools}
    assert len(names) == TOOL_COUNT
    for resource in ("invoice", "expense", "client", "product", "quote", "webhook"):
        for verb in ("get", "create", "update", "delete"):
            assert f"{verb}_{resource}" in names
        assert f"list_{resource}s" in names
    assert "search_invoices" in names


@pytest.mark.asyncio
async def test_list_invoices_renders_page(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(200, json=_PAGE))

    async with Client(mcp) as client:
        result = await client.call_tool("list_invoices", {"limit": 1})

    text = result.content[0].text
    assert text.startswith("Found 3 invoices (showing 1, offset 0):")
    assert '"clientName": "Acme"' in text
    assert "Use offset=1" in text
    assert dict(requests[0].url.params) == {"limit": "1"}


@pytest.mark.asyncio
async def test_create_invoice_sends_camel_case_body(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(201, json={"id": "inv_9"}))

    async with Client(mcp) as client:
        result = await client.call_tool(
            "create_invoice",
            {
                "client_name": "Acme",
                "items": [{"description": "Consulting", "quantity": 2, "unitPrice": 150}],
                "due_date": "2026-11-30",
                "tax_rate": 21,
            },
        )

    assert result.content[0].text.startswith("Invoice created:")
    assert requests[0].method == "POST"
    assert json.loads(requests[0].content) == {
        "clientName": "Acme",
        "items": [{"description": "Consulting", "quantity": 2.0, "unitPrice": 150.0}],
        "dueDate": "2026-11-30",
        "taxRate": 21.0,
    }


@pytest.mark.asyncio
async def test_update_sends_only_given_fields(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(200, json={"id": "c1", "email": "a@b.es"}))

    async with Client(mcp) as client:
        result = await client.call_tool("update_client", {"id": "c1", "email": "a@b.es"})

    assert result.content[0].text.startswith("Client updated:")
    assert requests[0].method == "PUT"
    assert requests[0].url.path.endswith("/clients/c1")
    assert json.loads(requests[0].content) == {"email": "a@b.es"}


@pytest.mark.asyncio
async def test_delete_reports_success(fake_api) -> None:
    fake_api(lambda request: httpx.Response(204))

    async with Client(mcp) as client:
        result = await client.call_tool("delete_invoice", {"id": "inv_1"})

    assert result.content[0].text == (
        "Invoice inv_1 deleted successfully. / Factura inv_1 eliminada correctamente."
    )


@pytest.mark.asyncio
async def test_search_invoices_passes_client_name(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(200, json=_PAGE))

    async with Client(mcp) as client:
        result = await client.call_tool("search_invoices", {"client_name": "Acme"})

    assert result.content[0].text.startswith('Found 3 invoices matching "Acme"')
    assert requests[0].url.params["clientName"] == "Acme"


@pytest.mark.asyncio
async def test_api_error_becomes_tool_error(fake_api) -> None:
    fake_api(lambda request: httpx.Response(404, json={"error": "not_found", "message": "no such quote"}))

    async with Client(mcp) as client:
        with pytest.raises(ToolError, match="Resource not found"):
            await client.call_tool("get_quote", {"id": "nope"})


@pytest.mark.asyncio
async def test_out_of_range_limit_is_rejected_before_any_call(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(200, json=_PAGE))

    async with Client(mcp) as client:
        with pytest.raises(ToolError):
            await client.call_tool("list_expenses", {"limit": 500})

    assert requests == []


@pytest.mark.asyncio
async def test_list_tolerates_null_total(fake_api) -> None:
    fake_api(
        lambda request: httpx.Response(
            200, json={"data": [{"id": "inv_1"}], "total": None, "limit": 50, "offset": 0}
        )
    )

    async with Client(mcp) as client:
        result = await client.call_tool("list_invoices", {})

    assert result.content[0].text.startswith("Found 1 invoices (showing 1, offset 0):")


@pytest.mark.asyncio
async def test_create_expense_sends_camel_case_body(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(201, json={"id": "exp_1"}))

    async with Client(mcp) as client:
        await client.call_tool(
            "create_expense",
            {
                "description": "Laptop",
                "amount": 1200,
                "vendor": "PCComponentes",
                "date": "2026-10-01",
                "tax_deductible": True,
            },
        )

    assert json.loads(requests[0].content) == {
        "description": "Laptop",
        "amount": 1200.0,
        "vendor": "PCComponentes",
        "date": "2026-10-01",
        "taxDeductible": True,
    }


@pytest.mark.asyncio
async def test_create_product_sends_camel_case_body(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(201, json={"id": "prd_1"}))

    async with Client(mcp) as client:
        await client.call_tool(
            "create_product",
            {"name": "Consulting hour", "unit_price": 80, "unit": "hour", "tax_rate": 21},
        )

    assert json.loads(requests[0].content) == {
        "name": "Consulting hour",
        "unitPrice": 80.0,
        "unit": "hour",
        "taxRate": 21.0,
    }


@pytest.mark.asyncio
async def test_create_quote_sends_camel_case_body(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(201, json={"id": "q_1"}))

    async with Client(mcp) as client:
        await client.call_tool(
            "create_quote",
            {
                "client_name": "Acme",
                "items": [{"description": "Audit", "quantity": 1, "unitPrice": 900}],
                "valid_until": "2026-12-31",
            },
        )

    assert json.loads(requests[0].content) == {
        "clientName": "Acme",
        "items": [{"description": "Audit", "quantity": 1.0, "unitPrice": 900.0}],
        "validUntil": "2026-12-31",
    }


@pytest.mark.asyncio
async def test_create_client_sends_nested_address(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(201, json={"id": "c_1"}))

    async with Client(mcp) as client:
        await client.call_tool(
            "create_client",
            {
                "name": "Peña S.L.",
                "tax_id": "B12345678",
                "address": {"city": "Madrid", "postalCode": "28001"},
            },
        )

    assert json.loads(requests[0].content) == {
        "name": "Peña S.L.",
        "taxId": "B12345678",
        "address": {"city": "Madrid", "postalCode": "28001"},
    }


@pytest.mark.asyncio
async def test_create_webhook_sends_body(fake_api) -> None:
    requests = fake_api(lambda request: httpx.Response(201, json={"id": "wh_1"}))

    async with Client(mcp) as client:
        await client.call_tool(
            "create_webhook",
            {"url": "https://hooks.example.com/frihet", "events": ["invoice.paid"], "active": False},
        )

    assert json.loads(requests[0].content) == {
        "url": "https://hooks.example.com/frihet",
        "events": ["invoice.paid"],
        "active": False,
    }
