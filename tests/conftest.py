"""Shared fixtures: a FrihetClient wired to an in-memory fake of the API."""

import httpx
import pytest

from core.client import FrihetClient

TEST_API_KEY = "fri_test_key"
TEST_BASE_URL = "https://api.test.frihet.io/v1"


@pytest.fixture
def make_client():
    """Factory: build a client whose HTTP calls go to `handler`.

    Backoff sleeps are recorded instead of awaited; the returned list holds
    every requested delay in seconds.
    """

    def _make(handler, **kwargs):
        client = FrihetClient(
            TEST_API_KEY,
            TEST_BASE_URL,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        delays: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            delays.append(seconds)

        client._sleep = fake_sleep
        return client, delays

    return _make


@pytest.fixture(autouse=True)
def _reset_tool_state():
    """Each test starts without a cached client or settings."""
    from tools import shared

    shared.configure(None)
    yield
    shared.configure(None)
