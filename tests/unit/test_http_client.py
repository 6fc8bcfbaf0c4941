"""Tests for the HTTP client."""

import httpx
import pytest

from matriculas_scraper.core.http_client import USER_AGENTS, HttpClient


def mock_transport(status_code: int = 200, text: str = "<html></html>", calls=None):
    """Build a MockTransport answering every request the same way."""
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, text=text)

    return httpx.MockTransport(handler)


class TestHttpClient:
    """Tests for HttpClient."""

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HttpClient() as client:
            assert client._client is not None
        assert client._client is None

    @pytest.mark.asyncio
    async def test_requires_context(self):
        client = HttpClient()
        with pytest.raises(RuntimeError):
            await client.get("https://example.com")

    @pytest.mark.asyncio
    async def test_get_text(self):
        calls = []
        transport = mock_transport(text="<table></table>", calls=calls)

        async with HttpClient(transport=transport) as client:
            text = await client.get_text("https://example.com/tabla.html")

        assert text == "<table></table>"
        assert calls[0].headers["User-Agent"] == USER_AGENTS[0]
        assert calls[0].headers["Accept-Language"].startswith("es")

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        calls = []
        transport = mock_transport(status_code=404, calls=calls)

        async with HttpClient(transport=transport) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get("https://example.com/missing")

        # Status errors are not retried
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_network_error_after_retries(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        async with HttpClient(max_retries=1, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("https://example.com")

        assert len(calls) == 1

    def test_user_agent_rotation(self):
        client = HttpClient()
        agents = [client._get_user_agent() for _ in range(len(USER_AGENTS) + 1)]

        assert agents[0] == agents[-1]
        assert set(agents) == set(USER_AGENTS)
