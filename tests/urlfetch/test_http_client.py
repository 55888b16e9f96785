"""Tests for the HTTP client primitive."""

import httpx
import pytest

from urlfetch.config import Settings
from urlfetch.errors import RetrievalError
from urlfetch.primitives.http_client import HttpClient

URL = "https://example.com/data.json"


def client_for(handler, **settings):
    return HttpClient(Settings(**settings), transport=httpx.MockTransport(handler))


class TestHttpClient:
    """Test HttpClient against a mock transport."""

    @pytest.mark.asyncio
    async def test_fetch_success(self):
        seen = {}

        def handler(request):
            seen["user_agent"] = request.headers["user-agent"]
            return httpx.Response(
                200, headers={"content-type": "application/json"}, content=b'{"a": 1}'
            )

        client = client_for(handler, user_agent="test-agent/1.0")
        payload = await client.fetch(URL)

        assert payload.text == '{"a": 1}'
        assert payload.declared_media_type == "application/json"
        assert payload.url == URL
        assert payload.method == "http"
        assert payload.screenshot is None
        assert seen["user_agent"] == "test-agent/1.0"
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_content_type(self):
        client = client_for(lambda request: httpx.Response(200, content=b"hello"))
        payload = await client.fetch(URL)
        assert payload.declared_media_type == ""
        await client.close()

    @pytest.mark.asyncio
    async def test_error_status(self):
        client = client_for(lambda request: httpx.Response(404, content=b"nope"))
        with pytest.raises(RetrievalError) as exc_info:
            await client.fetch(URL)
        assert exc_info.value.message == "HTTP error! status: 404"
        assert exc_info.value.status_code == 404
        assert exc_info.value.url == URL
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = client_for(handler)
        with pytest.raises(RetrievalError) as exc_info:
            await client.fetch(URL)
        assert "connection refused" in exc_info.value.message
        assert exc_info.value.status_code is None
        await client.close()

    @pytest.mark.asyncio
    async def test_large_body_truncated(self):
        client = client_for(
            lambda request: httpx.Response(200, content=b"abcdefgh"), max_content_bytes=5
        )
        payload = await client.fetch(URL)
        assert payload.text == "abcde"
        await client.close()

    @pytest.mark.asyncio
    async def test_close_resets_client(self):
        client = client_for(lambda request: httpx.Response(200, content=b"x"))
        await client.fetch(URL)
        assert client._client is not None
        await client.close()
        assert client._client is None
