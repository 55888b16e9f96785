"""HTTP client primitive for plain (non-rendered) retrieval."""

import logging
import time
from typing import Optional

import httpx

from urlfetch.config import Settings
from urlfetch.constants import RetrievalMethod
from urlfetch.errors import RetrievalError
from urlfetch.models import RetrievedPayload

logger = logging.getLogger(__name__)


class HttpClient:
    """Fetch a URL over HTTP with a pooled, lazily created client.

    Args:
        settings: Timeout, redirect, user agent and size limits.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def fetch(self, url: str) -> RetrievedPayload:
        """GET ``url`` and return its body and headers.

        Raises:
            RetrievalError: transport failure or non-2xx status
        """
        start_time = time.time()
        client = await self._get_client()

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise RetrievalError(f"Failed to fetch URL: {e}", url=url, cause=e) from e

        if not response.is_success:
            raise RetrievalError(
                f"HTTP error! status: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        body = response.content
        limit = self.settings.max_content_bytes
        if len(body) > limit:
            logger.warning(f"Truncating {url} from {len(body)} to {limit} bytes")
            body = body[:limit]

        encoding = response.encoding or "utf-8"
        text = body.decode(encoding, errors="replace")

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Fetched {url} ({response.status_code}, {len(body)} bytes, {duration_ms}ms)",
            extra={
                "url": url,
                "method": RetrievalMethod.HTTP,
                "status_code": response.status_code,
                "bytes": len(body),
                "duration_ms": duration_ms,
            },
        )

        return RetrievedPayload(
            text=text,
            declared_media_type=response.headers.get("content-type", ""),
            url=url,
            raw_headers=dict(response.headers),
            method=RetrievalMethod.HTTP,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.settings.user_agent},
                limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
                timeout=httpx.Timeout(self.settings.request_timeout),
                follow_redirects=self.settings.follow_redirects,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
