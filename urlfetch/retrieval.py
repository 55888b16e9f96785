"""Retrieval collaborator: picks plain HTTP or the headless browser per request."""

import logging
from typing import Optional

from urlfetch.config import Settings
from urlfetch.models import RetrievalOptions, RetrievedPayload
from urlfetch.primitives import BrowserSession, HttpClient

logger = logging.getLogger(__name__)


class Retriever:
    """Owns the HTTP client and the browser session for one process.

    The browser is only launched by the first request that needs it.
    Call ``aclose()`` on shutdown.
    """

    def __init__(
        self,
        settings: Settings,
        http: Optional[HttpClient] = None,
        browser: Optional[BrowserSession] = None,
    ):
        self.settings = settings
        self.http = http or HttpClient(settings)
        self.browser = browser or BrowserSession(settings)

    async def retrieve(self, url: str, options: Optional[RetrievalOptions] = None) -> RetrievedPayload:
        """Fetch ``url`` once. Failures propagate as RetrievalError, without retry."""
        options = options or RetrievalOptions()
        if options.needs_browser:
            logger.debug(f"Retrieving {url} via browser")
            return await self.browser.render(url, options)
        logger.debug(f"Retrieving {url} via http")
        return await self.http.fetch(url)

    async def aclose(self):
        """Release the HTTP client and the browser."""
        try:
            await self.http.close()
        finally:
            await self.browser.close()
