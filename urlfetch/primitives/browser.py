"""Headless browser primitive for JavaScript-rendered pages.

The session owns one lazily launched Chromium instance. Each render opens its
own browser context and closes it before returning, and the browser itself is
only torn down by an explicit ``close()``.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from playwright.async_api import Browser, async_playwright
from playwright.async_api import Error as PlaywrightError

from urlfetch.config import Settings
from urlfetch.constants import RetrievalMethod
from urlfetch.errors import RetrievalError
from urlfetch.models import RetrievalOptions, RetrievedPayload

logger = logging.getLogger(__name__)

WAIT_UNTIL = "networkidle"


class BrowserSession:
    """Explicitly owned wrapper around a single Playwright browser.

    Args:
        settings: Headless flag, navigation timeout and user agent.
        launcher: Factory returning an object with an async ``start()``,
            defaults to ``async_playwright``.
    """

    def __init__(self, settings: Settings, launcher: Optional[Callable[[], Any]] = None):
        self.settings = settings
        self._launcher = launcher or async_playwright
        self._lock = asyncio.Lock()
        self._playwright = None
        self._browser: Optional[Browser] = None

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def _ensure_browser(self) -> Browser:
        async with self._lock:
            if self._browser is None:
                logger.info("Starting headless browser instance")
                self._playwright = await self._launcher().start()
                try:
                    self._browser = await self._playwright.chromium.launch(
                        headless=self.settings.browser_headless
                    )
                except PlaywrightError:
                    await self._playwright.stop()
                    self._playwright = None
                    raise
            return self._browser

    async def render(self, url: str, options: RetrievalOptions) -> RetrievedPayload:
        """Load ``url`` in a fresh page and return the rendered document.

        Raises:
            RetrievalError: launch, navigation, selector wait or non-2xx status
        """
        try:
            browser = await self._ensure_browser()
        except PlaywrightError as e:
            raise RetrievalError(f"Failed to launch browser: {e}", url=url, cause=e) from e

        timeout = self.settings.browser_timeout_ms
        context = await browser.new_context(user_agent=self.settings.user_agent)
        try:
            page = await context.new_page()
            response = await page.goto(url, wait_until=WAIT_UNTIL, timeout=timeout)
            if response is not None and not response.ok:
                raise RetrievalError(
                    f"HTTP error! status: {response.status}",
                    url=url,
                    status_code=response.status,
                )

            if options.wait_for_selector:
                await page.wait_for_selector(options.wait_for_selector, timeout=timeout)
            if options.render_wait_ms:
                await page.wait_for_timeout(options.render_wait_ms)

            headers = await response.all_headers() if response is not None else {}
            media_type = headers.get("content-type", "")
            if not media_type or "html" in media_type:
                # Rendered DOM, scripts applied
                text = await page.content()
                media_type = media_type or "text/html"
            else:
                text = await response.text()

            screenshot = None
            if options.capture_screenshot:
                screenshot = await page.screenshot(full_page=True, type="png")
        except PlaywrightError as e:
            raise RetrievalError(f"Browser rendering failed: {e}", url=url, cause=e) from e
        finally:
            await context.close()

        logger.info(
            f"Rendered {url} ({len(text)} chars, screenshot={screenshot is not None})",
            extra={"url": url, "method": RetrievalMethod.BROWSER},
        )
        return RetrievedPayload(
            text=text,
            declared_media_type=media_type,
            url=url,
            raw_headers=headers,
            screenshot=screenshot,
            method=RetrievalMethod.BROWSER,
        )

    async def close(self):
        """Close the browser and stop Playwright."""
        async with self._lock:
            if self._browser is not None:
                try:
                    await self._browser.close()
                finally:
                    self._browser = None
            if self._playwright is not None:
                try:
                    await self._playwright.stop()
                finally:
                    self._playwright = None
