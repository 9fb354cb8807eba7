"""Playwright browser lifecycle for the agent CLI."""

import logging
from dataclasses import dataclass

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewportSize:
    """Browser viewport dimensions."""

    width: int = 1280
    height: int = 720


class BrowserController:
    """Owns a Chromium instance and the single page an agent drives.

    Usage::

        async with BrowserController(start_url="https://example.com") as browser:
            agent = ComputerUseAgent(api_key=key, page=browser.page, loop=loop)
    """

    __slots__ = ("_browser", "_context", "_headless", "_page", "_playwright", "_start_url", "_viewport")

    def __init__(
        self,
        viewport: ViewportSize | None = None,
        headless: bool = True,
        start_url: str | None = None,
    ) -> None:
        self._viewport = viewport or ViewportSize()
        self._headless = headless
        self._start_url = start_url
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    async def __aenter__(self) -> "BrowserController":
        await self.start()
        try:
            if self._start_url:
                await self.navigate(self._start_url)
        except BaseException:
            await self.stop()
            raise
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: object) -> None:
        try:
            await self.stop()
        except Exception:
            if exc is None:
                raise
            # keep the body's failure; closing after Ctrl+C often fails too
            logger.debug("Browser cleanup failed", exc_info=True)

    @property
    def viewport(self) -> ViewportSize:
        return self._viewport

    @property
    def started(self) -> bool:
        return self._page is not None

    @property
    def page(self) -> Page:
        """Page handed to the agent; valid between start() and stop()."""
        if self._page is None:
            raise RuntimeError("Browser not started. Use 'async with' or call start() first.")
        return self._page

    async def start(self) -> None:
        """Launch Chromium with one context and one page."""
        if self.started:
            return
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self._headless)
        self._context = await self._browser.new_context(
            viewport={"width": self._viewport.width, "height": self._viewport.height},
        )
        self._page = await self._context.new_page()
        logger.info("Chromium launched (headless=%s, %dx%d)",
                    self._headless, self._viewport.width, self._viewport.height)

    async def stop(self) -> None:
        """Release context, browser and driver, newest first; safe to call twice."""
        resources = (self._context, self._browser)
        driver = self._playwright
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

        for resource in resources:
            if resource is not None:
                await resource.close()
        if driver is not None:
            await driver.stop()
            logger.info("Chromium closed")

    async def navigate(self, url: str) -> None:
        """Open ``url`` in the agent's page and wait for the load event."""
        logger.info("Opening %s", url)
        await self.page.goto(url, wait_until="load")
