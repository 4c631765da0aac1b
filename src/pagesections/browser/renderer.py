from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from ..config import Settings
from ..dom.document import RenderedDocument
from ..errors import NavigationError, RenderError, RenderTimeoutError
from .snapshot import SnapshotCollector

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


@dataclass(slots=True)
class RenderedPage:
    """A fully laid-out page ready for extraction."""

    url: str
    document: RenderedDocument
    snapshot: dict[str, Any]

    @property
    def title(self) -> str:
        return self.document.title


class PageRenderer:
    """Playwright wrapper that renders one page per isolated browser context."""

    def __init__(self, settings: Settings, collector: SnapshotCollector | None = None) -> None:
        self._settings = settings
        self._collector = collector or SnapshotCollector(
            scroll_step_px=settings.scroll_step_px,
            scroll_interval_ms=settings.scroll_interval_ms,
            scroll_max_ms=settings.scroll_max_ms,
        )
        self._playwright = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> "PageRenderer":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.stop()

    async def start(self) -> None:
        if self._browser is not None:
            return
        logger.info("Initializing browser")
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(headless=self._settings.headless, args=LAUNCH_ARGS)
        except PlaywrightError as exc:
            await playwright.stop()
            raise RenderError(f"Unable to launch browser: {exc}") from exc
        self._playwright = playwright
        self._browser = browser
        logger.info("Browser initialized")

    async def stop(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            logger.info("Browser closed")
        if self._playwright is not None:
            await self._playwright.stop()
        self._browser = None
        self._playwright = None

    @property
    def browser(self) -> Browser:
        if self._browser is None:
            raise RenderError("Browser not started")
        return self._browser

    async def new_context(self) -> BrowserContext:
        return await self.browser.new_context(
            viewport={"width": self._settings.viewport_width, "height": self._settings.viewport_height},
            user_agent=self._settings.user_agent,
        )

    async def render(self, url: str) -> RenderedPage:
        context = await self.new_context()
        try:
            page = await context.new_page()
            await self._navigate(page, url)

            await page.wait_for_timeout(self._settings.settle_delay_ms)
            title = await self._read_title(page)
            logger.debug("Scrolling to load lazy content")
            await self._collector.auto_scroll(page)
            await page.wait_for_timeout(self._settings.post_scroll_delay_ms)

            payload = await self._collector.collect_payload(page)
            final_url = page.url
        finally:
            await context.close()

        if title is not None:
            payload["title"] = title
        document = RenderedDocument.from_snapshot(payload)
        logger.info("Rendered %s (title=%r)", final_url, document.title)
        return RenderedPage(url=final_url, document=document, snapshot=payload)

    async def _read_title(self, page: Page) -> str | None:
        try:
            return await page.title()
        except PlaywrightError as exc:
            logger.warning("Could not read page title before scrolling: %s", exc)
            return None

    async def _navigate(self, page: Page, url: str) -> None:
        logger.info("Navigating to %s", url)
        try:
            response = await page.goto(
                url,
                wait_until="networkidle",
                timeout=self._settings.navigation_timeout_ms,
            )
        except PlaywrightTimeoutError as exc:
            timeout_ms = self._settings.navigation_timeout_ms
            raise RenderTimeoutError(f"Navigation timeout of {timeout_ms} ms exceeded for {url}") from exc
        except PlaywrightError as exc:
            raise NavigationError(f"navigation to {url} failed: {exc}") from exc
        if response is not None and response.status >= 400:
            logger.warning("Page responded with HTTP %d", response.status)
