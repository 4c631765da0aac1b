from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from ..browser.renderer import PageRenderer, RenderedPage
from ..browser.tools import normalize_host, validate_url
from ..config import Settings
from ..extraction.pipeline import extract
from ..logging import reset_page_context, set_page_context
from ..types import ScrapeMetadata, ScrapeResponse, ScrapeResult

logger = logging.getLogger(__name__)


class SectionScraper:
    """Render pages and run the extraction core on each of them.

    One browser is shared; every ``scrape`` call gets its own browser context
    and its own extraction run.
    """

    def __init__(self, settings: Settings, renderer: PageRenderer | None = None) -> None:
        self._settings = settings
        self._renderer = renderer or PageRenderer(settings)
        self._semaphore = asyncio.Semaphore(settings.max_concurrent_pages)

    async def __aenter__(self) -> "SectionScraper":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()

    async def start(self) -> None:
        await self._renderer.start()

    async def close(self) -> None:
        await self._renderer.stop()

    async def scrape(self, url: str) -> ScrapeResult:
        result, _ = await self.scrape_with_snapshot(url)
        return result

    async def scrape_with_snapshot(self, url: str) -> tuple[ScrapeResult, dict[str, Any]]:
        target = validate_url(url)
        token = set_page_context(url=target, host=normalize_host(target), run_id=str(uuid.uuid4()))
        try:
            async with self._semaphore:
                rendered = await self._renderer.render(target)
            result = self.extract_rendered(target, rendered)
        finally:
            reset_page_context(token)
        return result, rendered.snapshot

    def extract_rendered(self, url: str, rendered: RenderedPage) -> ScrapeResult:
        extraction = extract(rendered.document)
        if extraction.errors:
            logger.warning("Extraction reported %d errors", len(extraction.errors))
        logger.info(
            "Scraping complete: %d sections found",
            len(extraction.sections),
            extra={"sections_found": len(extraction.sections), "section_types": extraction.section_types()},
        )
        return ScrapeResult(
            url=url,
            title=extraction.title,
            scraped_at=datetime.now(timezone.utc),
            sections=extraction.sections,
            errors=extraction.errors,
        )


def build_response(result: ScrapeResult, duration_s: float) -> ScrapeResponse:
    """Wrap a scrape result with the metadata the HTTP layer reports."""

    metadata = ScrapeMetadata(
        scraping_duration=round(duration_s, 2),
        sections_found=len(result.sections),
        section_types=result.section_types(),
        timestamp=datetime.now(timezone.utc),
    )
    return ScrapeResponse(**result.model_dump(), metadata=metadata)

