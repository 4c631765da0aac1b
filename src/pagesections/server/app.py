from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..browser.tools import validate_url
from ..config import Settings
from ..core.scraper import SectionScraper, build_response
from ..errors import InvalidURLError, NavigationError, RenderTimeoutError
from ..logging import setup_logging
from .ratelimit import FixedWindowRateLimiter
from .schemas import ErrorPayload, HealthPayload, ScrapeRequest

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /": "API information",
    "GET /health": "Health check",
    "POST /api/scrape": "Scrape a website",
}

ScraperFactory = Callable[[Settings], SectionScraper]


def _error(status_code: int, error: str, message: str, url: str | None = None) -> JSONResponse:
    payload = ErrorPayload(error=error, message=message, url=url, timestamp=datetime.now(timezone.utc))
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json", exclude_none=True))


class ScraperHolder:
    """Start one shared scraper on first use; close it on shutdown."""

    def __init__(self, settings: Settings, factory: ScraperFactory) -> None:
        self._settings = settings
        self._factory = factory
        self._scraper: SectionScraper | None = None
        self._lock = asyncio.Lock()

    async def get(self) -> SectionScraper:
        async with self._lock:
            if self._scraper is None:
                scraper = self._factory(self._settings)
                await scraper.start()
                self._scraper = scraper
                logger.info("Scraper initialized")
        return self._scraper

    async def close(self) -> None:
        async with self._lock:
            if self._scraper is not None:
                await self._scraper.close()
                self._scraper = None
                logger.info("Scraper closed")


def create_app(
    settings: Settings | None = None,
    scraper_factory: ScraperFactory = SectionScraper,
    configure_logging: bool = False,
) -> FastAPI:
    settings = settings or Settings.from_env()
    holder = ScraperHolder(settings, scraper_factory)
    limiter = FixedWindowRateLimiter(settings.rate_limit_max, settings.rate_limit_window_s)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if configure_logging:
            settings.ensure_directories()
            setup_logging(settings.effective_log_level, settings.log_dir / "server.log")
        yield
        await holder.close()

    app = FastAPI(title="Page Sections Scraper API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.cors_origin.split(",") if origin.strip()],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path.startswith("/api/"):
            client = request.client.host if request.client else "unknown"
            if not limiter.allow(client):
                logger.warning(
                    "Rate limit exceeded for %s",
                    client,
                    extra={"tracked_clients": limiter.tracked_clients()},
                )
                response = _error(429, "Too Many Requests", "Too many requests from this IP, please try again later.")
                response.headers["Retry-After"] = str(limiter.retry_after(client))
                return response
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "Bad Request", "URL is required in request body")

    @app.exception_handler(404)
    async def not_found(request: Request, _: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": f"Endpoint {request.method} {request.url.path} not found",
                "availableEndpoints": ENDPOINTS,
            },
        )

    @app.get("/")
    async def root() -> dict:
        return {"name": "Page Sections Scraper API", "version": __version__, "endpoints": ENDPOINTS}

    @app.get("/health")
    async def health() -> dict:
        payload = HealthPayload(
            uptime=round(time.monotonic() - started_at, 3),
            timestamp=datetime.now(timezone.utc),
            environment=settings.environment,
        )
        return payload.model_dump(mode="json")

    @app.post("/api/scrape")
    async def scrape_endpoint(request: ScrapeRequest):
        try:
            url = validate_url(request.url)
        except InvalidURLError as exc:
            return _error(400, "Invalid URL", str(exc))

        started = time.monotonic()
        try:
            scraper = await holder.get()
            result = await scraper.scrape(url)
        except RenderTimeoutError as exc:
            logger.warning("Scraping timed out for %s", url)
            return _error(504, "Scraping Failed", str(exc), url)
        except NavigationError as exc:
            logger.warning("Navigation failed for %s", url)
            return _error(502, "Scraping Failed", str(exc), url)
        except Exception as exc:  # noqa: BLE001 - reported to the client as a 500
            logger.exception("Scraping error for %s", url)
            return _error(500, "Scraping Failed", str(exc), url)

        response = build_response(result, time.monotonic() - started)
        logger.info(
            "Scraping complete in %.2fs - found %d sections",
            response.metadata.scraping_duration,
            len(response.sections),
            extra={"sections_found": len(response.sections), "section_types": response.metadata.section_types},
        )
        return response.model_dump(mode="json", by_alias=True)

    return app


app = create_app(configure_logging=True)
