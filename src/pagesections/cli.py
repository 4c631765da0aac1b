from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from .browser.tools import validate_url
from .config import Settings
from .core.scraper import SectionScraper
from .core.trace import ResultRecorder
from .errors import PageSectionsError
from .extraction.pipeline import extract
from .logging import setup_logging
from .types import ExtractionResult

app = typer.Typer(no_args_is_help=True, help="Extract and classify content sections from rendered web pages.")


def main() -> None:
    app()


def _report(result: ExtractionResult) -> None:
    typer.echo(f"Title: {result.title}")
    typer.echo(f"Total sections found: {len(result.sections)}")
    if result.errors:
        typer.echo(f"Errors encountered: {len(result.errors)}", err=True)
        for error in result.errors:
            typer.echo(f"   - {error.message}", err=True)
    typer.echo("Sections by type:")
    for section_type, count in result.counts_by_type().items():
        typer.echo(f"   {section_type}: {count}")


@app.command()
def scrape(
    url: str = typer.Option(..., "--url", "-u", help="URL to scrape"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file path (defaults to OUTPUT_DIR/<host_path>.json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Pretty print JSON output"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Page load timeout in seconds"),
    headful: bool = typer.Option(False, help="Run browser in headed mode"),
    save_snapshot: Optional[Path] = typer.Option(None, help="Also write the captured DOM snapshot to this path"),
) -> None:
    """Render URL in a headless browser and write its classified sections as JSON."""

    settings = Settings.from_env()
    settings.verbose = settings.verbose or verbose
    if timeout:
        settings.navigation_timeout_s = timeout
    if headful:
        settings.headless = False
    settings.ensure_directories()
    setup_logging(settings.effective_log_level, settings.log_dir / "scraper.log")

    try:
        target = validate_url(url)
        destination = output or ResultRecorder.path_for(settings.output_dir, target)
        asyncio.run(_scrape(target, destination, pretty, save_snapshot, settings))
    except PageSectionsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def _scrape(
    url: str,
    output: Path,
    pretty: bool,
    save_snapshot: Optional[Path],
    settings: Settings,
) -> None:
    recorder = ResultRecorder(pretty=pretty)
    typer.echo(f"Scraping {url}...")
    started = time.monotonic()
    async with SectionScraper(settings) as scraper:
        result, snapshot = await scraper.scrape_with_snapshot(url)
    duration = time.monotonic() - started

    typer.echo(f"Scraping complete in {duration:.2f}s")
    _report(result)
    recorder.write_result(result, output)
    typer.echo(f"Results saved to: {output}")
    if save_snapshot is not None:
        recorder.write_snapshot(snapshot, save_snapshot)
        typer.echo(f"Snapshot saved to: {save_snapshot}")


@app.command("extract")
def extract_snapshot(
    snapshot: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved DOM snapshot JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path (stdout if omitted)"),
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Pretty print JSON output"),
) -> None:
    """Run section extraction on a previously captured DOM snapshot."""

    recorder = ResultRecorder(pretty=pretty)
    try:
        document = recorder.read_snapshot(snapshot)
    except PageSectionsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    result = extract(document)
    if output is None:
        typer.echo(result.to_json(pretty=pretty))
        return
    _report(result)
    recorder.write_result(result, output)
    typer.echo(f"Results saved to: {output}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
) -> None:
    """Run the HTTP API."""

    settings = Settings.from_env()
    uvicorn.run(
        "pagesections.server.app:app",
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )
