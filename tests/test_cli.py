from __future__ import annotations

from pathlib import Path

import orjson
from typer.testing import CliRunner

from pagesections import cli
from pagesections.cli import app
from pagesections.core.scraper import SectionScraper

from test_scraper import StubRenderer

runner = CliRunner()


def write_snapshot(tmp_path: Path, payload) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_bytes(orjson.dumps(payload))
    return path


def test_extract_prints_json_to_stdout(tmp_path: Path, landing_payload) -> None:
    snapshot = write_snapshot(tmp_path, landing_payload)

    result = runner.invoke(app, ["extract", str(snapshot), "--compact"])

    assert result.exit_code == 0, result.output
    data = orjson.loads(result.stdout)
    assert data["title"] == "Acme Hauling"
    assert [s["sectionType"] for s in data["sections"]][:2] == ["hero", "service"]


def test_extract_writes_output_file_and_summary(tmp_path: Path, landing_payload) -> None:
    snapshot = write_snapshot(tmp_path, landing_payload)
    output = tmp_path / "result.json"

    result = runner.invoke(app, ["extract", str(snapshot), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert "Total sections found: 7" in result.stdout
    assert "service: 3" in result.stdout
    assert orjson.loads(output.read_bytes())["sections"][0]["sectionId"] == "hero-1"


def test_extract_rejects_invalid_snapshot(tmp_path: Path) -> None:
    snapshot = tmp_path / "broken.json"
    snapshot.write_text('{"title": "no body"}', encoding="utf-8")

    result = runner.invoke(app, ["extract", str(snapshot)])

    assert result.exit_code == 1


def test_scrape_rejects_invalid_url(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)

    result = runner.invoke(app, ["scrape", "--url", "not-a-url", "--output", str(tmp_path / "out.json")])

    assert result.exit_code == 1
    assert not (tmp_path / "out.json").exists()


def test_scrape_writes_into_output_dir_by_default(tmp_path: Path, monkeypatch, landing_payload) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(
        cli,
        "SectionScraper",
        lambda settings: SectionScraper(settings, renderer=StubRenderer(landing_payload)),
    )
    snapshot = tmp_path / "snap.json"

    result = runner.invoke(
        app, ["scrape", "--url", "https://acme.example/services", "--save-snapshot", str(snapshot)]
    )

    assert result.exit_code == 0, result.output
    written = tmp_path / "output" / "acme.example_services.json"
    assert written.exists()
    assert orjson.loads(written.read_bytes())["url"] == "https://acme.example/services"
    assert orjson.loads(snapshot.read_bytes())["nodes"][0]["tag"] == "body"
    assert "Total sections found: 7" in result.stdout
