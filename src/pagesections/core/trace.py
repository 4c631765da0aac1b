from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from ..browser.tools import url_to_filename
from ..dom.document import RenderedDocument
from ..errors import SnapshotError
from ..types import ExtractionResult


@dataclass(slots=True)
class ResultRecorder:
    """Persist extraction results and DOM snapshots as JSON files."""

    pretty: bool = True

    def _options(self) -> int:
        return orjson.OPT_INDENT_2 if self.pretty else 0

    def write_result(self, result: ExtractionResult, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result.to_json(pretty=self.pretty), encoding="utf-8")
        return path

    def write_snapshot(self, snapshot: dict[str, Any], path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(snapshot, option=self._options()))
        return path

    @staticmethod
    def read_snapshot(path: Path) -> RenderedDocument:
        try:
            payload = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as exc:
            raise SnapshotError(f"Snapshot {path} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise SnapshotError(f"Snapshot {path} must contain a JSON object")
        return RenderedDocument.from_snapshot(payload)

    @staticmethod
    def path_for(base_dir: Path, url: str) -> Path:
        return base_dir / url_to_filename(url)
