from __future__ import annotations

import contextvars
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

_page_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("page_context", default={})

_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

# Extraction counters passed via ``extra`` are grouped under "sections".
_SECTION_FIELDS = ("sections_found", "section_types", "candidates", "consumed_nodes")


class ORJSONFormatter(logging.Formatter):
    """One JSON object per record: page context under "page", extraction counters under "sections"."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - fmt
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        page = _page_context.get({})
        if page:
            payload["page"] = dict(page)
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        sections = {key: extra.pop(key) for key in _SECTION_FIELDS if key in extra}
        if sections:
            payload["sections"] = sections
        for key, value in extra.items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode()


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure root logger with JSON formatter."""

    root = logging.getLogger()
    root.setLevel(log_level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = ORJSONFormatter()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def set_page_context(**kwargs: Any) -> contextvars.Token:
    """Attach contextual metadata (url, run id) to subsequent log records."""

    return _page_context.set(dict(kwargs))


def reset_page_context(token: contextvars.Token) -> None:
    _page_context.reset(token)
