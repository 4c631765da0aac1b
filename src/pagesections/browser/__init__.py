from __future__ import annotations

from .renderer import PageRenderer, RenderedPage
from .snapshot import SnapshotCollector
from .tools import normalize_host, url_to_filename, validate_url

__all__ = [
	"PageRenderer",
	"RenderedPage",
	"SnapshotCollector",
	"normalize_host",
	"url_to_filename",
	"validate_url",
]
