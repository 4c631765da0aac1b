from __future__ import annotations

from .scraper import SectionScraper, build_response
from .trace import ResultRecorder

__all__ = ["ResultRecorder", "SectionScraper", "build_response"]
