from __future__ import annotations

from .dom.document import RenderedDocument
from .extraction.pipeline import extract
from .types import ExtractionResult, Section, SectionType

__version__ = "1.0.0"

__all__ = ["ExtractionResult", "RenderedDocument", "Section", "SectionType", "extract", "__version__"]
