from __future__ import annotations

from .document import DocumentSnapshot, DomElement, DomOther, DomText, ElementSnapshot, RenderedDocument

__all__ = [
    "DocumentSnapshot",
    "DomElement",
    "DomOther",
    "DomText",
    "ElementSnapshot",
    "RenderedDocument",
]
