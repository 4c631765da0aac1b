from __future__ import annotations

import math
from dataclasses import dataclass

from ..dom.document import DomElement, RenderedDocument

BODY_LOCATOR = "/html/body"


def _round(value: float) -> int:
    # Half-up rounding, as the browser's Math.round does.
    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class BoundingBox:
    top: int
    left: int
    bottom: int
    right: int
    width: int
    height: int


def absolute_position(node: DomElement, document: RenderedDocument) -> BoundingBox:
    rect = node.rect
    return BoundingBox(
        top=_round(rect.top + document.scroll_y),
        left=_round(rect.left + document.scroll_x),
        bottom=_round(rect.bottom + document.scroll_y),
        right=_round(rect.right + document.scroll_x),
        width=_round(rect.width),
        height=_round(rect.height),
    )


def id_locator(element_id: str) -> str:
    return f'//*[@id="{element_id}"]'


def child_locator(parent_locator: str, tag: str, ordinal: int) -> str:
    return f"{parent_locator}/{tag}[{ordinal}]"


def same_tag_ordinal(node: DomElement) -> int | None:
    """1-based position of ``node`` among its parent's children sharing its tag."""

    if node.parent is None:
        return None
    ordinal = 0
    for sibling in node.parent.children:
        if sibling.tag == node.tag:
            ordinal += 1
        if sibling is node:
            return ordinal
    return None


def build_locator(node: DomElement, root: DomElement) -> str:
    """XPath-like locator for ``node``; empty when the chain to ``root`` is broken."""

    segments: list[tuple[str, int]] = []
    current: DomElement | None = node
    prefix: str | None = None
    while current is not None:
        if current.element_id:
            prefix = id_locator(current.element_id)
            break
        if current is root:
            prefix = BODY_LOCATOR
            break
        ordinal = same_tag_ordinal(current)
        if ordinal is None:
            return ""
        segments.append((current.tag, ordinal))
        current = current.parent
    if prefix is None:
        return ""

    locator = prefix
    for tag, ordinal in reversed(segments):
        locator = child_locator(locator, tag, ordinal)
    return locator
