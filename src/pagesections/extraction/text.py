from __future__ import annotations

import re

from ..dom.document import DomElement, DomText
from .filters import should_skip

_SPACES = re.compile(r"[ \t]+")

INTERACTIVE_TAGS = frozenset({"button", "a"})


def normalize_spaces(text: str | None) -> str:
    """Collapse runs of spaces/tabs and trim; wording, case and punctuation are untouched."""

    if not text:
        return ""
    return _SPACES.sub(" ", text).strip()


def count_words(text: str) -> int:
    return len(text.split())


def owns_text(node: DomElement) -> bool:
    """True when every child is a text node or a skipped element."""

    for child in node.child_nodes:
        if isinstance(child, DomText):
            continue
        if isinstance(child, DomElement) and should_skip(child):
            continue
        return False
    return True


def exact_visible_text(node: DomElement) -> str:
    # Buttons and links report their full label even across nested markup.
    if node.tag in INTERACTIVE_TAGS:
        return normalize_spaces(node.text_content)
    if owns_text(node):
        return normalize_spaces(node.inner_text)
    return ""


def rendered_text(node: DomElement) -> str:
    return normalize_spaces(node.inner_text or node.text_content)
