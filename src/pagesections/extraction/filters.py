from __future__ import annotations

import re

from ..dom.document import DomElement

HEADING_PATTERN = re.compile(r"^h[1-6]$")

FORM_TAGS = frozenset({"input", "select", "textarea", "label", "option", "fieldset", "legend"})
NON_RENDERING_TAGS = frozenset({"script", "style", "noscript", "meta", "link"})
NAVIGATION_TOKENS = ("nav", "menu")


def is_heading(node: DomElement) -> bool:
    return bool(HEADING_PATTERN.match(node.tag))


def is_navigation(node: DomElement) -> bool:
    if node.tag == "nav" or (node.role or "").lower() == "navigation":
        return True
    class_string = node.class_string
    element_id = (node.element_id or "").lower()
    return any(token in class_string or token in element_id for token in NAVIGATION_TOKENS)


def is_hidden(node: DomElement) -> bool:
    if node.display == "none" or node.visibility == "hidden" or node.opacity == "0":
        return True
    if node.offset_width is not None and node.offset_width == 0:
        return True
    if node.offset_height is not None and node.offset_height == 0:
        return True
    return False


def should_skip(node: DomElement) -> bool:
    """Return True when ``node`` (and, for the tree walk, its subtree) is not extractable."""

    if is_navigation(node):
        return True
    if node.tag in FORM_TAGS or node.tag in NON_RENDERING_TAGS:
        return True
    if is_hidden(node):
        return True
    return node.aria_hidden == "true"
