from __future__ import annotations

import re

from ..dom.document import DomElement
from .state import NO_BUTTON, ButtonInfo, ExtractionRun
from .text import rendered_text

MAX_SIBLING_HOPS = 3

_BUTTON_CLASS = re.compile(r"btn|button")


def is_button_like(node: DomElement) -> bool:
    return node.tag == "button" or "btn" in node.class_name or "button" in node.class_name


def is_sibling_button(node: DomElement) -> bool:
    if node.tag == "button":
        return True
    return node.tag == "a" and bool(_BUTTON_CLASS.search(node.class_name))


def find_button_element(node: DomElement) -> DomElement | None:
    button = node.first_descendant(is_button_like)
    if button is None and node.parent is not None:
        button = node.parent.first_descendant(is_button_like)
    if button is None:
        sibling = node.next_element_sibling()
        hops = 0
        while sibling is not None and hops < MAX_SIBLING_HOPS:
            if is_sibling_button(sibling):
                button = sibling
                break
            sibling = sibling.next_element_sibling()
            hops += 1
    return button


def find_associated_button(node: DomElement, run: ExtractionRun) -> ButtonInfo:
    """Search inside ``node``, then its parent, then up to three next siblings.

    The first match wins; a match already consumed by an earlier association
    yields no button rather than a reused one.
    """

    button = find_button_element(node)
    if button is None or run.is_consumed(button):
        return NO_BUTTON
    return ButtonInfo(has_button=True, button_text=rendered_text(button) or None, button=button)
