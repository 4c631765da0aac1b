from __future__ import annotations

import logging

from ..dom.document import DomElement
from .buttons import find_associated_button
from .filters import is_heading, should_skip
from .geometry import absolute_position, build_locator
from .state import Candidate, ExtractionRun
from .text import count_words, normalize_spaces

logger = logging.getLogger(__name__)

CARD_TAG = "card"
MIN_CARD_WORDS = 4
MIN_CARD_CHILDREN = 2

CARD_QUERY_FRAGMENTS = ("card", "service-item", "feature")
CARD_QUERY_TOKEN = "box"
CARD_CLASS_HINTS = ("card", "service", "feature", "item", "box")
TEXT_BEARING_TAGS = frozenset({"p", "span", "div"})


def matches_card_query(node: DomElement) -> bool:
    if any(fragment in node.class_name for fragment in CARD_QUERY_FRAGMENTS):
        return True
    return CARD_QUERY_TOKEN in node.classes


def is_card_container(node: DomElement) -> bool:
    class_string = node.class_string
    if not any(hint in class_string for hint in CARD_CLASS_HINTS):
        return False
    if node.first_descendant(is_heading) is None:
        return False
    if node.first_descendant(lambda child: child.tag in TEXT_BEARING_TAGS) is None:
        return False
    return len(node.children) >= MIN_CARD_CHILDREN


def detect_cards(run: ExtractionRun) -> list[Candidate]:
    """Promote card containers to candidates in document order.

    A promoted card consumes its whole subtree and its button so neither the
    tree walk nor a later card can capture that text again.
    """

    document = run.document
    candidates: list[Candidate] = []
    for node in document.select(matches_card_query):
        if should_skip(node) or run.is_consumed(node):
            continue
        if not is_card_container(node):
            continue

        button_info = find_associated_button(node, run)
        text = normalize_spaces(node.inner_text)
        word_count = count_words(text)
        if word_count < MIN_CARD_WORDS:
            continue

        candidates.append(
            Candidate(
                tag=CARD_TAG,
                text=text,
                word_count=word_count,
                is_heading=False,
                is_card=True,
                position=absolute_position(node, document),
                locator=build_locator(node, document.body),
                button_info=button_info,
                class_names=node.classes,
                element_id=node.element_id,
            )
        )
        run.consume_subtree(node)
        if button_info.button is not None:
            run.consume(button_info.button)

    logger.debug("Detected %d card candidates", len(candidates))
    return candidates
