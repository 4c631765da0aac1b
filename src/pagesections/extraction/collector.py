from __future__ import annotations

import logging
from functools import cmp_to_key

from ..dom.document import DomElement
from .buttons import find_associated_button
from .cards import detect_cards
from .filters import is_heading, should_skip
from .geometry import absolute_position, build_locator
from .state import Candidate, ExtractionRun
from .text import count_words, exact_visible_text

logger = logging.getLogger(__name__)

MIN_WORDS = 4
ROW_TOLERANCE_PX = 50


def make_candidate(node: DomElement, run: ExtractionRun) -> Candidate | None:
    text = exact_visible_text(node)
    word_count = count_words(text)
    heading = is_heading(node)
    if not ((heading and text) or word_count >= MIN_WORDS):
        return None

    document = run.document
    return Candidate(
        tag=node.tag,
        text=text,
        word_count=word_count,
        is_heading=heading,
        is_card=False,
        position=absolute_position(node, document),
        locator=build_locator(node, document.body),
        button_info=find_associated_button(node, run),
        class_names=node.classes,
        element_id=node.element_id,
    )


def walk(run: ExtractionRun) -> list[Candidate]:
    """Pre-order walk under ``body``; skipped or consumed nodes prune their subtree."""

    candidates: list[Candidate] = []
    stack = list(reversed(run.document.body.children))
    while stack:
        node = stack.pop()
        if should_skip(node) or run.is_consumed(node):
            continue

        candidate = make_candidate(node, run)
        if candidate is None:
            stack.extend(reversed(node.children))
            continue

        candidates.append(candidate)
        run.consume_subtree(node)
        if candidate.button_info.button is not None:
            run.consume(candidate.button_info.button)
    return candidates


def compare_reading_order(a: Candidate, b: Candidate) -> int:
    if abs(a.position.top - b.position.top) < ROW_TOLERANCE_PX:
        return a.position.left - b.position.left
    return a.position.top - b.position.top


def sort_by_position(candidates: list[Candidate]) -> list[Candidate]:
    """Stable top-to-bottom, then left-to-right within a 50px row."""

    return sorted(candidates, key=cmp_to_key(compare_reading_order))


def collect(run: ExtractionRun) -> list[Candidate]:
    cards = detect_cards(run)
    walked = walk(run)
    logger.debug("Collected %d card and %d walked candidates", len(cards), len(walked))
    return sort_by_position(cards + walked)
