from __future__ import annotations

from ..types import SECTION_TYPES, Section, SectionType
from .grouper import Group

# First class token containing the fragment decides the label.
CONTAINER_LABELS: tuple[tuple[str, str], ...] = (
    ("header", "header"),
    ("hero", "hero-section"),
    ("service", "services-section"),
    ("testimonial", "testimonials-section"),
    ("footer", "footer"),
    ("main", "main"),
    ("content", "content"),
    ("container", "container"),
)
DEFAULT_CONTAINER = "section"


def parent_container(class_names: tuple[str, ...]) -> str:
    for fragment, label in CONTAINER_LABELS:
        if any(fragment in token for token in class_names):
            return label
    return DEFAULT_CONTAINER


class SectionAssembler:
    """Holds the per-category counters for one extraction pass."""

    def __init__(self) -> None:
        self._counters: dict[SectionType, int] = {category: 0 for category in SECTION_TYPES}
        self._order = 0

    def assemble(self, group: Group, category: SectionType) -> Section:
        self._counters[category] += 1
        self._order += 1
        primary = group.primary
        text = group.combined_text
        return Section(
            section_id=f"{category}-{self._counters[category]}",
            section_type=category,
            element=primary.tag,
            text=text,
            char_count=len(text),
            parent_container=parent_container(primary.class_names),
            locator=primary.locator,
            order=self._order,
            has_button=group.has_button,
            button_text=group.button_text,
        )
