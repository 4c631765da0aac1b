from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from ..types import SectionType
from .grouper import Group

HERO_MAX_TOP_PX = 800
FOOTER_MIN_TOP_PX = 3000

PHONE_PATTERN = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")
QUOTED_PATTERN = re.compile(r'"[^"]{20,}"')

CTA_PHRASES = ("call now", "get quote", "free estimate", "contact")
SERVICE_TERMS = (
    "service",
    "residential",
    "commercial",
    "construction",
    "estate",
    "hoarding",
    "appliance",
    "furniture",
)
TESTIMONIAL_TERMS = ("testimonial", "review", "customer", "client")
FAQ_TERMS = ("faq", "frequently asked", "question", "answer")
BENEFIT_TERMS = ("why choose", "benefit", "advantage", "licensed", "insured", "eco-friendly")
PROCESS_TERMS = ("how it works", "process", "step", "simple")
ABOUT_TERMS = ("about", "our company", "who we are", "our mission")
FOOTER_TERMS = ("copyright", "all rights reserved")


@dataclass(frozen=True, slots=True)
class GroupFeatures:
    text: str
    tag: str
    classes: str
    element_id: str
    top: int
    is_card: bool
    has_button: bool

    @classmethod
    def of(cls, group: Group) -> "GroupFeatures":
        primary = group.primary
        return cls(
            text=group.combined_text.lower(),
            tag=primary.tag,
            classes=" ".join(primary.class_names).lower(),
            element_id=(primary.element_id or "").lower(),
            top=primary.position.top,
            is_card=primary.is_card,
            has_button=group.has_button,
        )

    def mentions(self, terms: tuple[str, ...]) -> bool:
        return any(term in self.text for term in terms)

    def has_class(self, *fragments: str) -> bool:
        return any(fragment in self.classes for fragment in fragments)


def _is_hero(f: GroupFeatures) -> bool:
    return (f.tag == "h1" and f.top < HERO_MAX_TOP_PX) or "hero" in f.classes or "hero" in f.element_id


def _is_cta(f: GroupFeatures) -> bool:
    return f.has_button and (f.mentions(CTA_PHRASES) or PHONE_PATTERN.search(f.text) is not None)


def _is_service(f: GroupFeatures) -> bool:
    return f.mentions(SERVICE_TERMS) or f.has_class("service") or f.is_card


def _is_testimonial(f: GroupFeatures) -> bool:
    return (
        f.mentions(TESTIMONIAL_TERMS)
        or QUOTED_PATTERN.search(f.text) is not None
        or f.has_class("testimonial", "review")
    )


def _is_faq(f: GroupFeatures) -> bool:
    return f.mentions(FAQ_TERMS) or f.has_class("faq", "accordion")


def _is_benefit(f: GroupFeatures) -> bool:
    return f.mentions(BENEFIT_TERMS) or f.has_class("benefit", "feature")


def _is_process(f: GroupFeatures) -> bool:
    return f.mentions(PROCESS_TERMS) or f.has_class("process", "steps")


def _is_about(f: GroupFeatures) -> bool:
    return f.mentions(ABOUT_TERMS) or f.has_class("about")


def _is_footer(f: GroupFeatures) -> bool:
    return f.top > FOOTER_MIN_TOP_PX or f.has_class("footer") or f.mentions(FOOTER_TERMS)


Rule = tuple[SectionType, Callable[[GroupFeatures], bool]]

# Order is significant: e.g. a phone CTA mentioning "service" must stay a cta.
RULES: tuple[Rule, ...] = (
    ("hero", _is_hero),
    ("cta", _is_cta),
    ("service", _is_service),
    ("testimonial", _is_testimonial),
    ("faq", _is_faq),
    ("benefit", _is_benefit),
    ("process", _is_process),
    ("about", _is_about),
    ("footer", _is_footer),
)

DEFAULT_CATEGORY: SectionType = "other"


def classify(group: Group, rules: tuple[Rule, ...] = RULES) -> SectionType:
    features = GroupFeatures.of(group)
    for category, predicate in rules:
        if predicate(features):
            return category
    return DEFAULT_CATEGORY
