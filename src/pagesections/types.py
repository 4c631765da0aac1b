from __future__ import annotations

from datetime import datetime
from typing import Literal

import orjson
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SectionType = Literal[
    "hero",
    "cta",
    "service",
    "testimonial",
    "faq",
    "benefit",
    "process",
    "about",
    "footer",
    "other",
]

SECTION_TYPES: tuple[SectionType, ...] = (
    "hero",
    "cta",
    "service",
    "testimonial",
    "faq",
    "benefit",
    "process",
    "about",
    "footer",
    "other",
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self, pretty: bool = True) -> str:
        option = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(self.model_dump(mode="json", by_alias=True), option=option).decode()


class Section(_CamelModel):
    """Final classified content block in reading order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    section_id: str
    section_type: SectionType
    element: str
    text: str
    char_count: int = Field(ge=0)
    parent_container: str
    locator: str
    order: int = Field(ge=1)
    has_button: bool = False
    button_text: str | None = None


class ExtractionErrorRecord(_CamelModel):
    message: str


class ExtractionResult(_CamelModel):
    """Output of a single extraction pass over one rendered document."""

    title: str = ""
    sections: list[Section] = Field(default_factory=list)
    errors: list[ExtractionErrorRecord] = Field(default_factory=list)

    def section_types(self) -> list[SectionType]:
        seen: list[SectionType] = []
        for section in self.sections:
            if section.section_type not in seen:
                seen.append(section.section_type)
        return seen

    def counts_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for section in self.sections:
            counts[section.section_type] = counts.get(section.section_type, 0) + 1
        return counts


class ScrapeResult(ExtractionResult):
    url: str
    scraped_at: datetime


class ScrapeMetadata(_CamelModel):
    scraping_duration: float
    sections_found: int
    section_types: list[SectionType]
    timestamp: datetime


class ScrapeResponse(ScrapeResult):
    metadata: ScrapeMetadata
