from __future__ import annotations

from .classifier import RULES, classify
from .collector import collect, sort_by_position, walk
from .grouper import Group, group_candidates
from .pipeline import extract
from .state import ButtonInfo, Candidate, ExtractionRun

__all__ = [
    "ButtonInfo",
    "Candidate",
    "ExtractionRun",
    "Group",
    "RULES",
    "classify",
    "collect",
    "extract",
    "group_candidates",
    "sort_by_position",
    "walk",
]
