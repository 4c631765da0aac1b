from __future__ import annotations

from dataclasses import dataclass, field

from .state import Candidate

MAX_VERTICAL_GAP_PX = 150


@dataclass(slots=True)
class Group:
    primary: Candidate
    members: list[Candidate] = field(default_factory=list)
    combined_text: str = ""
    has_button: bool = False
    button_text: str | None = None

    @classmethod
    def start(cls, candidate: Candidate) -> "Group":
        return cls(
            primary=candidate,
            members=[candidate],
            combined_text=candidate.text,
            has_button=candidate.button_info.has_button,
            button_text=candidate.button_info.button_text,
        )

    def absorb(self, candidate: Candidate) -> None:
        self.members.append(candidate)
        if self.combined_text and candidate.text:
            self.combined_text += " " + candidate.text
        if candidate.button_info.has_button:
            self.has_button = True
            self.button_text = candidate.button_info.button_text


def closes_group(previous: Candidate, following: Candidate) -> bool:
    if following.is_heading or following.is_card:
        return True
    return following.position.top - previous.position.bottom > MAX_VERTICAL_GAP_PX


def group_candidates(candidates: list[Candidate]) -> list[Group]:
    """Single pass over candidates already in reading order."""

    groups: list[Group] = []
    index = 0
    while index < len(candidates):
        current = candidates[index]
        group = Group.start(current)
        index += 1

        if current.is_heading and not current.is_card:
            while index < len(candidates) and not closes_group(candidates[index - 1], candidates[index]):
                group.absorb(candidates[index])
                index += 1

        if group.combined_text.strip():
            groups.append(group)
    return groups
