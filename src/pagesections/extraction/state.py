from __future__ import annotations

from dataclasses import dataclass, field

from ..dom.document import DomElement, RenderedDocument
from .geometry import BoundingBox


@dataclass(frozen=True, slots=True)
class ButtonInfo:
    has_button: bool = False
    button_text: str | None = None
    button: DomElement | None = field(default=None, repr=False, compare=False)


NO_BUTTON = ButtonInfo()


@dataclass(slots=True)
class NodeRecord:
    node: DomElement
    consumed: bool = False


@dataclass(slots=True)
class Candidate:
    tag: str
    text: str
    word_count: int
    is_heading: bool
    is_card: bool
    position: BoundingBox
    locator: str
    button_info: ButtonInfo
    class_names: tuple[str, ...]
    element_id: str | None = None


class ExtractionRun:
    """State owned by exactly one extraction pass over one document.

    Every element gets a record whose ``consumed`` flag is flipped at most
    once; the card pass, the tree walk and the button search all consult it.
    """

    def __init__(self, document: RenderedDocument) -> None:
        self.document = document
        self._records: dict[int, NodeRecord] = {
            node.node_id: NodeRecord(node) for node in document.iter_elements()
        }

    def is_consumed(self, node: DomElement) -> bool:
        return self._records[node.node_id].consumed

    def consume(self, node: DomElement) -> None:
        record = self._records[node.node_id]
        if not record.consumed:
            record.consumed = True

    def consume_subtree(self, node: DomElement) -> None:
        self.consume(node)
        for descendant in node.iter_descendants():
            self.consume(descendant)

    def consumed_count(self) -> int:
        return sum(1 for record in self._records.values() if record.consumed)
