from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import SnapshotError


class RectSnapshot(BaseModel):
    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0
    width: float = 0.0
    height: float = 0.0


class TextSnapshot(BaseModel):
    type: Literal["text"] = "text"
    parent: int | None = None
    text: str = ""


class OtherSnapshot(BaseModel):
    type: Literal["other"] = "other"
    parent: int | None = None


class ElementSnapshot(BaseModel):
    """Wire format of one element as serialised by the in-page snapshot script."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: Literal["element"] = "element"
    parent: int | None = None
    tag: str
    id: str | None = None
    class_name: str = ""
    classes: list[str] = Field(default_factory=list)
    role: str | None = None
    aria_hidden: str | None = None
    display: str = "block"
    visibility: str = "visible"
    opacity: str = "1"
    offset_width: float | None = None
    offset_height: float | None = None
    rect: RectSnapshot = Field(default_factory=RectSnapshot)
    inner_text: str | None = None
    text_content: str | None = None


NodeSnapshot = Annotated[Union[ElementSnapshot, TextSnapshot, OtherSnapshot], Field(discriminator="type")]


class DocumentSnapshot(BaseModel):
    """Flat, pre-order node list; ``nodes[0]`` is ``body`` and every other node
    names the index of its parent element, which always precedes it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = ""
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    nodes: list[NodeSnapshot] = Field(min_length=1)


@dataclass(slots=True, eq=False)
class DomText:
    text: str
    parent: "DomElement | None" = None


@dataclass(slots=True, eq=False)
class DomOther:
    parent: "DomElement | None" = None


@dataclass(slots=True, eq=False)
class DomElement:
    """Linked, read-only view over an element snapshot.

    Identity comparison is used throughout (``eq=False``): two elements with
    identical markup are still distinct nodes.
    """

    node_id: int
    tag: str
    element_id: str | None
    class_name: str
    classes: tuple[str, ...]
    role: str | None
    aria_hidden: str | None
    display: str
    visibility: str
    opacity: str
    offset_width: float | None
    offset_height: float | None
    rect: RectSnapshot
    inner_text: str
    text_content: str
    parent: "DomElement | None" = None
    child_nodes: list["DomElement | DomText | DomOther"] = field(default_factory=list)

    @property
    def children(self) -> list["DomElement"]:
        return [child for child in self.child_nodes if isinstance(child, DomElement)]

    @property
    def class_string(self) -> str:
        """Lower-cased, space-joined class tokens."""

        return " ".join(self.classes).lower()

    def next_element_sibling(self) -> "DomElement | None":
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = siblings.index(self)
        if index + 1 < len(siblings):
            return siblings[index + 1]
        return None

    def iter_descendants(self) -> Iterator["DomElement"]:
        """Yield descendant elements in document order (self excluded)."""

        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def first_descendant(self, predicate: Callable[["DomElement"], bool]) -> "DomElement | None":
        for node in self.iter_descendants():
            if predicate(node):
                return node
        return None

    def __repr__(self) -> str:
        return f"<DomElement {self.tag}#{self.node_id}>"


@dataclass(slots=True)
class RenderedDocument:
    """A quiescent rendered page: element tree rooted at ``body`` plus scroll offsets."""

    title: str
    body: DomElement
    scroll_x: float = 0.0
    scroll_y: float = 0.0

    @classmethod
    def from_snapshot(cls, payload: dict[str, Any] | DocumentSnapshot) -> "RenderedDocument":
        try:
            snapshot = (
                payload if isinstance(payload, DocumentSnapshot) else DocumentSnapshot.model_validate(payload)
            )
            body = _link_tree(snapshot.nodes)
        except ValidationError as exc:
            raise SnapshotError(f"Invalid DOM snapshot: {exc}") from exc
        return cls(title=snapshot.title, body=body, scroll_x=snapshot.scroll_x, scroll_y=snapshot.scroll_y)

    def iter_elements(self) -> Iterator[DomElement]:
        """Yield every element, body included, in document order."""

        yield self.body
        yield from self.body.iter_descendants()

    def select(self, predicate: Callable[[DomElement], bool]) -> list[DomElement]:
        return [node for node in self.iter_elements() if predicate(node)]


def _to_element(source: ElementSnapshot, node_id: int, parent: DomElement | None) -> DomElement:
    return DomElement(
        node_id=node_id,
        tag=source.tag.lower(),
        element_id=source.id or None,
        class_name=source.class_name,
        classes=tuple(source.classes),
        role=source.role,
        aria_hidden=source.aria_hidden,
        display=source.display,
        visibility=source.visibility,
        opacity=source.opacity,
        offset_width=source.offset_width,
        offset_height=source.offset_height,
        rect=source.rect,
        inner_text=source.inner_text or "",
        text_content=source.text_content or "",
        parent=parent,
    )


def _link_tree(nodes: list[ElementSnapshot | TextSnapshot | OtherSnapshot]) -> DomElement:
    root = nodes[0]
    if not isinstance(root, ElementSnapshot) or root.parent is not None:
        raise SnapshotError("Snapshot must start with the body element")

    body = _to_element(root, 0, None)
    elements: dict[int, DomElement] = {0: body}
    for index, node in enumerate(nodes[1:], start=1):
        parent = elements.get(node.parent) if node.parent is not None and node.parent < index else None
        if parent is None:
            raise SnapshotError(f"Snapshot node {index} has no preceding parent element")
        if isinstance(node, ElementSnapshot):
            element = _to_element(node, len(elements), parent)
            elements[index] = element
            parent.child_nodes.append(element)
        elif isinstance(node, TextSnapshot):
            parent.child_nodes.append(DomText(text=node.text, parent=parent))
        else:
            parent.child_nodes.append(DomOther(parent=parent))
    return body
