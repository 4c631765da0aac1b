from __future__ import annotations

from typing import Any, Iterable

from pagesections.dom.document import RenderedDocument
from pagesections.extraction.geometry import BoundingBox
from pagesections.extraction.state import NO_BUTTON, ButtonInfo, Candidate

BLOCK_TAGS = frozenset(
    {"div", "p", "section", "article", "header", "footer", "main", "ul", "ol", "li", "h1", "h2", "h3", "h4", "h5", "h6"}
)

Child = dict[str, Any] | str


def text(value: str) -> dict[str, Any]:
    return {"type": "text", "text": value}


def comment() -> dict[str, Any]:
    return {"type": "other"}


def _normalise_children(children: Iterable[Child]) -> list[dict[str, Any]]:
    return [text(child) if isinstance(child, str) else child for child in children]


def _visible(child: dict[str, Any]) -> bool:
    return child.get("display") != "none" and child.get("visibility") != "hidden"


def _inner_text(children: list[dict[str, Any]]) -> str:
    parts: list[str] = []
    for child in children:
        if child["type"] == "text":
            parts.append(child["text"])
        elif child["type"] == "element" and _visible(child):
            value = child.get("innerText") or ""
            if child["tag"] in BLOCK_TAGS:
                parts.append(f"\n{value}\n")
            else:
                parts.append(value)
    joined = "".join(parts)
    lines = [line.strip(" ") for line in joined.split("\n")]
    return "\n".join(line for line in lines if line)


def _text_content(children: list[dict[str, Any]]) -> str:
    parts: list[str] = []
    for child in children:
        if child["type"] == "text":
            parts.append(child["text"])
        elif child["type"] == "element":
            parts.append(_text_content(child["children"]))
    return "".join(parts)


def el(
    tag: str,
    *children: Child,
    id: str | None = None,
    classes: Iterable[str] = (),
    box: tuple[float, float, float, float] = (0, 0, 400, 40),
    role: str | None = None,
    aria_hidden: str | None = None,
    display: str = "block",
    visibility: str = "visible",
    opacity: str = "1",
    inner_text: str | None = None,
) -> dict[str, Any]:
    """Element payload; ``box`` is (top, left, width, height) in viewport coordinates."""

    nodes = _normalise_children(children)
    top, left, width, height = box
    classes = list(classes)
    hidden = display == "none"
    class_name = " ".join(classes)
    labelled = tag in {"a", "button"} or "btn" in class_name or "button" in class_name
    return {
        "type": "element",
        "tag": tag,
        "id": id,
        "className": class_name,
        "classes": classes,
        "role": role,
        "ariaHidden": aria_hidden,
        "display": display,
        "visibility": visibility,
        "opacity": opacity,
        "offsetWidth": 0 if hidden else width,
        "offsetHeight": 0 if hidden else height,
        "rect": {
            "top": top,
            "left": left,
            "bottom": top + height,
            "right": left + width,
            "width": width,
            "height": height,
        },
        "innerText": _inner_text(nodes) if inner_text is None else inner_text,
        "textContent": _text_content(nodes) if labelled else None,
        "children": nodes,
    }


def flatten(body: dict[str, Any]) -> list[dict[str, Any]]:
    """Pre-order node list with parent indices, as the snapshot script emits it."""

    nodes: list[dict[str, Any]] = []
    stack: list[tuple[dict[str, Any], int | None]] = [(body, None)]
    while stack:
        node, parent = stack.pop()
        index = len(nodes)
        entry = {key: value for key, value in node.items() if key != "children"}
        entry["parent"] = parent
        nodes.append(entry)
        for child in reversed(node.get("children", [])):
            stack.append((child, index))
    return nodes


def page(*children: Child, title: str = "Test Page", scroll: tuple[float, float] = (0, 0)) -> dict[str, Any]:
    scroll_x, scroll_y = scroll
    return {
        "title": title,
        "scrollX": scroll_x,
        "scrollY": scroll_y,
        "nodes": flatten(el("body", *children, box=(0, 0, 1920, 6000))),
    }


def document(*children: Child, title: str = "Test Page", scroll: tuple[float, float] = (0, 0)) -> RenderedDocument:
    return RenderedDocument.from_snapshot(page(*children, title=title, scroll=scroll))


def find(doc: RenderedDocument, tag: str, index: int = 0):
    return [node for node in doc.iter_elements() if node.tag == tag][index]


def candidate(
    text_value: str,
    *,
    tag: str = "p",
    top: int = 0,
    height: int = 40,
    left: int = 0,
    is_card: bool = False,
    button: str | None = None,
    classes: tuple[str, ...] = (),
    element_id: str | None = None,
) -> Candidate:
    button_info = ButtonInfo(has_button=True, button_text=button) if button is not None else NO_BUTTON
    return Candidate(
        tag="card" if is_card else tag,
        text=text_value,
        word_count=len(text_value.split()),
        is_heading=tag in {"h1", "h2", "h3", "h4", "h5", "h6"} and not is_card,
        is_card=is_card,
        position=BoundingBox(top=top, left=left, bottom=top + height, right=left + 400, width=400, height=height),
        locator=f"/html/body/{tag}[1]",
        button_info=button_info,
        class_names=classes,
        element_id=element_id,
    )
