from __future__ import annotations

from pagesections.extraction.geometry import absolute_position, build_locator, same_tag_ordinal

from dom_builders import document, el, find


def test_absolute_position_adds_scroll_offsets() -> None:
    doc = document(el("p", "Some body text here", box=(100, 20, 300, 50)), scroll=(5, 250))

    box = absolute_position(find(doc, "p"), doc)

    assert (box.top, box.left, box.bottom, box.right) == (350, 25, 400, 325)
    assert (box.width, box.height) == (300, 50)


def test_absolute_position_rounds_half_up() -> None:
    doc = document(el("p", "text", box=(2.5, 0.5, 10.5, 1.4)))

    box = absolute_position(find(doc, "p"), doc)

    assert box.top == 3
    assert box.left == 1
    assert box.width == 11
    assert box.height == 1


def test_body_locator() -> None:
    doc = document(el("p", "x"))

    assert build_locator(doc.body, doc.body) == "/html/body"


def test_locator_counts_same_tag_siblings_only() -> None:
    doc = document(
        el("div", el("h2", "Title"), el("p", "First"), el("span", "gap"), el("p", "Second")),
    )

    second = find(doc, "p", 1)

    assert same_tag_ordinal(second) == 2
    assert build_locator(second, doc.body) == "/html/body/div[1]/p[2]"


def test_locator_is_anchored_at_nearest_id() -> None:
    doc = document(el("section", el("div", el("p", "Inside")), id="services"))

    assert build_locator(find(doc, "p"), doc.body) == '//*[@id="services"]/div[1]/p[1]'
    assert build_locator(find(doc, "section"), doc.body) == '//*[@id="services"]'


def test_locator_is_empty_when_detached() -> None:
    doc = document(el("div", el("p", "Inside")))
    node = find(doc, "div")
    node.parent = None

    assert build_locator(find(doc, "p"), doc.body) == ""
