from __future__ import annotations

import pytest

from pagesections.extraction.filters import is_heading, should_skip

from dom_builders import document, el


def first(*children):
    return document(*children).body.children[0]


@pytest.mark.parametrize(
    "node",
    [
        el("nav", "Home"),
        el("div", "Home", role="navigation"),
        el("div", "Home", classes=["navbar"]),
        el("ul", "Home", classes=["main-menu"]),
        el("div", "Home", id="mainNav"),
        el("div", "Home", id="mobile-menu"),
    ],
)
def test_navigation_containers_are_skipped(node) -> None:
    assert should_skip(first(node)) is True


@pytest.mark.parametrize("tag", ["input", "select", "textarea", "label", "option", "fieldset", "legend"])
def test_form_controls_are_skipped(tag: str) -> None:
    assert should_skip(first(el(tag, "Your name"))) is True


def test_buttons_are_not_form_controls() -> None:
    assert should_skip(first(el("button", "Get a free quote"))) is False


@pytest.mark.parametrize("tag", ["script", "style", "noscript", "meta", "link"])
def test_non_rendering_tags_are_skipped(tag: str) -> None:
    assert should_skip(first(el(tag, "content"))) is True


@pytest.mark.parametrize(
    "node",
    [
        el("p", "Hidden text", display="none"),
        el("p", "Hidden text", visibility="hidden"),
        el("p", "Hidden text", opacity="0"),
        el("p", "Hidden text", box=(0, 0, 0, 20)),
        el("p", "Hidden text", box=(0, 0, 300, 0)),
        el("p", "Hidden text", aria_hidden="true"),
    ],
)
def test_hidden_elements_are_skipped(node) -> None:
    assert should_skip(first(node)) is True


def test_visible_content_is_kept() -> None:
    node = first(el("p", "We haul away everything", classes=["lead"], aria_hidden="false"))

    assert should_skip(node) is False


def test_unknown_offsets_do_not_count_as_zero_size() -> None:
    doc = document(el("svg", "icon"))
    node = doc.body.children[0]
    node.offset_width = None
    node.offset_height = None

    assert should_skip(node) is False


def test_is_heading_matches_levels_one_to_six() -> None:
    doc = document(el("h1", "a"), el("h6", "b"), el("header", "c"), el("h7", "d"))

    assert [is_heading(node) for node in doc.body.children] == [True, True, False, False]
