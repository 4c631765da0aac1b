from __future__ import annotations

from typing import Any

import pytest

from pagesections.dom.document import RenderedDocument

from dom_builders import el, page


def landing_page() -> dict[str, Any]:
    """A small junk-removal landing page covering most section categories."""

    return page(
        el(
            "header",
            el("div", "Acme", classes=["logo"]),
            el("nav", el("a", "Home"), el("a", "Services"), el("a", "About")),
            classes=["site-header"],
            box=(0, 0, 1920, 80),
        ),
        el(
            "section",
            el("h1", "Fast Junk Removal", box=(100, 0, 800, 40)),
            el("p", "Same day service across the city", box=(160, 0, 800, 40)),
            el("a", "Get a free quote", classes=["btn", "btn-primary"], box=(220, 0, 200, 40)),
            classes=["hero"],
            box=(100, 0, 1920, 600),
        ),
        el(
            "section",
            el("h2", "Our Services", box=(900, 0, 800, 40)),
            el(
                "div",
                el("h3", "Residential"),
                el("p", "Full home cleanouts and furniture pickup"),
                classes=["service-card"],
                box=(1000, 500, 400, 300),
            ),
            el(
                "div",
                el("h3", "Commercial"),
                el("p", "Office cleanouts handled after hours"),
                classes=["service-card"],
                box=(1000, 0, 400, 300),
            ),
            classes=["services"],
            box=(900, 0, 1920, 500),
        ),
        el(
            "section",
            el("h2", "What our customers say", box=(1800, 0, 800, 40)),
            el("p", '"Best junk removal crew we have ever hired."', box=(1860, 0, 800, 40)),
            el("p", "This promo is hidden from everyone", display="none"),
            classes=["reviews"],
            box=(1800, 0, 1920, 400),
        ),
        el(
            "section",
            el("h2", "Ready to get started?", box=(2400, 0, 800, 40)),
            el("p", "Call 555-123-4567 for a free estimate", box=(2460, 0, 800, 40)),
            el("button", "Call now", box=(2520, 0, 200, 40)),
            classes=["cta-band"],
            box=(2400, 0, 1920, 300),
        ),
        el(
            "footer",
            el("p", "© 2024 Acme Hauling. All rights reserved.", box=(3500, 0, 800, 40)),
            classes=["site-footer"],
            box=(3500, 0, 1920, 200),
        ),
        title="Acme Hauling",
    )


@pytest.fixture()
def landing_payload() -> dict[str, Any]:
    return landing_page()


@pytest.fixture()
def landing_document(landing_payload: dict[str, Any]) -> RenderedDocument:
    return RenderedDocument.from_snapshot(landing_payload)
