from __future__ import annotations

import asyncio
import logging
from typing import Any

from playwright.async_api import Error as PlaywrightError, Page

from ..dom.document import RenderedDocument
from ..errors import SnapshotError

logger = logging.getLogger(__name__)


SNAPSHOT_SCRIPT = r"""
() => {
    const OPAQUE_TAGS = new Set(['script', 'style', 'noscript', 'template']);
    const BUTTON_CLASS = /btn|button/;

    const describe = (node, parent) => {
        if (node.nodeType === Node.TEXT_NODE) {
            return { type: 'text', parent, text: node.nodeValue || '' };
        }
        if (node.nodeType !== Node.ELEMENT_NODE) {
            return { type: 'other', parent };
        }
        const tag = node.tagName.toLowerCase();
        const style = window.getComputedStyle(node);
        const rect = node.getBoundingClientRect();
        const className = node.getAttribute('class') || '';
        const labelled = tag === 'a' || tag === 'button' || BUTTON_CLASS.test(className);
        return {
            type: 'element',
            parent,
            tag,
            id: node.id || null,
            className,
            classes: Array.from(node.classList || []),
            role: node.getAttribute('role'),
            ariaHidden: node.getAttribute('aria-hidden'),
            display: style.display,
            visibility: style.visibility,
            opacity: style.opacity,
            offsetWidth: typeof node.offsetWidth === 'number' ? node.offsetWidth : null,
            offsetHeight: typeof node.offsetHeight === 'number' ? node.offsetHeight : null,
            rect: {
                top: rect.top,
                left: rect.left,
                bottom: rect.bottom,
                right: rect.right,
                width: rect.width,
                height: rect.height,
            },
            innerText: typeof node.innerText === 'string' ? node.innerText : null,
            textContent: labelled ? (node.textContent || '') : null,
        };
    };

    // Iterative pre-order walk; parents always precede their children.
    const nodes = [];
    const stack = [[document.body, null]];
    while (stack.length) {
        const [node, parent] = stack.pop();
        const index = nodes.length;
        const entry = describe(node, parent);
        nodes.push(entry);
        if (entry.type !== 'element' || OPAQUE_TAGS.has(entry.tag)) {
            continue;
        }
        const children = node.childNodes;
        for (let i = children.length - 1; i >= 0; i -= 1) {
            stack.push([children[i], index]);
        }
    }

    const doc = document.documentElement;
    return {
        title: document.title || '',
        scrollX: window.pageXOffset || (doc ? doc.scrollLeft : 0) || 0,
        scrollY: window.pageYOffset || (doc ? doc.scrollTop : 0) || 0,
        nodes,
    };
}
"""

AUTO_SCROLL_SCRIPT = r"""
async ({ distance, interval, maxDuration }) => {
    await new Promise((resolve) => {
        let totalHeight = 0;
        const finish = () => {
            clearInterval(timer);
            clearTimeout(guard);
            window.scrollTo(0, 0);
            resolve();
        };
        const timer = setInterval(() => {
            const scrollHeight = document.body.scrollHeight;
            window.scrollBy(0, distance);
            totalHeight += distance;
            if (totalHeight >= scrollHeight) {
                finish();
            }
        }, interval);
        const guard = setTimeout(finish, maxDuration);
    });
}
"""


class SnapshotCollector:
    """Capture the rendered DOM of a page as a serialisable snapshot."""

    def __init__(
        self,
        scroll_step_px: int = 500,
        scroll_interval_ms: int = 200,
        scroll_max_ms: int = 10_000,
    ) -> None:
        self._scroll_step_px = scroll_step_px
        self._scroll_interval_ms = scroll_interval_ms
        self._scroll_max_ms = scroll_max_ms

    async def auto_scroll(self, page: Page) -> None:
        """Scroll through the page to trigger lazy-loaded content, then return to the top."""

        await self._evaluate_with_retry(
            page,
            AUTO_SCROLL_SCRIPT,
            {
                "distance": self._scroll_step_px,
                "interval": self._scroll_interval_ms,
                "maxDuration": self._scroll_max_ms,
            },
            description="auto_scroll",
            default=None,
        )

    async def collect_payload(self, page: Page) -> dict[str, Any]:
        payload = await self._evaluate_with_retry(
            page,
            SNAPSHOT_SCRIPT,
            None,
            description="dom_snapshot",
            default=None,
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("nodes"), list) or not payload["nodes"]:
            raise SnapshotError("Unable to capture DOM snapshot")
        return payload

    async def collect(self, page: Page) -> RenderedDocument:
        return RenderedDocument.from_snapshot(await self.collect_payload(page))

    async def _evaluate_with_retry(
        self,
        page: Page,
        expression: str,
        arg: Any,
        *,
        description: str,
        default,
        attempts: int = 3,
    ):
        last_error: PlaywrightError | None = None
        for attempt in range(1, attempts + 1):
            try:
                return await page.evaluate(expression, arg)
            except PlaywrightError as exc:
                last_error = exc
                message = str(exc)
                transient_navigation = "Execution context was destroyed" in message or "context was destroyed" in message
                if transient_navigation and attempt < attempts:
                    logger.debug(
                        "Evaluation for %s failed due to navigation (attempt %d/%d); waiting for DOMContentLoaded",
                        description,
                        attempt,
                        attempts,
                    )
                    try:
                        await page.wait_for_load_state("domcontentloaded", timeout=2_000)
                    except PlaywrightError:
                        logger.debug("Load state wait after evaluation failure also failed")
                    await asyncio.sleep(0.2)
                    continue
                logger.warning("Evaluation for %s failed: %s", description, message)
                break

        if last_error is not None:
            logger.warning("Falling back to default for %s due to evaluation failure", description, exc_info=last_error)
        return default
