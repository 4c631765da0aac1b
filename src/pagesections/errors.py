from __future__ import annotations


class PageSectionsError(Exception):
    """Base class for scraper specific exceptions."""


class InvalidURLError(PageSectionsError):
    """Raised when a target URL is not an absolute http(s) URL."""


class RenderError(PageSectionsError):
    """Raised when the browser cannot produce a rendered document."""


class NavigationError(RenderError):
    """Raised when navigation to the target page fails."""


class RenderTimeoutError(RenderError):
    """Raised when the page does not settle within the navigation timeout."""


class SnapshotError(PageSectionsError):
    """Raised when a DOM snapshot cannot be collected or parsed."""
