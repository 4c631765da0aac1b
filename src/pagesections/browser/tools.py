from __future__ import annotations

import re
from urllib.parse import urlparse

from ..errors import InvalidURLError

_HOST_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://([^/]+)/?")
_UNSAFE_FILENAME = re.compile(r"[/?#:]")


def normalize_host(url: str) -> str:
    match = _HOST_PATTERN.match(url)
    if not match:
        return url.lower()
    return match.group(1).lower()


def validate_url(url: str) -> str:
    """Return the stripped URL, or raise if it is not an absolute http(s) URL."""

    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InvalidURLError("Please provide a valid HTTP or HTTPS URL")
    return candidate


def url_to_filename(url: str, suffix: str = ".json") -> str:
    stripped = re.sub(r"^https?://", "", url)
    return _UNSAFE_FILENAME.sub("_", stripped) + suffix
