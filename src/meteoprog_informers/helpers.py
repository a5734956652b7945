"""Small string helpers shared by the renderers and settings actions."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

MASK_SENTINEL = "****"

_TAG_RE = re.compile(r"<[^>]*>")
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def mask_string(
    value: str,
    from_start: int = 4,
    before_end: int = 6,
    between: int = 8,
    mask: str = "*",
) -> str:
    """Hide the middle of a secret behind a fixed-width mask.

    ``550e8400-e29b-41d4-a716-446655440000`` becomes ``550e********440000``.
    Strings too short to keep both ends visible are returned unchanged.
    """
    value = str(value)
    if len(value) <= from_start + before_end:
        return value
    return value[:from_start] + mask * between + value[-before_end:]


def is_masked(value: str) -> bool:
    """True for the masked display form of a key (never a real new value)."""
    return MASK_SENTINEL in value


def host_from_url(url: str) -> str:
    """Lower-cased host of a URL or bare domain, or ``""``."""
    if not url:
        return ""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        # malformed netloc, e.g. an unclosed IPv6 bracket
        return ""
    if host:
        return host.lower()
    # bare domain without scheme
    url = _SCHEME_RE.sub("", url)
    return url.split("/", 1)[0].lower()


def sanitize_text(value: object) -> str:
    """Strip tags, collapse whitespace, trim."""
    if value is None:
        return ""
    text = _TAG_RE.sub("", str(value))
    return " ".join(text.split())
