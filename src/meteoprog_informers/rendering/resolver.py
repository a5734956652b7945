"""Effective informer ID resolution shared by every rendering surface."""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable

from meteoprog_informers.helpers import sanitize_text

# {meteoprog_informer} or {meteoprog_informer_<letters, digits, hyphens>}.
# A bare trailing underscore does not match and is left as literal text.
PLACEHOLDER_RE = re.compile(r"\{meteoprog_informer(?:_([A-Za-z0-9\-]+))?\}")


class DefaultIdCell:
    """Lazily loaded, memoized default informer ID."""

    def __init__(self, loader: Callable[[], Awaitable[str]]) -> None:
        self._loader = loader
        self._value: str | None = None

    async def get(self) -> str:
        if self._value is None:
            self._value = sanitize_text(await self._loader())
        return self._value

    def invalidate(self) -> None:
        self._value = None


class IdResolver:
    def __init__(self, default_id: DefaultIdCell) -> None:
        self.default_id = default_id

    async def resolve(self, explicit: str | None = None) -> str:
        """Explicit ID if non-empty, else the default ID, else ``""``."""
        explicit = sanitize_text(explicit)
        if explicit:
            return explicit
        return await self.default_id.get()
