"""Named filter hooks operators can use to override computed values."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

DEBUG_MODE = "meteoprog_debug_mode"
LOADER_URL = "meteoprog_loader_url"
LOADER_VERSION = "meteoprog_loader_version"


class Filters:
    """Ordered chains of value-transforming callbacks, keyed by filter name.

    Callbacks run by ascending priority, then registration order; each one
    receives the previous callback's return value.
    """

    def __init__(self) -> None:
        self._chains: dict[str, list[tuple[int, int, Callable[..., Any]]]] = defaultdict(list)
        self._seq = 0

    def add(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None:
        self._seq += 1
        self._chains[name].append((priority, self._seq, callback))
        self._chains[name].sort(key=lambda item: (item[0], item[1]))

    def has(self, name: str) -> bool:
        return bool(self._chains.get(name))

    def remove_all(self, name: str) -> None:
        self._chains.pop(name, None)

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        for _, _, callback in self._chains.get(name, ()):
            value = callback(value, *args)
        return value
