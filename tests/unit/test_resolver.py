"""Unit tests for effective ID resolution."""

from __future__ import annotations

import pytest

from meteoprog_informers.rendering.resolver import PLACEHOLDER_RE, DefaultIdCell, IdResolver


class CountingLoader:
    def __init__(self, value: str) -> None:
        self.value = value
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        return self.value


class TestDefaultIdCell:
    async def test_loads_once(self) -> None:
        loader = CountingLoader("dflt")
        cell = DefaultIdCell(loader)
        assert await cell.get() == "dflt"
        assert await cell.get() == "dflt"
        assert loader.calls == 1

    async def test_invalidate_reloads(self) -> None:
        loader = CountingLoader("one")
        cell = DefaultIdCell(loader)
        await cell.get()
        loader.value = "two"
        assert await cell.get() == "one"
        cell.invalidate()
        assert await cell.get() == "two"
        assert loader.calls == 2

    async def test_empty_default_is_memoized(self) -> None:
        loader = CountingLoader("")
        cell = DefaultIdCell(loader)
        await cell.get()
        await cell.get()
        assert loader.calls == 1


class TestIdResolver:
    @pytest.mark.parametrize(
        ("explicit", "default", "expected"),
        [
            ("e1", "d1", "e1"),
            ("e1", "", "e1"),
            ("", "d1", "d1"),
            (None, "d1", "d1"),
            ("   ", "d1", "d1"),
            ("", "", ""),
        ],
    )
    async def test_precedence(self, explicit: str | None, default: str, expected: str) -> None:
        resolver = IdResolver(DefaultIdCell(CountingLoader(default)))
        assert await resolver.resolve(explicit) == expected

    async def test_explicit_id_is_stripped_of_markup(self) -> None:
        resolver = IdResolver(DefaultIdCell(CountingLoader("d1")))
        assert await resolver.resolve(" <b>abc-1</b> ") == "abc-1"

    async def test_markup_only_id_falls_back_to_default(self) -> None:
        resolver = IdResolver(DefaultIdCell(CountingLoader("d1")))
        assert await resolver.resolve("<br />") == "d1"

    async def test_explicit_skips_default_lookup(self) -> None:
        loader = CountingLoader("d1")
        resolver = IdResolver(DefaultIdCell(loader))
        await resolver.resolve("e1")
        assert loader.calls == 0


class TestPlaceholderPattern:
    def test_with_id(self) -> None:
        match = PLACEHOLDER_RE.search("x {meteoprog_informer_ab-12} y")
        assert match is not None
        assert match.group(1) == "ab-12"

    def test_without_id(self) -> None:
        match = PLACEHOLDER_RE.search("{meteoprog_informer}")
        assert match is not None
        assert match.group(1) is None

    def test_trailing_underscore_does_not_match(self) -> None:
        assert PLACEHOLDER_RE.search("{meteoprog_informer_}") is None

    def test_invalid_characters_do_not_match(self) -> None:
        assert PLACEHOLDER_RE.search("{meteoprog_informer_a b}") is None
