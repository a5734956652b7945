"""Unit tests for meteoprog_informers.helpers and hooks."""

from __future__ import annotations

from meteoprog_informers.helpers import host_from_url, is_masked, mask_string, sanitize_text
from meteoprog_informers.hooks import Filters


class TestMaskString:
    def test_short_string_returned_as_is(self) -> None:
        assert mask_string("abc") == "abc"
        assert mask_string("0123456789") == "0123456789"

    def test_long_string_masks_middle(self) -> None:
        key = "550e8400-e29b-41d4-a716-446655440000"
        assert mask_string(key) == "550e********440000"

    def test_custom_widths(self) -> None:
        assert mask_string("abcdefghij", from_start=2, before_end=2, between=3, mask="#") == (
            "ab###ij"
        )

    def test_masked_value_is_recognized(self) -> None:
        assert is_masked(mask_string("550e8400-e29b-41d4-a716-446655440000"))
        assert is_masked("****anything")
        assert not is_masked("plain-key")


class TestHostFromUrl:
    def test_full_url(self) -> None:
        assert host_from_url("https://Sub.Example.com/path?q=1") == "sub.example.com"

    def test_plain_domain(self) -> None:
        assert host_from_url("Example.com") == "example.com"

    def test_plain_domain_with_path(self) -> None:
        assert host_from_url("example.com/weather") == "example.com"

    def test_empty(self) -> None:
        assert host_from_url("") == ""

    def test_malformed_ipv6_url(self) -> None:
        assert host_from_url("https://[broken") == ""


class TestSanitizeText:
    def test_strips_tags_and_whitespace(self) -> None:
        assert sanitize_text("  <b>abc</b>\n ") == "abc"

    def test_none(self) -> None:
        assert sanitize_text(None) == ""


class TestFilters:
    def test_no_callbacks_returns_value(self) -> None:
        assert Filters().apply("anything", 42) == 42

    def test_callbacks_chain_in_priority_order(self) -> None:
        filters = Filters()
        filters.add("f", lambda v: v + "b", priority=20)
        filters.add("f", lambda v: v + "a")
        assert filters.apply("f", "") == "ab"

    def test_same_priority_keeps_registration_order(self) -> None:
        filters = Filters()
        filters.add("f", lambda v: v + "1")
        filters.add("f", lambda v: v + "2")
        assert filters.apply("f", "") == "12"

    def test_remove_all(self) -> None:
        filters = Filters()
        filters.add("f", lambda v: "changed")
        filters.remove_all("f")
        assert not filters.has("f")
        assert filters.apply("f", "orig") == "orig"
