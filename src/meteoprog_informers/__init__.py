"""Meteoprog weather informers: directory client, cache and page rendering."""

from __future__ import annotations

__version__ = "1.0.0"
