"""Unit-specific fixtures (no I/O beyond in-memory SQLite and mocked HTTP)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import aiosqlite
import httpx
import pytest

from meteoprog_informers.directory import DirectoryClient
from meteoprog_informers.informers import InformerCache
from meteoprog_informers.store import OptionStore

if TYPE_CHECKING:
    from meteoprog_informers.config import Settings


@pytest.fixture()
async def store():
    """In-memory option store for unit tests."""
    async with aiosqlite.connect(":memory:") as db:
        s = OptionStore(db)
        await s.init_db()
        yield s


@pytest.fixture()
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def directory(http_client: httpx.AsyncClient, settings: Settings) -> DirectoryClient:
    return DirectoryClient(http_client, settings.api, settings.site.home_url)


@pytest.fixture()
def informer_cache(directory: DirectoryClient, store: OptionStore) -> InformerCache:
    return InformerCache(directory, store)
