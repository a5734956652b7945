"""Integration test fixtures.

Provides a fully wired AppState with in-memory SQLite and a real httpx
client (requests are intercepted with respx in the tests themselves).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import aiosqlite
import httpx
import pytest

from meteoprog_informers.state import build_app_state
from meteoprog_informers.store import OptionStore

if TYPE_CHECKING:
    from meteoprog_informers.config import Settings
    from meteoprog_informers.state import AppState


@pytest.fixture()
async def app_state(settings: Settings) -> AppState:
    async with aiosqlite.connect(":memory:") as db:
        store = OptionStore(db)
        await store.init_db()

        async with httpx.AsyncClient() as client:
            yield await build_app_state(settings, store, client)


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Environment for CLI subprocesses, without inherited METEOPROG__ overrides."""
    return {k: v for k, v in os.environ.items() if not k.startswith("METEOPROG__")}
