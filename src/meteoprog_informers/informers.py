"""Cached access to the informer directory.

Snapshots are stored as transients keyed by a fingerprint of the configured
API key and live for ``cache.ttl_seconds`` (three minutes by default). An
empty fetch result is cached too, so a bad key or an unreachable endpoint is
not hit again until the snapshot expires.

In debug mode a fixed local fixture replaces the directory entirely: no cache
reads, no cache writes, no network.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from meteoprog_informers import hooks
from meteoprog_informers.models.informer import Informer, InformerList

if TYPE_CHECKING:
    from meteoprog_informers.config import Settings
    from meteoprog_informers.directory import DirectoryClient
    from meteoprog_informers.store import OptionStore

log = structlog.get_logger()

OPT_API_KEY = "meteoprog_api_key"
OPT_DEFAULT_ID = "meteoprog_default_informer_id"
CACHE_KEY_PREFIX = "meteoprog_informers_cache_"

_FIXTURE_CREATED_AT = "2025-09-30T19:07:37.000000Z"

DEBUG_FIXTURE: tuple[Informer, ...] = (
    Informer(
        informer_id="11111111-1111-1111-aa3a-5bb2d44d4fd1",
        domain="https://www.wordpress.org",
        active=True,
        created_at=_FIXTURE_CREATED_AT,
    ),
    Informer(
        informer_id="22222222-2222-2222-bbf0-ee43197fdd39",
        domain="https://localhost",
        active=True,
        created_at=_FIXTURE_CREATED_AT,
    ),
    Informer(
        informer_id="33333333-3333-3333-acf3-2b1c6d6f3b35",
        domain="http://example.com",
        active=False,
        created_at=_FIXTURE_CREATED_AT,
    ),
    Informer(
        informer_id="44444444-4444-4444-acf3-2b1c6d6f3b35",
        domain="https://subdomain.example.com",
        active=True,
        created_at=_FIXTURE_CREATED_AT,
    ),
)


def cache_key_for(api_key: str) -> str:
    return CACHE_KEY_PREFIX + hashlib.md5(api_key.encode("utf-8")).hexdigest()


async def resolve_debug_mode(
    settings: Settings, store: OptionStore, filters: hooks.Filters
) -> bool:
    """Decide whether the directory is served from the local fixture.

    Precedence: a forced API key (stored, debug off) beats the plain debug
    flag; the ``meteoprog_debug_mode`` filter gets the final word.
    """
    debug = settings.debug.enabled
    if settings.debug.api_key:
        await store.update_option(OPT_API_KEY, settings.debug.api_key)
        debug = False
    return bool(filters.apply(hooks.DEBUG_MODE, debug))


class InformerCache:
    """Directory snapshot cache with a debug-mode fixture bypass."""

    def __init__(
        self,
        directory: DirectoryClient,
        store: OptionStore,
        *,
        debug: bool = False,
        ttl_seconds: int = 180,
    ) -> None:
        self._directory = directory
        self._store = store
        self._ttl_seconds = ttl_seconds
        self.debug = debug

    async def get_api_key(self) -> str:
        return await self._store.get_option(OPT_API_KEY, "")

    async def cache_key(self) -> str:
        return cache_key_for(await self.get_api_key())

    async def get_informers(self) -> list[Informer]:
        """Current directory snapshot; fetches and stores it on a miss."""
        if self.debug:
            return list(DEBUG_FIXTURE)

        api_key = await self.get_api_key()
        key = cache_key_for(api_key)

        cached = await self._store.get_transient(key)
        if cached is not None:
            try:
                return InformerList.validate_python(cached)
            except ValidationError:
                log.warning("snapshot_invalid", key=key)

        informers = await self._directory.fetch_informers(api_key)
        await self._store.set_transient(
            key, [informer.to_payload() for informer in informers], self._ttl_seconds
        )
        log.info("snapshot_stored", key=key, count=len(informers))
        return informers

    async def find(self, informer_id: str) -> Informer | None:
        """Look up one informer in the current snapshot."""
        if not informer_id:
            return None
        for informer in await self.get_informers():
            if informer.informer_id == informer_id:
                return informer
        return None

    async def clear_cache(self) -> None:
        """Drop the current key's snapshot. Other keys' snapshots are kept."""
        await self._store.delete_transient(await self.cache_key())

    async def refresh(self) -> list[Informer]:
        await self.clear_cache()
        return await self.get_informers()

    async def validate_key(self, candidate: str | None) -> bool:
        """Validate a key with an uncached fetch (fixture-backed in debug mode)."""
        if self.debug:
            return bool(DEBUG_FIXTURE)
        return await self._directory.validate_key(candidate)
