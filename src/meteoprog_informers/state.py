"""Process-wide wiring and per-request rendering scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from meteoprog_informers.directory import DirectoryClient, site_host
from meteoprog_informers.hooks import Filters
from meteoprog_informers.informers import OPT_DEFAULT_ID, InformerCache, resolve_debug_mode
from meteoprog_informers.rendering.context import RenderContext
from meteoprog_informers.rendering.emitter import Emitter
from meteoprog_informers.rendering.resolver import DefaultIdCell, IdResolver
from meteoprog_informers.rendering.surfaces import InformerRenderer

if TYPE_CHECKING:
    import httpx

    from meteoprog_informers.config import Settings
    from meteoprog_informers.store import OptionStore


@dataclass
class AppState:
    """Long-lived collaborators shared by every request."""

    settings: Settings
    store: OptionStore
    http_client: httpx.AsyncClient
    directory: DirectoryClient
    informers: InformerCache
    filters: Filters = field(default_factory=Filters)

    @property
    def site_host(self) -> str:
        return site_host(self.settings.site.home_url)

    async def load_default_id(self) -> str:
        return await self.store.get_option(OPT_DEFAULT_ID, "")

    def renderer(self, context: RenderContext | None = None) -> InformerRenderer:
        """Fresh renderer for one request; the default-ID memo lives with it."""
        context = context or RenderContext()
        resolver = IdResolver(DefaultIdCell(self.load_default_id))
        emitter = Emitter(context, self.settings.loader, self.filters)
        return InformerRenderer(resolver, emitter, self.informers, self.site_host)


async def build_app_state(
    settings: Settings,
    store: OptionStore,
    http_client: httpx.AsyncClient,
    filters: Filters | None = None,
) -> AppState:
    filters = filters or Filters()
    directory = DirectoryClient(http_client, settings.api, settings.site.home_url)
    debug = await resolve_debug_mode(settings, store, filters)
    informers = InformerCache(
        directory, store, debug=debug, ttl_seconds=settings.cache.ttl_seconds
    )
    return AppState(
        settings=settings,
        store=store,
        http_client=http_client,
        directory=directory,
        informers=informers,
        filters=filters,
    )
