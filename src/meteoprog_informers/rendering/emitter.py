"""Per-widget HTML containers and the page-level data layer.

Each rendered informer is an empty ``<div id="meteoprogData_<id>">`` plus an
entry in ``window.meteoprogDataLayer``; the external loader script reads the
data layer and hydrates the containers. IDs are queued on the request's
RenderContext and printed as a single script block at document-head time.
"""

from __future__ import annotations

import html
import json
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import structlog

from meteoprog_informers import hooks
from meteoprog_informers.rendering.context import RenderContext, ScriptAsset

if TYPE_CHECKING:
    from meteoprog_informers.config import LoaderSettings

log = structlog.get_logger()

CONTAINER_PREFIX = "meteoprogData_"
DATA_LAYER = "window.meteoprogDataLayer"
LOADER_HANDLE = "meteoprog-loader"
LOADER_CONFIG_OBJECT = "MeteoprogLoaderConfig"


def _js_literal(value: object) -> str:
    # keep "</script>" inside string literals from closing the tag
    return json.dumps(value).replace("</", "<\\/")


class Emitter:
    def __init__(
        self, context: RenderContext, loader: LoaderSettings, filters: hooks.Filters
    ) -> None:
        self.context = context
        self._loader = loader
        self._filters = filters

    # ------------------------------------------------------------------
    # Containers and data layer
    # ------------------------------------------------------------------

    def build_container(self, informer_id: str) -> str:
        """HTML container for one informer; queues the ID for the data layer."""
        if not informer_id:
            return ""
        self.context.queue(informer_id)
        div_id = html.escape(CONTAINER_PREFIX + informer_id, quote=True)
        return f'\n<!-- meteoprog.com informer -->\n<div id="{div_id}"></div>\n'

    def emit_data_layer_script(self) -> str:
        """One ``<script>`` pushing every queued ID. Printed at most once."""
        if self.context.data_layer_printed or not self.context.queued_ids:
            return ""
        self.context.data_layer_printed = True

        lines = [f"{DATA_LAYER}={DATA_LAYER}||[];"]
        lines.extend(
            f"{DATA_LAYER}.push({_js_literal({'id': informer_id})});"
            for informer_id in self.context.queued_ids
        )
        return "<script>\n" + "\n".join(lines) + "\n</script>\n"

    # ------------------------------------------------------------------
    # Loader asset
    # ------------------------------------------------------------------

    def loader_url(self) -> str:
        return self._filters.apply(hooks.LOADER_URL, self._loader.url)

    def loader_version(self) -> str:
        return str(self._filters.apply(hooks.LOADER_VERSION, self._loader.version))

    def enqueue_loader(self) -> ScriptAsset | None:
        """Register the loader script once per request.

        Skipped inside a page builder's editor canvas, where the builder
        renders its own static preview.
        """
        if self.context.builder_editor:
            return None
        if self.context.loader_enqueued:
            return self.context.scripts.get(LOADER_HANDLE)
        self.context.loader_enqueued = True

        url = self.loader_url()
        version = self.loader_version()
        asset = ScriptAsset(
            handle=LOADER_HANDLE,
            src=url,
            version=version,
            object_name=LOADER_CONFIG_OBJECT,
            data={"url": url, "version": version},
        )
        self.context.scripts[LOADER_HANDLE] = asset
        log.debug("loader_enqueued", url=url, version=version)
        return asset

    def render_loader_tags(self) -> str:
        """Footer markup for the enqueued loader (config object + async tag)."""
        asset = self.context.scripts.get(LOADER_HANDLE)
        if asset is None:
            return ""
        src = html.escape(f"{asset.src}?ver={asset.version}", quote=True)
        return (
            f"<script>var {asset.object_name} = {_js_literal(asset.data)};</script>\n"
            f'<script id="{asset.handle}-js" src="{src}" async></script>\n'
        )

    # ------------------------------------------------------------------
    # Document head
    # ------------------------------------------------------------------

    def loader_origin(self) -> str:
        parts = urlsplit(self.loader_url())
        if not parts.scheme or not parts.netloc:
            return ""
        return f"{parts.scheme}://{parts.netloc}"

    def add_resource_hints(self, urls: list[str], relation_type: str) -> list[str]:
        """Add a preconnect to the loader's origin on public pages with informers."""
        if relation_type != "preconnect":
            return urls
        if not self.context.queued_ids or not self.context.is_public:
            return urls
        origin = self.loader_origin()
        if origin and origin not in urls:
            urls = [*urls, origin]
        return urls

    def render_head(self) -> str:
        hints = "".join(
            f'<link rel="preconnect" href="{html.escape(url, quote=True)}" crossorigin>\n'
            for url in self.add_resource_hints([], "preconnect")
        )
        return hints + self.emit_data_layer_script()
