"""Rendering entry points: shortcodes, placeholders, block, widgets.

Every surface follows the same path: resolve the effective ID, then either
emit a container through the Emitter or return an inert HTML comment. None
of them raise on bad input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from meteoprog_informers.helpers import sanitize_text
from meteoprog_informers.rendering import preview
from meteoprog_informers.rendering.resolver import PLACEHOLDER_RE

if TYPE_CHECKING:
    from meteoprog_informers.informers import InformerCache
    from meteoprog_informers.rendering.context import RenderContext
    from meteoprog_informers.rendering.emitter import Emitter
    from meteoprog_informers.rendering.resolver import IdResolver

SHORTCODE_TAG = "meteoprog_informer"
SU_SHORTCODE_TAG = "su_meteoprog_informer"
BLOCK_NAME = "meteoprog/informer"

SHORTCODE_NO_ID = "<!-- Meteoprog informer: ID not set -->"
PLACEHOLDER_NO_ID = "<!-- Meteoprog informer: default ID not set -->"
BLOCK_NO_ID = "<!-- Meteoprog Weather Widget: default ID not set -->"
WIDGET_NO_ID = "<!-- Meteoprog informer: no ID set -->"
TEMPLATE_NO_ID = "<!-- no informer ID -->"


def _attr(bag: Mapping[str, Any] | None, name: str) -> str:
    if not bag:
        return ""
    return sanitize_text(bag.get(name))


class InformerRenderer:
    """All page-facing surfaces for one request, wired by injection."""

    def __init__(
        self,
        resolver: IdResolver,
        emitter: Emitter,
        informers: InformerCache,
        site_host: str,
    ) -> None:
        self.resolver = resolver
        self.emitter = emitter
        self.informers = informers
        self.site_host = site_host

    @property
    def context(self) -> RenderContext:
        return self.emitter.context

    def _emit(self, informer_id: str) -> str:
        self.emitter.enqueue_loader()
        return self.emitter.build_container(informer_id)

    async def _preview(self, informer_id: str) -> str:
        informer = await self.informers.find(informer_id)
        domain_host, match = preview.domain_matches(informer, self.site_host)
        return preview.preview_box(informer_id, domain_host, match)

    # ------------------------------------------------------------------
    # Content surfaces
    # ------------------------------------------------------------------

    async def shortcode(self, atts: Mapping[str, Any] | None = None) -> str:
        """``[meteoprog_informer id="..."]``"""
        informer_id = await self.resolver.resolve(_attr(atts, "id"))
        if not informer_id:
            return SHORTCODE_NO_ID
        return self._emit(informer_id)

    async def replace_placeholders(self, content: str) -> str:
        """Expand ``{meteoprog_informer}`` and ``{meteoprog_informer_<id>}`` in text."""
        if "{meteoprog_informer" not in content:
            return content

        parts: list[str] = []
        last = 0
        for match in PLACEHOLDER_RE.finditer(content):
            parts.append(content[last : match.start()])
            informer_id = await self.resolver.resolve(match.group(1))
            parts.append(self._emit(informer_id) if informer_id else PLACEHOLDER_NO_ID)
            last = match.end()
        parts.append(content[last:])
        return "".join(parts)

    async def render_block(self, attributes: Mapping[str, Any] | None = None) -> str:
        """Render callback for the ``meteoprog/informer`` block."""
        informer_id = await self.resolver.resolve(_attr(attributes, "id"))
        if not informer_id:
            return BLOCK_NO_ID
        return self._emit(informer_id)

    async def render_widget(
        self,
        instance: Mapping[str, Any] | None = None,
        before_widget: str = "",
        after_widget: str = "",
    ) -> str:
        """Classic sidebar widget."""
        informer_id = await self.resolver.resolve(_attr(instance, "id"))
        body = self._emit(informer_id) if informer_id else WIDGET_NO_ID
        return before_widget + body + after_widget

    async def informer(self, informer_id: str | None = None) -> str:
        """Template helper for theme code."""
        informer_id = await self.resolver.resolve(informer_id)
        if not informer_id:
            return TEMPLATE_NO_ID
        return self._emit(informer_id)

    # ------------------------------------------------------------------
    # Page builders
    # ------------------------------------------------------------------

    async def render_elementor(self, settings: Mapping[str, Any] | None = None) -> str:
        """Elementor widget: static preview in the editor canvas, container elsewhere."""
        informer_id = await self.resolver.resolve(_attr(settings, "informer_id"))
        if self.context.builder_editor:
            if not informer_id:
                return preview.preview_box("")
            return await self._preview(informer_id)
        if not informer_id:
            return ""
        return self._emit(informer_id)

    async def render_su_shortcode(self, atts: Mapping[str, Any] | None = None) -> str:
        """``[su_meteoprog_informer id="..."]`` from Shortcodes Ultimate."""
        informer_id = await self.resolver.resolve(_attr(atts, "id"))
        if self.context.admin:
            if not informer_id:
                return preview.preview_box("")
            return await self._preview(informer_id)
        if not informer_id:
            return SHORTCODE_NO_ID
        return self._emit(informer_id)

    async def informer_options(self) -> dict[str, str]:
        """Choices for builder dropdowns, labelled with a domain-match status."""
        informers = await self.informers.get_informers()
        return preview.informer_options(informers, self.site_host)

    async def su_shortcode_definition(self) -> dict[str, Any]:
        """Descriptor registered with Shortcodes Ultimate's generator."""
        options = await self.informer_options()
        if len(options) > 1:
            id_attr: dict[str, Any] = {
                "type": "select",
                "values": options,
                "default": "",
                "name": "Informer ID",
                "desc": "Select informer or use default from settings.",
            }
        else:
            id_attr = {
                "type": "text",
                "default": "",
                "name": "Informer ID",
                "desc": "Enter informer ID (or leave empty to use default).",
            }
        return {
            "name": "Meteoprog Weather",
            "type": "other",
            "group": "Meteoprog",
            "atts": {"id": id_attr},
            "has_content": False,
            "desc": "Display Meteoprog weather informer",
            "icon": "cloud",
        }
