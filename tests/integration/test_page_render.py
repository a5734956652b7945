"""End-to-end page rendering: surfaces → container → head output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from meteoprog_informers.informers import OPT_DEFAULT_ID
from meteoprog_informers.rendering.context import RenderContext

if TYPE_CHECKING:
    from meteoprog_informers.state import AppState


async def test_full_page(app_state: AppState) -> None:
    await app_state.store.update_option(OPT_DEFAULT_ID, "dflt")
    renderer = app_state.renderer()

    body = await renderer.replace_placeholders("<p>{meteoprog_informer}</p>")
    body += await renderer.shortcode({"id": "abc"})
    body += await renderer.render_block({"id": "abc"})
    body += await renderer.render_widget({})
    head = renderer.emitter.render_head()
    footer = renderer.emitter.render_loader_tags()

    assert body.count('id="meteoprogData_dflt"') == 2
    assert body.count('id="meteoprogData_abc"') == 2
    assert head.count("<script>") == 1
    assert head.count(".push(") == 2
    assert '<link rel="preconnect" href="https://cdn.meteoprog.net" crossorigin>' in head
    assert footer.count("loader.js") == 2
    assert renderer.emitter.render_head().count("<script>") == 0


async def test_no_informers_no_head_output(app_state: AppState) -> None:
    renderer = app_state.renderer()
    assert await renderer.shortcode() == "<!-- Meteoprog informer: ID not set -->"
    assert renderer.emitter.render_head() == ""
    assert renderer.emitter.render_loader_tags() == ""


async def test_builder_canvas_never_loads_loader(app_state: AppState) -> None:
    renderer = app_state.renderer(RenderContext(builder_editor=True))
    await renderer.shortcode({"id": "abc"})
    assert renderer.context.scripts == {}
    assert "preconnect" not in renderer.emitter.render_head()
