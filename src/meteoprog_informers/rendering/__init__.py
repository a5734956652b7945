from __future__ import annotations

from meteoprog_informers.rendering.context import RenderContext, ScriptAsset
from meteoprog_informers.rendering.emitter import Emitter
from meteoprog_informers.rendering.resolver import DefaultIdCell, IdResolver
from meteoprog_informers.rendering.surfaces import InformerRenderer

__all__ = [
    "RenderContext",
    "ScriptAsset",
    "Emitter",
    "DefaultIdCell",
    "IdResolver",
    "InformerRenderer",
]
