from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ScriptAsset:
    """A script registered for output in the page footer."""

    handle: str
    src: str
    version: str
    # Exposed to the page as ``var <object_name> = <data>;`` before the tag
    object_name: str = ""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class RenderContext:
    """State for one inbound page/admin request.

    Created empty at request start and discarded afterwards; nothing here
    is shared between requests.
    """

    # Capability flags supplied by the host
    builder_editor: bool = False  # rendering inside a page builder's editor canvas
    admin: bool = False  # non-public screen (dashboard, editor preview)

    # informer ID → None; dict keeps first-seen order
    queued_ids: dict[str, None] = field(default_factory=dict)
    data_layer_printed: bool = False
    loader_enqueued: bool = False
    scripts: dict[str, ScriptAsset] = field(default_factory=dict)

    @property
    def is_public(self) -> bool:
        return not (self.admin or self.builder_editor)

    def queue(self, informer_id: str) -> bool:
        """Queue an ID once. Returns False when it was already queued."""
        if informer_id in self.queued_ids:
            return False
        self.queued_ids[informer_id] = None
        return True
