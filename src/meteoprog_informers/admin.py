"""Permission-checked settings actions.

These are the operations behind the settings screen and its forms. Unlike
the rendering core they hard-stop: a caller without the capability gets a
``MeteoprogError`` instead of a silently degraded result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from meteoprog_informers.errors import ErrorCode, MeteoprogError
from meteoprog_informers.helpers import is_masked, mask_string, sanitize_text
from meteoprog_informers.informers import OPT_API_KEY, OPT_DEFAULT_ID

if TYPE_CHECKING:
    from meteoprog_informers.informers import InformerCache
    from meteoprog_informers.models.informer import Informer
    from meteoprog_informers.rendering.resolver import DefaultIdCell
    from meteoprog_informers.store import OptionStore

log = structlog.get_logger()

MANAGE_OPTIONS = "manage_options"


@dataclass(frozen=True)
class User:
    login: str
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


def require_capability(user: User | None, capability: str = MANAGE_OPTIONS) -> None:
    if user is None or not user.can(capability):
        raise MeteoprogError(ErrorCode.FORBIDDEN, "Insufficient permissions.")


class SettingsActions:
    def __init__(
        self,
        store: OptionStore,
        informers: InformerCache,
        default_id: DefaultIdCell | None = None,
    ) -> None:
        self._store = store
        self._informers = informers
        self._default_id = default_id

    async def sanitize_api_key(self, value: str) -> str:
        """Form sanitizer: the masked display form keeps the stored key."""
        if is_masked(value):
            return await self._store.get_option(OPT_API_KEY, "")
        return sanitize_text(value)

    async def save_api_key(self, user: User | None, new_key: str) -> bool:
        """Validate and store a new API key.

        Returns False when the masked display value was submitted (nothing
        changes, no validation). Raises INVALID_API_KEY when the key does not
        list any informers; the previous key is kept.
        """
        require_capability(user)
        new_key = sanitize_text(new_key)

        if is_masked(new_key):
            return False

        if not await self._informers.validate_key(new_key):
            log.info("api_key_rejected", key=mask_string(new_key))
            raise MeteoprogError(
                ErrorCode.INVALID_API_KEY, "API key was rejected by the informer directory."
            )

        await self._store.update_option(OPT_API_KEY, new_key)
        log.info("api_key_saved", key=mask_string(new_key))
        return True

    async def refresh(self, user: User | None) -> list[Informer]:
        """Drop the snapshot and reload it from the directory."""
        require_capability(user)
        informers = await self._informers.refresh()
        if not informers:
            raise MeteoprogError(
                ErrorCode.REFRESH_FAILED, "Informer list is empty after refresh.", recoverable=True
            )
        return informers

    async def save_default(self, user: User | None, informer_id: str) -> str:
        require_capability(user)
        informer_id = sanitize_text(informer_id)
        await self._store.update_option(OPT_DEFAULT_ID, informer_id)
        if self._default_id is not None:
            self._default_id.invalidate()
        return informer_id
