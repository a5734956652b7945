"""Remote informer directory client.

Talks to the Meteoprog billing API. Every failure mode (missing key,
transport error, timeout, non-200 status, unexpected JSON) collapses to an
empty list: informers are decorative and must never break page rendering.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import ValidationError

from meteoprog_informers.helpers import host_from_url
from meteoprog_informers.models.informer import Informer

if TYPE_CHECKING:
    from meteoprog_informers.config import ApiSettings, Settings

log = structlog.get_logger()


@functools.lru_cache(maxsize=None)
def user_agent(version: str) -> str:
    """Product User-Agent sent with every directory request."""
    return f"MeteoprogInformers/{version} (+https://meteoprog.com)"


def site_host(home_url: str) -> str:
    """Lower-cased host of the embedding site, sent as ``X-Site-Domain``."""
    return host_from_url(home_url) or home_url.lower()


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared httpx client used for directory requests."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.api.timeout_seconds),
        follow_redirects=False,
    )


def normalize_payload(data: Any) -> list[Informer]:
    """Accept ``{"informers": [...]}`` or a bare array of objects.

    Any other shape yields ``[]``. Items that are not objects, or that
    fail validation (e.g. no ``informer_id``), are skipped.
    """
    if isinstance(data, dict) and isinstance(data.get("informers"), list):
        items = data["informers"]
    elif isinstance(data, list) and data and isinstance(data[0], dict):
        items = data
    else:
        return []

    informers: list[Informer] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            informers.append(Informer.model_validate(item))
        except ValidationError:
            log.debug("informer_record_skipped", keys=sorted(item))
    return informers


class DirectoryClient:
    """Authenticated fetch of the informer list for one API key."""

    def __init__(self, client: httpx.AsyncClient, settings: ApiSettings, home_url: str) -> None:
        self._client = client
        self._settings = settings
        self._site_host = site_host(home_url)

    def _headers(self, api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "X-Site-Domain": self._site_host,
            "User-Agent": user_agent(self._settings.plugin_version),
        }

    async def fetch_informers(self, api_key: str | None) -> list[Informer]:
        """Fetch the informer list. Never raises; returns ``[]`` on any failure."""
        if not api_key:
            return []

        try:
            response = await self._client.get(
                self._settings.url,
                headers=self._headers(api_key),
                timeout=self._settings.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            log.warning("directory_fetch_error", url=self._settings.url, error=str(exc))
            return []

        if response.status_code != 200:
            log.warning(
                "directory_fetch_status", url=self._settings.url, status=response.status_code
            )
            return []

        try:
            data = response.json()
        except ValueError:
            log.warning("directory_decode_error", url=self._settings.url)
            return []

        informers = normalize_payload(data)
        log.debug("directory_fetched", count=len(informers))
        return informers

    async def validate_key(self, candidate: str | None) -> bool:
        """True iff an uncached fetch with ``candidate`` returns informers."""
        return bool(await self.fetch_informers(candidate))
