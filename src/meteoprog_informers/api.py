"""REST read endpoint for editor UIs: ``GET /meteoprog/v1/informers``."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, HTTPException, Request

if TYPE_CHECKING:
    from meteoprog_informers.informers import InformerCache

REST_NAMESPACE = "/meteoprog/v1"
REST_ROUTE_INFORMERS = "/informers"

PermissionCheck = Callable[[Request], bool]


def build_router(informers: InformerCache, can_edit_posts: PermissionCheck) -> APIRouter:
    """Router serving the cached directory snapshot to permitted callers."""
    router = APIRouter(prefix=REST_NAMESPACE, tags=["informers"])

    def require_editor(request: Request) -> None:
        if not can_edit_posts(request):
            raise HTTPException(status_code=403, detail="Sorry, you are not allowed to do that.")

    @router.get(REST_ROUTE_INFORMERS, dependencies=[Depends(require_editor)])
    async def list_informers() -> list[dict[str, Any]]:
        return [informer.to_payload() for informer in await informers.get_informers()]

    return router
