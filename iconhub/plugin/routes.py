# iconhub/plugin/routes.py
from __future__ import annotations
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from iconhub.icons.types import countIcons
from .virtual_module import VirtualModuleProvider

logger = logging.getLogger(__name__)

__all__ = ["createIconRouter"]



def createIconRouter(provider: VirtualModuleProvider) -> APIRouter:
    """
    Dev-server surface over a VirtualModuleProvider:

      GET /modules/{moduleId}  - resolved module source (application/javascript)
      GET /icons/index         - collection summary
    """
    router = APIRouter()

    @router.get("/modules/{moduleId:path}")
    async def serveModule(moduleId: str) -> Response:
        resolved = provider.resolveId(moduleId)
        if resolved is None:
            raise HTTPException(404, f"Unknown module '{moduleId}'.")
        source = await provider.load(resolved)
        if source is None:
            raise HTTPException(404, f"Module '{moduleId}' has no content.")
        response = Response(content=source, media_type="application/javascript")
        response.headers["Cache-Control"] = "no-store"
        return response

    @router.get("/icons/index")
    async def iconIndex() -> dict:
        collections = await provider.aggregator.aggregate()
        entries = [
            {"prefix": prefix, "count": len(collection.icons)}
            for prefix, collection in collections.items()
        ]
        entries.sort(key=lambda entry: entry["prefix"])
        return {
            "collections": entries,
            "meta": {
                "count": len(entries),
                "icons": countIcons(collections),
            },
        }

    return router
