"""
FastAPI router for crudpipe.

Mounts every registered CrudHandler behind one catch-all route. The
resource is resolved from the URL through the ResourceRegistry.
"""
from __future__ import annotations

import logging
from typing import Iterable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from crudpipe.handler import CrudHandler, CrudResponse
from crudpipe.resources import ResourceRegistry
from crudpipe.transports import StarletteRequestSource

logger = logging.getLogger(__name__)

CRUD_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def to_starlette_response(response: CrudResponse) -> Response:
    """Convert a CrudResponse into a Starlette response."""
    if response.body is None:
        return Response(status_code=response.status_code, headers=response.headers)
    return JSONResponse(
        content=response.body,
        status_code=response.status_code,
        headers=response.headers,
    )


def create_crud_router(
    handlers: Iterable[CrudHandler],
    registry: ResourceRegistry | None = None,
) -> APIRouter:
    """
    Build an APIRouter serving the given handlers.

    Args:
        handlers: One handler per resource
        registry: Model/route table; built from the handlers if omitted

    Returns:
        APIRouter with a single catch-all CRUD route
    """
    by_model = {h.config.model_name: h for h in handlers}
    if registry is None:
        registry = ResourceRegistry(
            {model: h.resource_name for model, h in by_model.items()}
        )

    router = APIRouter(tags=["crud"])

    @router.api_route("/{path:path}", methods=CRUD_METHODS)
    async def crud_endpoint(request: Request, path: str) -> Response:
        resolved = registry.resolve(request.url.path)
        handler = by_model.get(resolved.model_name) if resolved else None
        if handler is None:
            logger.debug(f"No resource for {request.method} {request.url.path}")
            return JSONResponse({"message": "Not found"}, status_code=404)

        response = await handler.handle(
            StarletteRequestSource(request), segment=resolved.segment
        )
        return to_starlette_response(response)

    logger.info(f"CRUD router serving resources: {registry.models}")
    return router
