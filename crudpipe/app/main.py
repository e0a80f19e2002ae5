"""
crudpipe - FastAPI application factory.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import FastAPI

from crudpipe import __version__
from crudpipe.app.router import create_crud_router
from crudpipe.config import CrudSettings, get_settings
from crudpipe.handler import CrudHandler
from crudpipe.resources import ResourceRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    handlers: Iterable[CrudHandler],
    settings: CrudSettings | None = None,
    registry: ResourceRegistry | None = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        handlers: CRUD handlers to serve
        settings: Service settings (read from environment if omitted)
        registry: Model/route table (built from handlers if omitted)
    """
    if settings is None:
        settings = get_settings()
    configure_logging(settings.log_level)

    handlers = list(handlers)
    app = FastAPI(
        title=settings.service_name,
        description="Generic CRUD endpoints driven by a middleware pipeline",
        version=__version__,
        debug=settings.debug,
    )

    @app.get("/", tags=["root"])
    async def root() -> dict[str, Any]:
        """Root endpoint with service info."""
        return {
            "service": settings.service_name,
            "version": __version__,
            "environment": settings.environment,
            "resources": [h.resource_name for h in handlers],
        }

    app.include_router(create_crud_router(handlers, registry), prefix=settings.api_prefix)

    logger.info(
        f"Created {settings.service_name} app: prefix={settings.api_prefix}, "
        f"resources={[h.resource_name for h in handlers]}"
    )
    return app
