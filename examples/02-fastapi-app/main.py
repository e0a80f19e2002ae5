"""
FastAPI Application Example

Serves two resources behind one catch-all route.

Run: uvicorn examples.02-fastapi-app.main:app --reload
Then: curl "http://localhost:8000/api/users?page=1&limit=10"
"""

import logging

from crudpipe import CrudHandler, MiddlewareContext, RouteType
from crudpipe.adapters import InMemoryDataAdapter
from crudpipe.app import create_app
from crudpipe.config import get_settings

logger = logging.getLogger(__name__)


async def access_log(ctx: MiddlewareContext, call_next) -> None:
    await call_next()
    status = ctx.response.status_code if ctx.response else None
    logger.info(f"{ctx.request.method} {ctx.request.path} -> {ctx.route_type.value} ({status})")


settings = get_settings()
adapter = InMemoryDataAdapter()
adapter.seed("User", [{"name": "Ada"}, {"name": "Grace"}])
adapter.seed("BlogPost", [{"title": "Hello", "author_id": 1}])

app = create_app(
    [
        CrudHandler(settings.resource("users", model="User"), adapter, [access_log]),
        CrudHandler(
            settings.resource("blogPosts", model="BlogPost", only=[RouteType.READ_ALL, RouteType.READ_ONE]),
            adapter,
            [access_log],
        ),
    ],
    settings=settings,
)
