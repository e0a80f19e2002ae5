"""
Simple Handler Example

This example demonstrates the basic handler pattern:
1. Configure a resource and its exposed routes
2. Write middlewares around the data access
3. Handle plain requests

Run: python -m examples.01-simple-handler.main
"""

import asyncio
import time

from crudpipe import (
    CrudHandler,
    CrudResponse,
    MiddlewareContext,
    PlainRequest,
    ResourceConfig,
    RouteType,
)
from crudpipe.adapters import InMemoryDataAdapter

# =============================================================================
# Middlewares
# =============================================================================


async def timing(ctx: MiddlewareContext, call_next) -> None:
    """Measures the rest of the chain."""
    start = time.perf_counter()
    await call_next()
    ctx.state["duration_ms"] = (time.perf_counter() - start) * 1000


async def require_token(ctx: MiddlewareContext, call_next) -> None:
    """Short-circuits anything but collection reads when no token is sent."""
    if ctx.route_type is not RouteType.READ_ALL and "x-token" not in ctx.request.headers:
        ctx.response = CrudResponse.error(401, "Missing token")
        return
    await call_next()


# =============================================================================
# Main
# =============================================================================


async def main() -> None:
    adapter = InMemoryDataAdapter()
    adapter.seed("User", [{"name": "Ada"}, {"name": "Grace"}, {"name": "Linus"}])

    handler = CrudHandler(
        config=ResourceConfig(name="users", model="User", exclude=[RouteType.DELETE]),
        adapter=adapter,
        middlewares=[timing, require_token],
    )

    requests = [
        PlainRequest("GET", "/api/users?page=1&limit=2"),
        PlainRequest("GET", "/api/users/2"),
        PlainRequest("GET", "/api/users/2", headers={"X-Token": "secret"}),
        PlainRequest("POST", "/api/users", headers={"x-token": "secret"}, body={"name": "Ken"}),
        PlainRequest("DELETE", "/api/users/1", headers={"x-token": "secret"}),
        PlainRequest("POST", "/api/users/1", headers={"x-token": "secret"}),
    ]

    for request in requests:
        response = await handler.handle(request)
        print(f"{request.method:6} {request.url:28} -> {response.status_code} {response.body}")


if __name__ == "__main__":
    asyncio.run(main())
