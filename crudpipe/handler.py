"""
Generic CRUD Handler for crudpipe.

Serves one resource from one handler:

    normalize -> classify -> exposure check -> middlewares -> dispatch

User middlewares wrap the dispatch step, so each can act before the
data adapter is called (await call_next() later) and after it
(inspect ctx.result / ctx.response once call_next() returns).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable

from pydantic import ValidationError

from .adapters.base import InvalidBodyError
from .exposure import is_route_accessible
from .pagination import (
    InvalidPaginationError,
    ParsedQueryParams,
    apply_pagination_options,
    build_pagination_metadata,
    get_pagination_options,
)
from .pipeline import MiddlewareContext, Next, execute_middlewares
from .routing import RouteType, format_resource_id, get_route_type
from .transports import MalformedBodyError, to_request

if TYPE_CHECKING:
    from .adapters import DataAdapter
    from .config import ResourceConfig
    from .pipeline import Middleware
    from .transports import RequestSource

logger = logging.getLogger(__name__)


@dataclass
class CrudResponse:
    """Transport-agnostic response returned by the handler."""

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def error(cls, status_code: int, message: str) -> "CrudResponse":
        return cls(status_code=status_code, body={"message": message})


class CrudHandler:
    """
    Handler serving CRUD operations for one resource.

    Example:
        handler = CrudHandler(
            config=ResourceConfig(name="users", model="User"),
            adapter=InMemoryDataAdapter(),
            middlewares=[audit],
        )
        response = await handler.handle(PlainRequest("GET", "/api/users/1"))
    """

    def __init__(
        self,
        config: ResourceConfig,
        adapter: DataAdapter,
        middlewares: Iterable[Middleware] = (),
    ):
        self.config = config
        self.adapter = adapter
        self.middlewares = [fn for fn in middlewares if callable(fn)]
        logger.info(
            f"CrudHandler for '{config.name}': routes="
            f"{sorted(r.value for r in config.accessible_routes)}, "
            f"middlewares={len(self.middlewares)}"
        )

    @property
    def resource_name(self) -> str:
        return self.config.name

    async def handle(
        self,
        source: RequestSource,
        query: ParsedQueryParams | None = None,
        segment: str | None = None,
    ) -> CrudResponse:
        """
        Handle one request.

        Args:
            source: Raw request that normalizes itself
            query: Pre-parsed query parameters; built from the URL if omitted
            segment: Path segment the resource was resolved from (e.g. the
                camel-case form of the route name); defaults to the route name

        Returns:
            CrudResponse (405 when the request is not a CRUD operation,
            404 when the operation is not exposed or the entity is missing,
            400 for invalid pagination, query parameters or body)

        Raises:
            InvalidResourceError: If the URL does not address this resource
            DoubleContinuationError: If a middleware calls next() twice
        """
        try:
            request = await to_request(source)
        except MalformedBodyError as e:
            return CrudResponse.error(400, str(e))

        classification = get_route_type(
            request.method, request.path, segment or self.config.name
        )

        if classification.route_type is None:
            return CrudResponse.error(405, f"Method {request.method} not allowed")

        if not is_route_accessible(classification.route_type, self.config.accessible_routes):
            logger.debug(
                f"Route {classification.route_type.value} not exposed for '{self.config.name}'"
            )
            return CrudResponse.error(404, "Not found")

        if query is None:
            try:
                query = ParsedQueryParams.model_validate(request.query_params)
            except ValidationError as e:
                return CrudResponse.error(400, f"Invalid query parameters: {e.error_count()} error(s)")

        ctx: MiddlewareContext[Any] = MiddlewareContext(
            request=request,
            resource_name=self.config.name,
            route_type=classification.route_type,
            resource_id=(
                format_resource_id(classification.resource_id)
                if classification.resource_id is not None
                else None
            ),
            query=query,
        )

        try:
            await execute_middlewares([*self.middlewares, self._dispatch], ctx)
        except (InvalidPaginationError, InvalidBodyError) as e:
            return CrudResponse.error(400, str(e))

        if ctx.response is None:
            # A middleware ended the run before dispatch without responding
            return CrudResponse(status_code=204)
        return ctx.response

    async def _dispatch(self, ctx: MiddlewareContext[Any], call_next: Next) -> None:
        """Terminal middleware: run the operation against the data adapter."""
        model = self.config.model_name
        query = ctx.query
        route_type = ctx.route_type

        if route_type is RouteType.READ_ALL:
            ctx.pagination = get_pagination_options(query, self.config.pagination)
            if ctx.pagination is None:
                ctx.result = await self.adapter.get_many(model, query)
                response = CrudResponse(200, ctx.result)
            else:
                apply_pagination_options(query, ctx.pagination)
                ctx.result = await self.adapter.get_many(model, query)
                total = await self.adapter.count(model, query)
                response = CrudResponse(
                    200,
                    {
                        "data": ctx.result,
                        "pagination": build_pagination_metadata(total, ctx.pagination),
                    },
                )
        elif route_type is RouteType.CREATE:
            ctx.result = await self.adapter.create(model, ctx.request.body, query)
            response = CrudResponse(201, ctx.result)
        elif route_type is RouteType.READ_ONE:
            ctx.result = await self.adapter.get_one(model, ctx.resource_id, query)
            response = self._entity_response(ctx)
        elif route_type is RouteType.UPDATE:
            ctx.result = await self.adapter.update(
                model, ctx.resource_id, ctx.request.body, query
            )
            response = self._entity_response(ctx)
        else:
            ctx.result = await self.adapter.delete(model, ctx.resource_id, query)
            response = self._entity_response(ctx)

        ctx.response = response
        logger.debug(
            f"Dispatched {route_type.value} on '{self.config.name}': "
            f"status={response.status_code}, elapsed={ctx.elapsed_ms:.1f}ms"
        )

        await call_next()

    def _entity_response(self, ctx: MiddlewareContext[Any]) -> CrudResponse:
        if ctx.result is None:
            return CrudResponse.error(404, f"{self.config.model_name} {ctx.resource_id} not found")
        return CrudResponse(200, ctx.result)

    def __repr__(self) -> str:
        return f"CrudHandler(resource={self.config.name!r})"
