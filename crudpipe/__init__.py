"""
crudpipe - Generic CRUD request handling through middleware pipelines.

crudpipe lets one handler serve arbitrary resources (`/api/users`,
`/api/users/42`) without per-resource routing code:

- **Route Classification**: method + path -> READ_ONE, READ_ALL, CREATE, UPDATE, DELETE
- **Exposure Policy**: allow/deny lists over a default posture
- **Middleware Pipeline**: onion-style async middlewares with explicit continuations
- **Pagination**: page/limit -> skip/limit for the data adapter
- **Request Normalization**: Starlette and plain request shapes

Quick Start:
    >>> from crudpipe import CrudHandler, ResourceConfig, PlainRequest
    >>> from crudpipe.adapters import InMemoryDataAdapter
    >>>
    >>> handler = CrudHandler(
    ...     config=ResourceConfig(name="users", model="User"),
    ...     adapter=InMemoryDataAdapter(),
    ... )
    >>> response = await handler.handle(PlainRequest("GET", "/api/users"))
"""

__version__ = "0.1.0"
__license__ = "MIT"

from crudpipe.config import CrudSettings, ResourceConfig
from crudpipe.exposure import ALL_ROUTES, get_accessible_routes, is_route_accessible
from crudpipe.handler import CrudHandler, CrudResponse
from crudpipe.pagination import (
    InvalidPaginationError,
    PaginationConfig,
    PaginationOptions,
    ParsedQueryParams,
    apply_pagination_options,
    get_pagination_options,
)
from crudpipe.pipeline import (
    DoubleContinuationError,
    MiddlewareContext,
    MiddlewarePipeline,
    PipelineBuilder,
    execute_middlewares,
)
from crudpipe.resources import ResourceNotFoundError, ResourceRegistry
from crudpipe.routing import (
    ClassificationResult,
    InvalidResourceError,
    RouteType,
    format_resource_id,
    get_route_type,
)
from crudpipe.transports import (
    NormalizedRequest,
    PlainRequest,
    StarletteRequestSource,
    to_request,
)

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Routing
    "RouteType",
    "ClassificationResult",
    "InvalidResourceError",
    "get_route_type",
    "format_resource_id",
    # Exposure
    "ALL_ROUTES",
    "get_accessible_routes",
    "is_route_accessible",
    # Pipeline
    "DoubleContinuationError",
    "MiddlewareContext",
    "MiddlewarePipeline",
    "PipelineBuilder",
    "execute_middlewares",
    # Pagination
    "InvalidPaginationError",
    "PaginationConfig",
    "PaginationOptions",
    "ParsedQueryParams",
    "apply_pagination_options",
    "get_pagination_options",
    # Requests
    "NormalizedRequest",
    "PlainRequest",
    "StarletteRequestSource",
    "to_request",
    # Resources
    "ResourceNotFoundError",
    "ResourceRegistry",
    # Handler & config
    "CrudHandler",
    "CrudResponse",
    "CrudSettings",
    "ResourceConfig",
]
