"""
Middleware Context for crudpipe.

The context is the mutable record shared by reference across one
pipeline run. Middlewares read and write it freely; the executor
never inspects it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from ..handler import CrudResponse
    from ..pagination import PaginationOptions, ParsedQueryParams
    from ..routing import RouteType
    from ..transports import NormalizedRequest

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MiddlewareContext(Generic[T]):
    """
    Request-scoped context passed to every middleware.

    Created by the handler at the start of a request and discarded at
    the end. `result` holds the resource(s) returned by the data adapter;
    setting `response` replaces the handler's default response.
    """

    request: NormalizedRequest | None = None
    resource_name: str = ""
    route_type: RouteType | None = None
    resource_id: int | str | None = None
    query: ParsedQueryParams | None = None
    pagination: PaginationOptions | None = None

    # Populated during dispatch
    result: T | list[T] | None = None
    response: CrudResponse | None = None

    # Free-form state for middlewares
    state: dict[str, Any] = field(default_factory=dict)

    execution_id: UUID = field(default_factory=uuid4)
    started_at: datetime = field(default_factory=_utc_now)

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the context was created."""
        delta = datetime.now(timezone.utc) - self.started_at
        return delta.total_seconds() * 1000
