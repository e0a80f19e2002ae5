"""
Data Adapter Protocol for crudpipe.

The data adapter executes classified CRUD operations against storage.
The handler only depends on this interface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..pagination import ParsedQueryParams

ResourceId = int | str


class InvalidBodyError(ValueError):
    """
    Raised by an adapter when a request body cannot be stored.

    The handler maps it to a 400 response.
    """

    def __init__(self, resource: str, message: str):
        self.resource = resource
        super().__init__(f"Invalid {resource} body: {message}")


@runtime_checkable
class DataAdapter(Protocol):
    """
    Storage backend for CRUD operations.

    `resource` is the model name of the resource. Query parameters carry
    `skip`/`limit` for collection reads once pagination is applied.
    Single-entity operations return None when the entity does not exist.
    """

    async def get_many(self, resource: str, query: ParsedQueryParams) -> list[Any]:
        ...

    async def count(self, resource: str, query: ParsedQueryParams) -> int:
        ...

    async def get_one(
        self, resource: str, resource_id: ResourceId, query: ParsedQueryParams
    ) -> Any | None:
        ...

    async def create(self, resource: str, data: Any, query: ParsedQueryParams) -> Any:
        ...

    async def update(
        self, resource: str, resource_id: ResourceId, data: Any, query: ParsedQueryParams
    ) -> Any | None:
        ...

    async def delete(
        self, resource: str, resource_id: ResourceId, query: ParsedQueryParams
    ) -> Any | None:
        ...
