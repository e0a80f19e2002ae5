"""
In-memory Data Adapter for crudpipe.

Dict-backed storage for development, examples and tests.
Suitable for single-process deployments only.
"""
from __future__ import annotations

import asyncio
import copy
import logging
from itertools import count as counter
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from .base import InvalidBodyError

if TYPE_CHECKING:
    from ..pagination import ParsedQueryParams
    from .base import ResourceId

logger = logging.getLogger(__name__)


class InMemoryDataAdapter:
    """
    In-memory implementation of DataAdapter.

    Records are dicts keyed by an "id" field. Ids are assigned from a
    per-resource counter when a created record has none.

    Example:
        adapter = InMemoryDataAdapter()
        adapter.seed("User", [{"id": 1, "name": "Ada"}])
    """

    def __init__(self, id_field: str = "id") -> None:
        self.id_field = id_field
        self._tables: dict[str, dict[ResourceId, dict[str, Any]]] = {}
        self._sequences: dict[str, counter] = {}
        self._lock = asyncio.Lock()

    def seed(self, resource: str, records: Iterable[dict[str, Any]]) -> None:
        """Insert records synchronously (for setup and tests)."""
        table = self._tables.setdefault(resource, {})
        for record in records:
            record = dict(record)
            if self.id_field not in record:
                record[self.id_field] = self._next_id(resource)
            table[record[self.id_field]] = record

    def _next_id(self, resource: str) -> int:
        table = self._tables.get(resource, {})
        if resource not in self._sequences:
            numeric = [k for k in table if isinstance(k, int)]
            self._sequences[resource] = counter(max(numeric, default=0) + 1)
        next_id = next(self._sequences[resource])
        while next_id in table:
            next_id = next(self._sequences[resource])
        return next_id

    def _as_record(self, resource: str, data: Any) -> dict[str, Any]:
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise InvalidBodyError(resource, f"expected an object, got {type(data).__name__}")
        return dict(data)

    async def get_many(self, resource: str, query: ParsedQueryParams) -> list[dict[str, Any]]:
        records = list(self._tables.get(resource, {}).values())
        start = query.skip or 0
        end = start + query.limit if query.limit is not None else None
        return [copy.deepcopy(r) for r in records[start:end]]

    async def count(self, resource: str, query: ParsedQueryParams) -> int:
        return len(self._tables.get(resource, {}))

    async def get_one(
        self, resource: str, resource_id: ResourceId, query: ParsedQueryParams
    ) -> dict[str, Any] | None:
        record = self._tables.get(resource, {}).get(resource_id)
        return copy.deepcopy(record) if record is not None else None

    async def create(
        self, resource: str, data: Any, query: ParsedQueryParams
    ) -> dict[str, Any]:
        async with self._lock:
            table = self._tables.setdefault(resource, {})
            record = self._as_record(resource, data)
            if self.id_field not in record:
                record[self.id_field] = self._next_id(resource)
            table[record[self.id_field]] = record
            logger.debug(f"Created {resource} {record[self.id_field]!r}")
            return copy.deepcopy(record)

    async def update(
        self, resource: str, resource_id: ResourceId, data: Any, query: ParsedQueryParams
    ) -> dict[str, Any] | None:
        async with self._lock:
            record = self._tables.get(resource, {}).get(resource_id)
            if record is None:
                return None
            changes = {
                k: v for k, v in self._as_record(resource, data).items() if k != self.id_field
            }
            record.update(changes)
            return copy.deepcopy(record)

    async def delete(
        self, resource: str, resource_id: ResourceId, query: ParsedQueryParams
    ) -> dict[str, Any] | None:
        async with self._lock:
            record = self._tables.get(resource, {}).pop(resource_id, None)
            if record is not None:
                logger.debug(f"Deleted {resource} {resource_id!r}")
            return record
