"""
Pagination Options for crudpipe.

Turns user-facing page numbers from already-parsed query parameters
into the skip/limit pair consumed by the data adapter.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InvalidPaginationError(ValueError):
    """Raised when the requested page is not strictly positive."""

    def __init__(self, page: int):
        self.page = page
        super().__init__("page query must be a strictly positive number")


class PaginationConfig(BaseModel):
    """Per-resource pagination defaults."""

    per_page: int = Field(20, ge=1, description="Page size when the query has no limit")


class ParsedQueryParams(BaseModel):
    """
    Typed query parameters for one request.

    `skip` and `limit` are written by apply_pagination_options() and read
    by the data adapter. Unknown parameters are kept as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    page: int | None = None
    limit: int | None = Field(None, ge=0)
    skip: int | None = Field(None, ge=0)


@dataclass(frozen=True, slots=True)
class PaginationOptions:
    page: int
    per_page: int


def get_pagination_options(
    query: ParsedQueryParams,
    config: PaginationConfig,
) -> PaginationOptions | None:
    """
    Derive pagination options from the query.

    Returns None when no page was requested; the collection is then
    returned unpaginated. A missing or non-positive limit falls back to
    config.per_page.

    Raises:
        InvalidPaginationError: If page <= 0
    """
    if query.page is None:
        return None

    if query.page <= 0:
        raise InvalidPaginationError(query.page)

    return PaginationOptions(
        page=query.page,
        per_page=query.limit if query.limit and query.limit > 0 else config.per_page,
    )


def apply_pagination_options(
    query: ParsedQueryParams,
    options: PaginationOptions,
) -> None:
    """Write the offset/limit pair for options into query."""
    query.skip = (options.page - 1) * options.per_page
    query.limit = options.per_page


def build_pagination_metadata(total: int, options: PaginationOptions) -> dict[str, Any]:
    """Pagination envelope returned alongside a paginated collection."""
    return {
        "total": total,
        "page_count": math.ceil(total / options.per_page),
        "page": options.page,
    }
