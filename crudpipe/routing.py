"""
Route Classification for crudpipe.

Maps an HTTP method and URL onto one CRUD intent for a declared resource,
extracting the resource identifier where the intent needs one.

Patterns (path-to-regexp style, evaluated on the path only):
- Collection: /(.*)/{resource}
- Entity:     /(.*)/{resource}/:id
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from urllib.parse import unquote

logger = logging.getLogger(__name__)

# Number.MAX_SAFE_INTEGER
MAX_SAFE_INTEGER = 2**53 - 1

_RADIX_LITERAL = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class RouteType(str, Enum):
    """CRUD intent a request represents."""

    READ_ONE = "READ_ONE"
    READ_ALL = "READ_ALL"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    @property
    def requires_id(self) -> bool:
        return self in _ID_ROUTES


_ID_ROUTES = frozenset({RouteType.READ_ONE, RouteType.UPDATE, RouteType.DELETE})


class InvalidResourceError(Exception):
    """
    Raised when the resource name is not a segment of the request path.

    This is a configuration error: the handler for a resource is mounted
    on a route that does not contain the resource name.
    """

    def __init__(self, resource_name: str, path: str):
        self.resource_name = resource_name
        self.path = path
        super().__init__(f"invalid resource name '{resource_name}' for route '{path}'")


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """
    Outcome of classifying one request.

    Attributes:
        route_type: Matched intent, or None when nothing matched
        resource_id: Decoded identifier, set only for READ_ONE, UPDATE and DELETE
    """

    route_type: RouteType | None
    resource_id: str | None = None

    def __post_init__(self) -> None:
        needs_id = self.route_type is not None and self.route_type.requires_id
        if needs_id != (self.resource_id is not None):
            raise ValueError(
                f"resource_id must be set iff route type needs one "
                f"(route_type={self.route_type}, resource_id={self.resource_id!r})"
            )

    @property
    def matched(self) -> bool:
        return self.route_type is not None


NO_MATCH = ClassificationResult(route_type=None)


@dataclass(frozen=True, slots=True)
class _Matchers:
    collection: re.Pattern[str]
    entity: re.Pattern[str]


@lru_cache(maxsize=256)
def _compile_matchers(resource_name: str) -> _Matchers:
    name = re.escape(resource_name)
    return _Matchers(
        collection=re.compile(rf"^/(.*)/{name}/?$", re.IGNORECASE),
        entity=re.compile(rf"^/(.*)/{name}/(?P<id>[^/#?]+?)/?$", re.IGNORECASE),
    )


def _match_id(pattern: re.Pattern[str], path: str) -> str | None:
    match = pattern.match(path)
    if match is None:
        return None
    return unquote(match.group("id"))


def get_route_type(method: str, url: str, resource_name: str) -> ClassificationResult:
    """
    Classify a request into a CRUD intent.

    Args:
        method: HTTP method (case-insensitive)
        url: Request URL or path; anything after "?" is ignored
        resource_name: Resource segment the handler is mounted for

    Returns:
        ClassificationResult; route_type is None when the method/path
        combination is not a CRUD operation

    Raises:
        InvalidResourceError: If "/{resource_name}" is not in the path
    """
    path = url.split("?")[0]

    if f"/{resource_name}" not in path:
        raise InvalidResourceError(resource_name, path)

    matchers = _compile_matchers(resource_name)
    method = method.upper()

    if method == "GET":
        resource_id = _match_id(matchers.entity, path)
        # The precondition guarantees a collection route otherwise
        if resource_id:
            result = ClassificationResult(RouteType.READ_ONE, resource_id)
        else:
            result = ClassificationResult(RouteType.READ_ALL)
    elif method == "POST":
        if matchers.collection.match(path):
            result = ClassificationResult(RouteType.CREATE)
        else:
            result = NO_MATCH
    elif method in ("PUT", "PATCH", "DELETE"):
        resource_id = _match_id(matchers.entity, path)
        route_type = RouteType.DELETE if method == "DELETE" else RouteType.UPDATE
        result = ClassificationResult(route_type, resource_id) if resource_id else NO_MATCH
    else:
        result = NO_MATCH

    logger.debug(
        f"Classified {method} {path} for '{resource_name}': "
        f"route_type={result.route_type}, resource_id={result.resource_id!r}"
    )
    return result


def format_resource_id(resource_id: str) -> int | str:
    """
    Coerce an identifier to int when it is a safe integer.

    Numeric parsing follows JavaScript's Number(): surrounding whitespace
    is ignored, an empty string is 0, and unsigned 0x/0o/0b literals are
    read in their radix.

        "42" -> 42, "0x1A" -> 26, "1e3" -> 1000, "abc-1" -> "abc-1"

    Values outside the safe integer range stay strings so they never
    lose precision.
    """
    text = resource_id.strip()
    if not text:
        return 0

    if _RADIX_LITERAL.fullmatch(text):
        value = int(text, 0)
        return value if value <= MAX_SAFE_INTEGER else resource_id

    if not _DECIMAL_LITERAL.fullmatch(text):
        return resource_id
    number = float(text)
    if number.is_integer() and abs(number) <= MAX_SAFE_INTEGER:
        return int(number)
    return resource_id
