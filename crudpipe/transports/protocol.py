"""
Request Source Protocol for crudpipe.

Defines the transport-agnostic request shape and the interface each
request representation implements to produce it.

Each source builds the normalized form itself, so callers never
inspect the type of the raw request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable
from urllib.parse import parse_qsl, urlsplit

from starlette.datastructures import MutableHeaders

# Methods whose requests carry a body (CREATE / UPDATE)
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class MalformedBodyError(ValueError):
    """Raised when a request body cannot be decoded."""

    def __init__(self, method: str, reason: str):
        self.method = method
        self.reason = reason
        super().__init__(f"Malformed {method} body: {reason}")


def carries_body(method: str) -> bool:
    return method.upper() in BODY_METHODS


@dataclass
class NormalizedRequest:
    """
    Transport-agnostic request.

    Attributes:
        method: Upper-case HTTP method
        url: Request URL as received (absolute or path with query)
        headers: Case-insensitive ordered multimap
        body: Decoded body for POST/PUT/PATCH, None for every other method
    """

    method: str
    url: str
    headers: MutableHeaders = field(default_factory=MutableHeaders)
    body: Any = None

    @property
    def path(self) -> str:
        """Path portion of the URL, without scheme, host or query."""
        return urlsplit(self.url).path

    @property
    def query_params(self) -> dict[str, str]:
        """Query parameters; the last value wins for repeated keys."""
        return dict(parse_qsl(urlsplit(self.url).query, keep_blank_values=True))


@runtime_checkable
class RequestSource(Protocol):
    """
    A raw request that can normalize itself.

    Implementations:
    - StarletteRequestSource: ASGI/Starlette request
    - PlainRequest: method/url/headers-dict style request

    Example:
        request = await to_request(StarletteRequestSource(starlette_request))
    """

    async def normalize(self) -> NormalizedRequest:
        """
        Convert the raw request into a NormalizedRequest.

        Body is read only for POST/PUT/PATCH.
        """
        ...


async def to_request(source: RequestSource) -> NormalizedRequest:
    """Normalize any request source."""
    return await source.normalize()
