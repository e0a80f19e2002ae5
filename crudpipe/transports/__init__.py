"""
crudpipe Request Normalization.

Converts transport-specific requests into a NormalizedRequest
(method, url, headers multimap, body) consumed by the handler.

Built-in Sources:
- StarletteRequestSource: ASGI requests from Starlette/FastAPI
- PlainRequest: method/url/header-dict requests with parsed bodies

Adding New Sources:
    Implement `async def normalize(self) -> NormalizedRequest` and
    copy the body only for POST/PUT/PATCH.
"""

from .asgi import StarletteRequestSource
from .plain import PlainRequest
from .protocol import (
    BODY_METHODS,
    MalformedBodyError,
    NormalizedRequest,
    RequestSource,
    carries_body,
    to_request,
)

__all__ = [
    "BODY_METHODS",
    "MalformedBodyError",
    "NormalizedRequest",
    "PlainRequest",
    "RequestSource",
    "StarletteRequestSource",
    "carries_body",
    "to_request",
]
