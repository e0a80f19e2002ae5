"""
Starlette Request Source for crudpipe.

Normalizes standards-based ASGI requests (Starlette/FastAPI).
"""
from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from .protocol import MalformedBodyError, NormalizedRequest, carries_body

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)


class StarletteRequestSource:
    """
    Request source wrapping a Starlette request.

    Example:
        @app.post("/api/users")
        async def create(request: Request):
            normalized = await StarletteRequestSource(request).normalize()
    """

    def __init__(self, request: "Request"):
        self._request = request

    @property
    def request(self) -> "Request":
        return self._request

    async def normalize(self) -> NormalizedRequest:
        """
        Build a NormalizedRequest from the wrapped request.

        The body is decoded as JSON for POST/PUT/PATCH when non-empty.

        Raises:
            MalformedBodyError: If a mutating request has a body that is not JSON
        """
        request = self._request
        method = request.method.upper()
        headers = MutableHeaders(raw=list(request.headers.raw))

        body = None
        if carries_body(method):
            raw_body = await request.body()
            if raw_body:
                try:
                    body = json.loads(raw_body)
                except (json.JSONDecodeError, UnicodeDecodeError) as e:
                    raise MalformedBodyError(method, str(e)) from e

        logger.debug(f"Normalized ASGI request: {method} {request.url.path}")
        return NormalizedRequest(
            method=method,
            url=str(request.url),
            headers=headers,
            body=body,
        )
