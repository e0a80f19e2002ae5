"""
Plain Request Source for crudpipe.

Normalizes framework-style requests that expose method, url, a header
dict (values may be lists) and an already-parsed body.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from starlette.datastructures import MutableHeaders

from .protocol import NormalizedRequest, carries_body

HeaderValue = str | Sequence[str] | None


@dataclass
class PlainRequest:
    """
    Framework-style request with pre-parsed body.

    Example:
        source = PlainRequest(
            method="POST",
            url="/api/users",
            headers={"content-type": "application/json"},
            body={"name": "Ada"},
        )
        normalized = await source.normalize()
    """

    method: str
    url: str
    headers: Mapping[str, HeaderValue] = field(default_factory=dict)
    body: Any = None

    async def normalize(self) -> NormalizedRequest:
        """Build a NormalizedRequest; empty header values are skipped."""
        headers = MutableHeaders()
        for key, value in self.headers.items():
            if not value:
                continue
            if isinstance(value, str):
                headers.append(key, value)
            else:
                for item in value:
                    headers.append(key, str(item))

        method = self.method.upper()
        return NormalizedRequest(
            method=method,
            url=self.url,
            headers=headers,
            body=self.body if carries_body(method) else None,
        )
