"""
Tests for request normalization.

Tests both request sources converge on the same NormalizedRequest.
"""
import json

import pytest
from starlette.datastructures import MutableHeaders
from starlette.requests import Request

from crudpipe.transports import (
    BODY_METHODS,
    MalformedBodyError,
    NormalizedRequest,
    PlainRequest,
    RequestSource,
    StarletteRequestSource,
    carries_body,
    to_request,
)


def make_starlette_request(
    method: str,
    path: str,
    query: str = "",
    headers: list[tuple[str, str]] | None = None,
    body: bytes = b"",
) -> Request:
    """Build a Starlette request from a raw ASGI scope."""
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "raw_path": path.encode(),
        "query_string": query.encode(),
        "root_path": "",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers or []],
    }
    sent = False

    async def receive():
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


class TestCarriesBody:
    def test_body_methods(self):
        assert BODY_METHODS == {"POST", "PUT", "PATCH"}

    @pytest.mark.parametrize("method", ["post", "PUT", "Patch"])
    def test_true(self, method):
        assert carries_body(method) is True

    @pytest.mark.parametrize("method", ["GET", "DELETE", "HEAD"])
    def test_false(self, method):
        assert carries_body(method) is False


class TestNormalizedRequest:
    def test_path_from_absolute_url(self):
        request = NormalizedRequest(method="GET", url="http://testserver/api/users/1?x=1")
        assert request.path == "/api/users/1"

    def test_path_from_relative_url(self):
        request = NormalizedRequest(method="GET", url="/api/users?page=2")
        assert request.path == "/api/users"

    def test_query_params(self):
        request = NormalizedRequest(method="GET", url="/api/users?page=2&limit=5&q=")
        assert request.query_params == {"page": "2", "limit": "5", "q": ""}

    def test_default_headers_are_empty(self):
        request = NormalizedRequest(method="GET", url="/")
        assert isinstance(request.headers, MutableHeaders)
        assert len(request.headers) == 0


class TestPlainRequest:
    @pytest.mark.asyncio
    async def test_post_copies_body(self):
        normalized = await PlainRequest(
            method="POST",
            url="/api/users",
            headers={"Content-Type": "application/json"},
            body={"name": "Ada"},
        ).normalize()

        assert normalized.method == "POST"
        assert normalized.url == "/api/users"
        assert normalized.body == {"name": "Ada"}
        assert normalized.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    async def test_body_dropped_for_non_body_methods(self, method):
        normalized = await PlainRequest(method, "/api/users/1", body={"x": 1}).normalize()
        assert normalized.body is None

    @pytest.mark.asyncio
    async def test_method_upper_cased(self):
        normalized = await PlainRequest("patch", "/api/users/1", body={"x": 1}).normalize()
        assert normalized.method == "PATCH"
        assert normalized.body == {"x": 1}

    @pytest.mark.asyncio
    async def test_headers_multimap(self):
        normalized = await PlainRequest(
            "GET",
            "/api/users",
            headers={
                "Accept": ["application/json", "text/plain"],
                "X-Empty": "",
                "X-None": None,
                "X-Token": "abc",
            },
        ).normalize()

        assert normalized.headers.getlist("accept") == ["application/json", "text/plain"]
        assert "x-empty" not in normalized.headers
        assert "x-none" not in normalized.headers
        assert normalized.headers["X-TOKEN"] == "abc"
        assert normalized.headers.keys() == ["accept", "accept", "x-token"]

    def test_satisfies_protocol(self):
        assert isinstance(PlainRequest("GET", "/"), RequestSource)


class TestStarletteRequestSource:
    @pytest.mark.asyncio
    async def test_post_reads_json_body(self):
        request = make_starlette_request(
            "POST",
            "/api/users",
            headers=[("Content-Type", "application/json")],
            body=json.dumps({"name": "Ada"}).encode(),
        )

        normalized = await StarletteRequestSource(request).normalize()

        assert normalized.method == "POST"
        assert normalized.path == "/api/users"
        assert normalized.body == {"name": "Ada"}
        assert normalized.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_get_has_no_body(self):
        request = make_starlette_request("GET", "/api/users", body=b'{"ignored": true}')
        normalized = await StarletteRequestSource(request).normalize()
        assert normalized.body is None

    @pytest.mark.asyncio
    async def test_empty_post_body(self):
        request = make_starlette_request("POST", "/api/users")
        normalized = await StarletteRequestSource(request).normalize()
        assert normalized.body is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"{not json", b"\xff\xfe"])
    async def test_malformed_body(self, body):
        request = make_starlette_request("POST", "/api/users", body=body)

        with pytest.raises(MalformedBodyError) as exc_info:
            await StarletteRequestSource(request).normalize()

        assert exc_info.value.method == "POST"
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.asyncio
    async def test_url_and_query(self):
        request = make_starlette_request("GET", "/api/users", query="page=2")
        normalized = await StarletteRequestSource(request).normalize()

        assert normalized.url == "http://testserver/api/users?page=2"
        assert normalized.query_params == {"page": "2"}

    @pytest.mark.asyncio
    async def test_repeated_headers_preserved(self):
        request = make_starlette_request(
            "GET",
            "/api/users",
            headers=[("X-Tag", "a"), ("X-Tag", "b")],
        )
        normalized = await StarletteRequestSource(request).normalize()
        assert normalized.headers.getlist("x-tag") == ["a", "b"]

    @pytest.mark.asyncio
    async def test_both_sources_converge(self):
        starlette_request = make_starlette_request(
            "PUT",
            "/api/users/1",
            headers=[("X-Token", "abc")],
            body=b'{"name": "Grace"}',
        )
        from_asgi = await to_request(StarletteRequestSource(starlette_request))
        from_plain = await to_request(
            PlainRequest("PUT", "/api/users/1", headers={"x-token": "abc"}, body={"name": "Grace"})
        )

        assert from_asgi.method == from_plain.method
        assert from_asgi.path == from_plain.path
        assert from_asgi.body == from_plain.body
        assert from_asgi.headers.items() == from_plain.headers.items()
