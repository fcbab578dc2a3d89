"""Immutable HTTP request.

Frozen metadata with async body access. The multiplexer attaches path
parameters by deriving a new request, never by mutating one.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import Any

from groute._internal.asgi import Receive, Scope
from groute.http.datastructures import Headers, QueryParams


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` holds the values captured by ``{name}`` and
    ``{name...}`` segments of the matched pattern. It is empty until the
    multiplexer has matched the request.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    root_path: str = ""
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    pattern: str = ""

    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Body cache, shared with every request derived from this one
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def path_value(self, name: str) -> str:
        """Return the value captured for the wildcard *name*.

        Returns ``""`` when the matched pattern has no such wildcard.
        """
        return self.path_params.get(name, "")

    def with_path_params(self, params: dict[str, str], pattern: str = "") -> Request:
        """Return a copy carrying the parameters of a matched pattern."""
        return replace(self, path_params=params, pattern=pattern)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.
        """
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        return json.loads(await self.body())

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            root_path=scope.get("root_path", ""),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
