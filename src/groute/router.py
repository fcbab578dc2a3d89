"""Router — route groups sharing one multiplexer.

A ``Router`` is one node of a prefix tree. The root owns a multiplexer;
``group()`` derives children that share it, extend the path prefix, and
start from a copy of the parent's middleware. Registering a route on
any node composes the full pattern, wraps the handler in that node's
middleware, and registers the result in the shared multiplexer::

    router = Router()
    router.use(access_log)

    api = router.group("/api")
    api.use(require_token)

    @api.get("/users/{id}")
    async def user(request: Request):
        return {"id": request.path_value("id")}

The root is itself an ASGI application.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterable
from typing import TypeAlias

from groute._internal.asgi import Receive, Scope, Send
from groute._internal.invoke import invoke
from groute._internal.types import Endpoint
from groute.compose import Pattern, join_prefix, split_pattern
from groute.config import RouterConfig
from groute.http.request import Request
from groute.http.response import Response
from groute.middleware.chain import apply_middleware
from groute.middleware.protocol import Handler, Middleware
from groute.routing.mux import ServeMux
from groute.routing.protocol import Multiplexer
from groute.server.handler import handle_lifespan, handle_request, handle_websocket
from groute.server.negotiation import negotiate

logger = logging.getLogger("groute.router")

_Registration: TypeAlias = Endpoint | Callable[[Endpoint], Endpoint]


class Router:
    """A route group: path prefix, middleware chain, shared multiplexer."""

    __slots__ = ("_config", "_middleware", "_mux", "_prefix")

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        mux: Multiplexer | None = None,
    ) -> None:
        self._config: RouterConfig = config or RouterConfig()
        self._mux: Multiplexer = mux if mux is not None else ServeMux(self._config)
        self._prefix: str = ""
        self._middleware: list[Middleware] = []

    def __repr__(self) -> str:
        return f"Router(prefix={self._prefix!r}, middleware={len(self._middleware)})"

    @property
    def prefix(self) -> str:
        """Cumulative path prefix from the root; ``""`` at the root."""
        return self._prefix

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        return tuple(self._middleware)

    @property
    def mux(self) -> Multiplexer:
        """The multiplexer shared by every node of this tree."""
        return self._mux

    @property
    def config(self) -> RouterConfig:
        return self._config

    # -- Composition --

    def group(self, prefix: str) -> Router:
        """Create a child group under *prefix*.

        The child shares this node's multiplexer and config and starts
        with a copy of its middleware; later ``use()`` calls on either
        node do not affect the other.
        """
        child = copy.copy(self)
        child._prefix = join_prefix(self._prefix, prefix)
        child._middleware = list(self._middleware)
        return child

    def use(self, *middleware: Middleware) -> None:
        """Append middleware, in the order given.

        Only routes registered afterwards are wrapped.
        """
        self._middleware.extend(middleware)

    def apply_middleware(self, handler: Handler) -> Handler:
        """Wrap *handler* in this node's chain, first-added outermost."""
        return apply_middleware(handler, self._middleware)

    # -- Registration --

    def handle(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register *handler* for *pattern*.

        *pattern* may carry a method token (``"POST /users"``); without
        one the route answers every method. Called without *handler*,
        returns a decorator.
        """
        return self._add(split_pattern(pattern), handler)

    def route(self, path: str, *, methods: Iterable[str]) -> Callable[[Endpoint], Endpoint]:
        """Decorator registering one handler under several methods."""

        def decorator(func: Endpoint) -> Endpoint:
            for method in methods:
                self._register(Pattern(method.upper(), path), func)
            return func

        return decorator

    def get(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a GET route."""
        return self._add(Pattern("GET", pattern), handler)

    def post(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a POST route."""
        return self._add(Pattern("POST", pattern), handler)

    def put(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a PUT route."""
        return self._add(Pattern("PUT", pattern), handler)

    def delete(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a DELETE route."""
        return self._add(Pattern("DELETE", pattern), handler)

    def patch(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a PATCH route."""
        return self._add(Pattern("PATCH", pattern), handler)

    def head(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a HEAD route."""
        return self._add(Pattern("HEAD", pattern), handler)

    def options(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register an OPTIONS route."""
        return self._add(Pattern("OPTIONS", pattern), handler)

    def connect(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a CONNECT route."""
        return self._add(Pattern("CONNECT", pattern), handler)

    def trace(self, pattern: str, handler: Endpoint | None = None) -> _Registration:
        """Register a TRACE route."""
        return self._add(Pattern("TRACE", pattern), handler)

    def _add(self, pattern: Pattern, handler: Endpoint | None) -> _Registration:
        if handler is not None:
            self._register(pattern, handler)
            return handler

        def decorator(func: Endpoint) -> Endpoint:
            self._register(pattern, func)
            return func

        return decorator

    def _register(self, pattern: Pattern, endpoint: Endpoint) -> None:
        full_pattern = str(pattern.with_prefix(self._prefix))
        wrapped = self.apply_middleware(self._terminal(endpoint))
        self._mux.register(full_pattern, wrapped)
        logger.debug("Registered %s (%d middleware)", full_pattern, len(self._middleware))

    def _terminal(self, endpoint: Endpoint) -> Handler:
        """Adapt a user route callable to the ``Handler`` shape."""
        in_thread = self._config.sync_in_thread

        async def handler(request: Request) -> Response:
            return negotiate(await invoke(endpoint, request, in_thread=in_thread))

        return handler

    # -- Serving --

    async def dispatch(self, request: Request) -> Response:
        """Serve *request* through the shared multiplexer."""
        return await self._mux.dispatch(request)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Serves ``http`` and ``lifespan``; WebSocket connections are closed
        and any other scope type is ignored.
        """
        match scope["type"]:
            case "http":
                await handle_request(
                    scope, receive, send, mux=self._mux, debug=self._config.debug
                )
            case "lifespan":
                await handle_lifespan(receive, send)
            case "websocket":
                await handle_websocket(receive, send)
