"""Middleware protocol and Handler type alias.

A handler takes a request and returns a response::

    async def handler(request: Request) -> Response: ...

A middleware takes the next handler and returns a new handler that
wraps it::

    def timing(next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        return handler

No base class required. Callable objects work too, as long as
``__call__`` takes the next handler.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from groute.http.request import Request
from groute.http.response import Response

# The next handler in the middleware chain
Handler: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for groute middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def require_json(next: Handler) -> Handler: ...

        # Class middleware
        class RateLimiter:
            def __call__(self, next: Handler) -> Handler: ...
    """

    def __call__(self, next: Handler, /) -> Handler: ...
