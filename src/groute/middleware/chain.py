"""Middleware chain construction.

The chain is folded once, when a route is registered, and the result
is what the multiplexer stores. Requests never rebuild it.
"""

from collections.abc import Iterable

from groute.middleware.protocol import Handler, Middleware


def apply_middleware(handler: Handler, middleware: Iterable[Middleware]) -> Handler:
    """Wrap *handler* so ``[m1, m2, m3]`` yields ``m1(m2(m3(handler)))``.

    The first middleware is outermost: it sees the request first and
    the response last.
    """
    wrapped = handler
    for mw in reversed(tuple(middleware)):
        wrapped = mw(wrapped)
    return wrapped
