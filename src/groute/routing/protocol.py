"""The Multiplexer protocol — what a router tree registers into.

Any object with this shape can back a ``Router``. ``ServeMux`` is the
implementation used when none is supplied.
"""

from typing import Protocol, runtime_checkable

from groute.http.request import Request
from groute.http.response import Response
from groute.middleware.protocol import Handler


@runtime_checkable
class Multiplexer(Protocol):
    """Owns the registration table and dispatches requests.

    ``register`` raises at setup time for a malformed pattern or a
    duplicate registration. ``dispatch`` matches the request, attaches
    its path parameters, and awaits the stored handler.
    """

    def register(self, pattern: str, handler: Handler) -> None: ...

    async def dispatch(self, request: Request) -> Response: ...
