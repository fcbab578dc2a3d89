"""Access logging middleware.

One log line per request: method, path, status and elapsed time.
"""

import logging
import time

from groute.errors import HTTPError
from groute.http.request import Request
from groute.http.response import Response
from groute.middleware.protocol import Handler

access_logger = logging.getLogger("groute.access")


class AccessLog:
    """Log every request that reaches the wrapped routes.

    Usage::

        router.use(AccessLog())
        router.use(AccessLog(logging.getLogger("myapp.http"), level=logging.DEBUG))

    Requests that end in an exception are logged with the status the
    exception maps to (500 for anything that is not an ``HTTPError``)
    and the exception is re-raised.
    """

    __slots__ = ("level", "logger")

    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self.logger = logger or access_logger
        self.level = level

    def __call__(self, next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            start = time.perf_counter()
            status = 500
            try:
                response = await next(request)
                status = response.status
                return response
            except HTTPError as exc:
                status = exc.status
                raise
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                self.logger.log(
                    self.level,
                    "%s %s %d %.1fms",
                    request.method,
                    request.url,
                    status,
                    elapsed_ms,
                )

        return handler
