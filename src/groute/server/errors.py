"""Error responses for the ASGI pipeline.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging

from groute.errors import HTTPError
from groute.http.request import Request
from groute.http.response import Response

logger = logging.getLogger("groute.server")


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text response with its status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log an unexpected exception and return a 500."""
    logger.exception("500 %s %s", request.method, request.path)
    body = f"Internal Server Error: {type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return Response(body=body, status=500)
