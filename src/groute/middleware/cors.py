"""CORS middleware.

Adds ``Access-Control-*`` headers to responses for allowed origins and
answers preflight requests itself.

Middleware wraps routes, not the multiplexer, so a preflight
``OPTIONS`` request only reaches this middleware when some route
accepts OPTIONS on that path. Register the resource with ``handle()``
(any method) or add an ``options()`` route next to it.
"""

from dataclasses import dataclass

from groute.http.request import Request
from groute.http.response import Response
from groute.middleware.protocol import Handler


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    Nothing is allowed by default. Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes


class CORSMiddleware:
    """Cross-Origin Resource Sharing.

    Usage::

        api = router.group("/api")
        api.use(CORSMiddleware(CORSConfig(allow_origins=("*",))))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def __call__(self, next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            origin = request.headers.get("origin")
            if origin is None or not self._is_allowed_origin(origin):
                return await next(request)

            if request.method == "OPTIONS" and "access-control-request-method" in request.headers:
                return self._preflight_response(origin)

            response = await next(request)
            return self._add_cors_headers(response, origin)

        return handler

    def _is_allowed_origin(self, origin: str) -> bool:
        return "*" in self.config.allow_origins or origin in self.config.allow_origins

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config
        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Origin", "*")
        else:
            response = response.with_header("Access-Control-Allow-Origin", origin)
            response = response.with_header("Vary", "Origin")
        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")
        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers", ", ".join(cfg.expose_headers)
            )
        return response

    def _preflight_response(self, origin: str) -> Response:
        cfg = self.config
        response = self._add_cors_headers(Response(status=204), origin)
        response = response.with_header("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))
        if cfg.allow_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers", ", ".join(cfg.allow_headers)
            )
        return response.with_header("Access-Control-Max-Age", str(cfg.max_age))
