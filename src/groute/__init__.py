"""groute — route groups with prefixes and middleware over one multiplexer.

Basic usage::

    from groute import Router

    router = Router()
    api = router.group("/api")

    @api.get("/users/{id}")
    async def user(request):
        return {"id": request.path_value("id")}

The root router is an ASGI application; serve it with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "GrouteError",
    "HTTPError",
    "Handler",
    "MethodNotAllowed",
    "Middleware",
    "Multiplexer",
    "NotFound",
    "Pattern",
    "PatternError",
    "Redirect",
    "Request",
    "Response",
    "RouteConflictError",
    "Router",
    "RouterConfig",
    "ServeMux",
    "join_path",
    "split_pattern",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import groute`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from groute.router import Router

        return Router

    if name == "RouterConfig":
        from groute.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from groute.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from groute.http import response

        return getattr(response, name)

    if name in ("Pattern", "join_path", "split_pattern"):
        from groute import compose

        return getattr(compose, name)

    if name in ("Handler", "Middleware"):
        from groute.middleware import protocol

        return getattr(protocol, name)

    if name in ("Multiplexer", "ServeMux"):
        from groute import routing

        return getattr(routing, name)

    if name in (
        "ConfigurationError",
        "GrouteError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "PatternError",
        "RouteConflictError",
    ):
        from groute import errors

        return getattr(errors, name)

    msg = f"module 'groute' has no attribute {name!r}"
    raise AttributeError(msg)
