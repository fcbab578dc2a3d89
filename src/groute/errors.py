"""groute exception hierarchy.

Shared across the router, the multiplexer, middleware, and the ASGI
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class GrouteError(Exception):
    """Base for all groute-specific errors."""


class ConfigurationError(GrouteError):
    """Raised when routes are set up incorrectly.

    Surfaces during registration, before any request is served.
    """


class PatternError(ConfigurationError):
    """A route pattern the multiplexer cannot parse."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class RouteConflictError(ConfigurationError):
    """Two registrations resolve to the same method and path shape."""

    def __init__(self, pattern: str, existing: str) -> None:
        self.pattern = pattern
        self.existing = existing
        super().__init__(
            f"Pattern {pattern!r} conflicts with already registered pattern {existing!r}"
        )


@dataclass(frozen=True, slots=True)
class HTTPError(GrouteError):
    """An error that maps directly to an HTTP status code.

    Raised by the multiplexer, middleware, or handlers. The ASGI handler
    turns it into a response with the same status and headers.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no pattern matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path matched, but not for this HTTP method.

    Carries an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
