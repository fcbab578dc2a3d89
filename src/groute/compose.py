"""Pattern composition — joins group prefixes with registered patterns.

A registered pattern is ``"[METHOD ]path"``. The method token is split
off once, at the registration boundary, into a :class:`Pattern` record;
only the path part is ever joined with a prefix. The path template is
opaque here: wildcard syntax is the multiplexer's business.

Joining trims trailing slashes from the left side and leading slashes
from the right side, then inserts exactly one ``/``::

    join_prefix("/api/", "/v1")      -> "/api/v1"
    join_prefix("", "users")         -> "/users"
    join_path("/api", "POST /users") -> "POST /api/users"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pattern:
    """A route pattern split into its method token and path template.

    ``method`` is ``None`` when the pattern had no space at all. Any
    other value, including ``""``, is reattached verbatim.
    """

    method: str | None
    path: str

    def __str__(self) -> str:
        if self.method is None:
            return self.path
        return f"{self.method} {self.path}"

    def with_prefix(self, prefix: str) -> Pattern:
        """Return this pattern with *prefix* joined in front of its path."""
        return Pattern(self.method, join_prefix(prefix, self.path))


def split_pattern(pattern: str) -> Pattern:
    """Split *pattern* on its first space into method token and path.

    Only the first space separates; the rest belongs to the path.
    """
    method, sep, path = pattern.partition(" ")
    if not sep:
        return Pattern(None, pattern)
    return Pattern(method, path)


def join_prefix(prefix: str, path: str) -> str:
    """Join *prefix* and *path* with exactly one separating slash.

    Always returns an absolute path, even for an empty prefix.
    """
    return prefix.rstrip("/") + "/" + path.lstrip("/")


def join_path(prefix: str, pattern: str) -> str:
    """Compose the full pattern for *pattern* registered under *prefix*."""
    return str(split_pattern(pattern).with_prefix(prefix))
