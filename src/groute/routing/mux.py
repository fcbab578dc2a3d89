"""ServeMux — trie-based request multiplexer.

Patterns are registered during setup; every node derived from one root
router registers into the same ServeMux.

Matching walks the request path one segment at a time. At each level a
literal child is tried first, then a ``{name}`` parameter, then a
``{name...}`` rest wildcard, backtracking when a branch has no route
for the request method. So exact paths beat parameters, parameters beat
rest wildcards, and longer literal prefixes beat shorter ones.
"""

import logging
from urllib.parse import quote

from groute.config import RouterConfig
from groute.errors import MethodNotAllowed, NotFound, RouteConflictError
from groute.http.request import Request
from groute.http.response import Redirect, Response
from groute.middleware.protocol import Handler
from groute.routing.pattern import ParsedPattern, parse_pattern
from groute.routing.route import Route, RouteMatch, SegmentKind

logger = logging.getLogger("groute.routing")

# Leaf key for routes registered without a method token
ANY_METHOD = "*"


class _TrieNode:
    """A node in the pattern trie."""

    __slots__ = ("children", "end", "param", "rest", "routes")

    def __init__(self) -> None:
        # Literal segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single-segment parameter child, shared by every {name} at this level
        self.param: _TrieNode | None = None
        # {$} child
        self.end: _TrieNode | None = None
        # Rest-wildcard routes rooted here, keyed by method
        self.rest: dict[str, Route] = {}
        # Routes ending at this node, keyed by method
        self.routes: dict[str, Route] = {}


class ServeMux:
    """Request multiplexer with Go ``net/http``-style patterns.

    Usage::

        mux = ServeMux()
        mux.register("GET /users/{id}", handler)
        response = await mux.dispatch(request)
    """

    __slots__ = ("_config", "_root", "_routes")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._root = _TrieNode()
        self._routes: list[Route] = []

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in registration order."""
        return list(self._routes)

    # -- Registration --

    def register(self, pattern: str, handler: Handler) -> None:
        """Register *handler* under *pattern*.

        Raises ``PatternError`` for a malformed pattern and, unless the
        config says ``on_conflict="replace"``, ``RouteConflictError`` when
        the same method and path shape is already taken.
        """
        parsed = parse_pattern(pattern)
        table = self._table_for(parsed)
        key = parsed.method or ANY_METHOD
        route = Route(
            pattern=pattern,
            method=parsed.method,
            path=parsed.path,
            handler=handler,
            wildcards=parsed.wildcards,
        )

        existing = table.get(key)
        if existing is not None:
            if self._config.on_conflict == "error":
                raise RouteConflictError(pattern, existing.pattern)
            logger.warning("Pattern %r replaces %r", pattern, existing.pattern)
            self._routes[self._routes.index(existing)] = route
        else:
            self._routes.append(route)
        table[key] = route

    def _table_for(self, parsed: ParsedPattern) -> dict[str, Route]:
        """Walk (creating as needed) to the method table for *parsed*."""
        node = self._root
        for seg in parsed.segments:
            match seg.kind:
                case SegmentKind.LITERAL:
                    node = node.children.setdefault(seg.value, _TrieNode())
                case SegmentKind.PARAM:
                    if node.param is None:
                        node.param = _TrieNode()
                    node = node.param
                case SegmentKind.REST:
                    return node.rest
                case SegmentKind.END:
                    if node.end is None:
                        node.end = _TrieNode()
                    return node.end.routes
        return node.routes

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against registered patterns.

        Raises ``NotFound`` if no pattern matches the path, or
        ``MethodNotAllowed`` if patterns match the path but none of
        them accepts *method*.
        """
        allowed: set[str] = set()
        if path.startswith("/"):
            parts = path[1:].split("/")
            result = self._match_node(self._root, parts, 0, (), method, allowed)
            if result is not None:
                route, values = result
                params = {name: value for name, value in zip(route.wildcards, values) if name}
                return RouteMatch(route=route, path_params=params)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        values: tuple[str, ...],
        method: str,
        allowed: set[str],
    ) -> tuple[Route, tuple[str, ...]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed
        if index == len(parts):
            route = self._select(node.routes, method, allowed)
            return (route, values) if route is not None else None

        part = parts[index]

        # 1. Literal child
        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, values, method, allowed)
            if result is not None:
                return result

        # 2. {$}: the final, empty segment of a path ending in "/"
        if node.end is not None and part == "" and index == len(parts) - 1:
            route = self._select(node.end.routes, method, allowed)
            if route is not None:
                return route, values

        # 3. Single-segment parameter
        if node.param is not None and part:
            result = self._match_node(
                node.param, parts, index + 1, (*values, part), method, allowed
            )
            if result is not None:
                return result

        # 4. Rest wildcard
        if node.rest:
            route = self._select(node.rest, method, allowed)
            if route is not None:
                return route, (*values, "/".join(parts[index:]))

        return None

    def _select(self, table: dict[str, Route], method: str, allowed: set[str]) -> Route | None:
        """Pick the route for *method* from a method table.

        A route registered for the exact method wins, then GET for a HEAD
        request, then a route registered without a method. On a miss the
        table's methods are added to *allowed*.
        """
        if not table:
            return None
        route = table.get(method)
        if route is None and method == "HEAD" and self._config.head_matches_get:
            route = table.get("GET")
        if route is None:
            route = table.get(ANY_METHOD)
        if route is None:
            allowed.update(table)
            if "GET" in table and self._config.head_matches_get:
                allowed.add("HEAD")
        return route

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Match *request*, attach its path parameters and run the handler."""
        try:
            match = self.match(request.method, request.path)
        except NotFound:
            target = self._redirect_target(request)
            if target is None:
                raise
            return Redirect(target, status=301).to_response()

        routed = request.with_path_params(match.path_params, match.route.pattern)
        return await match.route.handler(routed)

    def _redirect_target(self, request: Request) -> str | None:
        """Return the slash-terminated URL when only the subtree matches.

        The path is decoded in the request, so the target is re-encoded
        and placed under the mount point.
        """
        if not self._config.redirect_trailing_slash or request.path.endswith("/"):
            return None
        path = request.path + "/"
        try:
            self.match(request.method, path)
        except (NotFound, MethodNotAllowed):
            return None
        target = quote(request.root_path + path, safe="/")
        qs = request.query.raw
        return f"{target}?{qs.decode('latin-1')}" if qs else target
