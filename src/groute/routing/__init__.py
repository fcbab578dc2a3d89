"""Routing — the multiplexer a router tree registers into.

``Multiplexer`` is the protocol; ``ServeMux`` is the trie-based
implementation used by default.
"""

from groute.routing.mux import ServeMux
from groute.routing.pattern import ParsedPattern, parse_pattern
from groute.routing.protocol import Multiplexer
from groute.routing.route import Route, RouteMatch, Segment, SegmentKind

__all__ = [
    "Multiplexer",
    "ParsedPattern",
    "Route",
    "RouteMatch",
    "Segment",
    "SegmentKind",
    "ServeMux",
    "parse_pattern",
]
