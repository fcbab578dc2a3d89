"""Pattern parsing for the multiplexer.

Grammar::

    [METHOD<space>]/segment/segment...

    "/users"            literal segments
    "/users/{id}"       {name} matches one non-empty segment
    "/files/{path...}"  {name...} matches the rest of the path, possibly empty
    "/static/"          a trailing slash matches everything below it
    "/{$}"              {$} matches only the path ending in that slash
"""

import re
from dataclasses import dataclass

from groute.errors import PatternError
from groute.routing.route import Segment, SegmentKind

# RFC 9110 token characters
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


@dataclass(frozen=True, slots=True)
class ParsedPattern:
    raw: str
    method: str | None
    path: str
    segments: tuple[Segment, ...]

    @property
    def wildcards(self) -> tuple[str, ...]:
        """Capture names in path order, ``""`` for an anonymous rest."""
        return tuple(
            seg.value
            for seg in self.segments
            if seg.kind in (SegmentKind.PARAM, SegmentKind.REST)
        )


def _split_method(raw: str) -> tuple[str | None, str]:
    for i, ch in enumerate(raw):
        if ch in " \t":
            return raw[:i] or None, raw[i + 1 :].lstrip(" \t")
    return None, raw


def _parse_wildcard(raw: str, seg: str, is_last: bool) -> Segment:
    if not (seg.startswith("{") and seg.endswith("}")):
        raise PatternError(raw, f"wildcard in {seg!r} must be a full segment")
    inner = seg[1:-1]
    if inner == "$":
        if not is_last:
            raise PatternError(raw, "{$} must be the last segment")
        return Segment(SegmentKind.END)
    if inner.endswith("..."):
        name = inner[:-3]
        if not is_last:
            raise PatternError(raw, f"{seg!r} must be the last segment")
        kind = SegmentKind.REST
    else:
        name = inner
        kind = SegmentKind.PARAM
    if not name.isidentifier():
        raise PatternError(raw, f"bad wildcard name {name!r}")
    return Segment(kind, name)


def parse_pattern(raw: str) -> ParsedPattern:
    """Parse *raw* into method, path and segments.

    Raises ``PatternError`` for anything the multiplexer cannot route.
    """
    method, path = _split_method(raw)
    if method is not None and not _METHOD_RE.match(method):
        raise PatternError(raw, f"bad method {method!r}")
    if not path.startswith("/"):
        raise PatternError(raw, "path must start with '/'")

    parts = path[1:].split("/")
    segments: list[Segment] = []
    seen: set[str] = set()
    for i, part in enumerate(parts):
        is_last = i == len(parts) - 1
        if "{" in part or "}" in part:
            seg = _parse_wildcard(raw, part, is_last)
            if seg.value:
                if seg.value in seen:
                    raise PatternError(raw, f"duplicate wildcard name {seg.value!r}")
                seen.add(seg.value)
        elif part == "" and is_last:
            seg = Segment(SegmentKind.REST)
        else:
            seg = Segment(SegmentKind.LITERAL, part)
        segments.append(seg)

    return ParsedPattern(raw=raw, method=method, path=path, segments=tuple(segments))
