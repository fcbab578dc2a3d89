"""Route, Segment and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SegmentKind(Enum):
    LITERAL = "literal"
    PARAM = "param"  # {name}
    REST = "rest"  # {name...} or a trailing slash
    END = "end"  # {$}


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a pattern path.

    Literal:  ``/users``      (value="users")
    Param:    ``/{id}``       (value="id")
    Rest:     ``/{path...}``  (value="path"), or ``/`` at the end (value="")
    End:      ``/{$}``        (value="")
    """

    kind: SegmentKind
    value: str = ""

    def __str__(self) -> str:
        match self.kind:
            case SegmentKind.PARAM:
                return "{" + self.value + "}"
            case SegmentKind.REST:
                return "{" + self.value + "...}" if self.value else ""
            case SegmentKind.END:
                return "{$}"
            case _:
                return self.value


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    ``wildcards`` lists the capture names in path order. Anonymous
    captures (the rest of a trailing-slash pattern) appear as ``""``.
    """

    pattern: str
    method: str | None
    path: str
    handler: Callable[..., Any]
    wildcards: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match."""

    route: Route
    path_params: dict[str, str]
