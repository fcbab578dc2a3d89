"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, shared by
a root router and every group derived from it.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = RouterConfig(debug=True, on_conflict="replace")
    """

    # Include exception text in default 500 bodies
    debug: bool = False

    # What the multiplexer does when a pattern is registered twice
    on_conflict: Literal["error", "replace"] = "error"

    # GET /docs -> 301 /docs/ when only the subtree /docs/ is registered
    redirect_trailing_slash: bool = True

    # GET routes also answer HEAD requests
    head_matches_get: bool = True

    # Run plain ``def`` handlers in an anyio worker thread
    sync_in_thread: bool = False

    def __post_init__(self) -> None:
        if self.on_conflict not in ("error", "replace"):
            msg = f"on_conflict must be 'error' or 'replace', got {self.on_conflict!r}"
            raise ValueError(msg)
