"""Shared type aliases used across groute modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route callable supplied by users: ``def`` or ``async def``, takes the
# request, returns anything negotiate() accepts
Endpoint: TypeAlias = Callable[..., Any]
