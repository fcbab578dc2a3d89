"""Middleware — ``(Handler) -> Handler`` wrappers, no inheritance required.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

Built-in middleware:
    AccessLog -- one log line per request
    CORSMiddleware -- Cross-Origin Resource Sharing
"""

from groute.middleware.access_log import AccessLog
from groute.middleware.chain import apply_middleware
from groute.middleware.cors import CORSConfig, CORSMiddleware
from groute.middleware.protocol import Handler, Middleware

__all__ = [
    "AccessLog",
    "CORSConfig",
    "CORSMiddleware",
    "Handler",
    "Middleware",
    "apply_middleware",
]
