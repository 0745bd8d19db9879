"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    StaticBucket -- Serve files from an object-storage bucket
"""

from bucketserve.middleware.bucket import StaticBucket
from bucketserve.middleware.protocol import Middleware, Next

__all__ = ["Middleware", "Next", "StaticBucket"]
