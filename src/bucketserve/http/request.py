"""Immutable HTTP request.

Frozen metadata read from the ASGI scope. Static delivery never reads
a request body, so none is exposed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bucketserve.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers

    @property
    def accept_encoding(self) -> str | None:
        """All ``Accept-Encoding`` values, comma-joined."""
        return self.headers.get_joined("accept-encoding")

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
        )
