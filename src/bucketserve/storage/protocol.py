"""Backend protocol and object metadata.

A backend is any object with ``stat`` and ``read`` methods matching::

    def stat(self, bucket: str, key: str) -> ObjectStat: ...
    def read(self, bucket: str, key: str) -> bytes: ...

No base class required. Both methods are blocking; the fetcher runs
them in worker threads. Either may raise, and a failure of either one
counts as a failure for that key.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ObjectStat:
    """Backend-reported metadata for a single object."""

    size: int
    content_type: str = ""


class ObjectBackend(Protocol):
    """Protocol for object-storage backends."""

    def stat(self, bucket: str, key: str) -> ObjectStat: ...

    def read(self, bucket: str, key: str) -> bytes: ...
