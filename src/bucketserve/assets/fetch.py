"""Concurrent object fetching.

Backends are blocking, so each fetch runs in an anyio worker thread.
``fetch_many`` fans out one task per key inside a task group and joins
on all of them, so the added latency of an SPA fallback lookup is the
slowest single fetch rather than the sum.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import anyio
from anyio import to_thread

from bucketserve.assets.content_types import content_type
from bucketserve.storage.protocol import ObjectBackend

logger = logging.getLogger("bucketserve.fetch")


@dataclass(frozen=True, slots=True)
class FetchResult:
    """The outcome of fetching one object key.

    Either ``error`` is set, or ``body``/``content_type``/``size``
    describe the object. ``size`` is the length of the body as read,
    which can differ from the size the backend reports in ``stat``.
    """

    key: str
    body: bytes = b""
    content_type: str = ""
    size: int = 0
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ObjectFetcher:
    """Fetch objects from one bucket of a backend."""

    __slots__ = ("_backend", "_bucket")

    def __init__(self, backend: ObjectBackend, bucket: str) -> None:
        self._backend = backend
        self._bucket = bucket

    def _load(self, key: str) -> FetchResult:
        stat = self._backend.stat(self._bucket, key)
        body = self._backend.read(self._bucket, key)
        return FetchResult(
            key=key,
            body=body,
            content_type=content_type(key, stat.content_type),
            size=len(body),
        )

    async def fetch(self, key: str) -> FetchResult:
        """Fetch a single key. Never raises for backend failures."""
        try:
            return await to_thread.run_sync(self._load, key)
        except Exception as exc:
            logger.debug("fetch %s/%s failed: %s", self._bucket, key, exc)
            return FetchResult(key=key, error=exc)

    async def fetch_many(self, keys: Sequence[str]) -> list[FetchResult]:
        """Fetch all *keys* concurrently; results follow input order."""
        results: list[FetchResult | None] = [None] * len(keys)

        async def _fetch_into(index: int, key: str) -> None:
            results[index] = await self.fetch(key)

        async with anyio.create_task_group() as tg:
            for index, key in enumerate(keys):
                tg.start_soon(_fetch_into, index, key)

        return [result for result in results if result is not None]
