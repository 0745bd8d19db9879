"""In-process backend backed by a dict.

Useful for tests and local development where no bucket is reachable.
"""

from collections.abc import Mapping

from bucketserve.storage.errors import ObjectNotFoundError
from bucketserve.storage.protocol import ObjectStat


class MemoryBackend:
    """Serve objects from an in-memory ``{bucket: {key: bytes}}`` mapping.

    Usage::

        backend = MemoryBackend({"site": {"index.html": b"<h1>Home</h1>"}})

    Content types reported by ``stat`` can be supplied per key via
    ``content_types``; otherwise the reported type is empty, as for an
    object uploaded without metadata.
    """

    __slots__ = ("_buckets", "_content_types")

    def __init__(
        self,
        buckets: Mapping[str, Mapping[str, bytes]] | None = None,
        *,
        content_types: Mapping[tuple[str, str], str] | None = None,
    ) -> None:
        self._buckets: dict[str, dict[str, bytes]] = {
            name: dict(objects) for name, objects in (buckets or {}).items()
        }
        self._content_types = dict(content_types or {})

    def put(self, bucket: str, key: str, data: bytes, content_type: str = "") -> None:
        """Store an object, creating the bucket if needed."""
        self._buckets.setdefault(bucket, {})[key] = data
        if content_type:
            self._content_types[(bucket, key)] = content_type

    def _get(self, bucket: str, key: str) -> bytes:
        try:
            return self._buckets[bucket][key]
        except KeyError:
            raise ObjectNotFoundError(bucket, key) from None

    def stat(self, bucket: str, key: str) -> ObjectStat:
        data = self._get(bucket, key)
        return ObjectStat(size=len(data), content_type=self._content_types.get((bucket, key), ""))

    def read(self, bucket: str, key: str) -> bytes:
        return self._get(bucket, key)
