"""MinIO / S3-compatible backend.

Wraps the MinIO Python SDK behind the ``ObjectBackend`` protocol so
buckets on MinIO (or any S3-compatible store) can be served the same
way as Google Cloud Storage.

Requires ``pip install bucketserve[minio]``.
"""

from __future__ import annotations

from typing import Any

from bucketserve.storage.errors import BackendError, BackendNotInstalledError, ObjectNotFoundError
from bucketserve.storage.protocol import ObjectStat

# S3 error codes that mean "nothing at this key"
_MISSING_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "NoSuchObject"})


def _import_sdk() -> tuple[Any, Any]:
    try:
        from minio import Minio
        from minio.error import S3Error
    except ImportError:
        msg = (
            "MinioBackend requires 'minio'. "
            "Install it with: pip install bucketserve[minio]"
        )
        raise BackendNotInstalledError(msg) from None
    return Minio, S3Error


class MinioBackend:
    """Read objects from a MinIO server.

    Either pass a ready ``minio.Minio`` client or let the backend build
    one from an endpoint URL::

        backend = MinioBackend.from_endpoint(
            "https://minio.internal:9000",
            access_key="...",
            secret_key="...",
        )
    """

    __slots__ = ("_client", "_s3_error")

    def __init__(self, client: Any) -> None:
        _, s3_error = _import_sdk()
        self._client = client
        self._s3_error = s3_error

    @classmethod
    def from_endpoint(
        cls,
        endpoint: str,
        *,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> MinioBackend:
        """Build a client from an ``http://`` or ``https://`` endpoint URL."""
        minio_cls, _ = _import_sdk()
        client = minio_cls(
            endpoint.replace("http://", "").replace("https://", ""),
            access_key=access_key,
            secret_key=secret_key,
            secure=endpoint.startswith("https://"),
        )
        return cls(client)

    @property
    def client(self) -> Any:
        """The underlying ``minio.Minio`` client."""
        return self._client

    def _translate(self, exc: Exception, bucket: str, key: str, op: str) -> Exception:
        if getattr(exc, "code", None) in _MISSING_CODES:
            return ObjectNotFoundError(bucket, key)
        return BackendError(f"{op} {bucket}/{key} failed: {exc}")

    def stat(self, bucket: str, key: str) -> ObjectStat:
        try:
            info = self._client.stat_object(bucket_name=bucket, object_name=key)
        except self._s3_error as exc:
            raise self._translate(exc, bucket, key, "stat") from exc
        return ObjectStat(size=info.size or 0, content_type=info.content_type or "")

    def read(self, bucket: str, key: str) -> bytes:
        try:
            response = self._client.get_object(bucket_name=bucket, object_name=key)
        except self._s3_error as exc:
            raise self._translate(exc, bucket, key, "read") from exc
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()
