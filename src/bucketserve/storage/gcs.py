"""Google Cloud Storage backend.

Wraps a ``google.cloud.storage.Client`` behind the ``ObjectBackend``
protocol so the asset pipeline never touches the SDK directly.

Requires ``pip install bucketserve[gcs]``.
"""

from typing import Any

from bucketserve.storage.errors import BackendError, BackendNotInstalledError, ObjectNotFoundError
from bucketserve.storage.protocol import ObjectStat


def _import_sdk() -> tuple[Any, Any]:
    try:
        from google.api_core import exceptions as api_exceptions
        from google.cloud import storage
    except ImportError:
        msg = (
            "GCSBackend requires 'google-cloud-storage'. "
            "Install it with: pip install bucketserve[gcs]"
        )
        raise BackendNotInstalledError(msg) from None
    return storage, api_exceptions


class GCSBackend:
    """Read objects from Google Cloud Storage.

    Pass an existing client to share its credentials and HTTP session;
    otherwise a default ``storage.Client()`` is built from the ambient
    Application Default Credentials.

    Usage::

        from google.cloud import storage

        backend = GCSBackend(storage.Client(project="my-project"))
    """

    __slots__ = ("_client", "_errors")

    def __init__(self, client: Any = None) -> None:
        storage, api_exceptions = _import_sdk()
        self._client = client if client is not None else storage.Client()
        self._errors = api_exceptions

    @property
    def client(self) -> Any:
        """The underlying ``google.cloud.storage.Client``."""
        return self._client

    def stat(self, bucket: str, key: str) -> ObjectStat:
        try:
            blob = self._client.bucket(bucket).get_blob(key)
        except self._errors.NotFound:
            raise ObjectNotFoundError(bucket, key) from None
        except self._errors.GoogleAPIError as exc:
            raise BackendError(f"stat {bucket}/{key} failed: {exc}") from exc
        if blob is None:
            raise ObjectNotFoundError(bucket, key)
        return ObjectStat(size=blob.size or 0, content_type=blob.content_type or "")

    def read(self, bucket: str, key: str) -> bytes:
        try:
            return self._client.bucket(bucket).blob(key).download_as_bytes()
        except self._errors.NotFound:
            raise ObjectNotFoundError(bucket, key) from None
        except self._errors.GoogleAPIError as exc:
            raise BackendError(f"read {bucket}/{key} failed: {exc}") from exc
