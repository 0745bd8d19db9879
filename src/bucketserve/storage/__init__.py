"""Object-storage backends: Protocol-based, no inheritance required.

A backend is any object with blocking ``stat(bucket, key)`` and
``read(bucket, key)`` methods.

Built-in backends:
    GCSBackend -- Google Cloud Storage (requires google-cloud-storage)
    MinioBackend -- MinIO / S3-compatible stores (requires minio)
    MemoryBackend -- In-process dict, for tests and local development
"""

from bucketserve.storage.errors import (
    BackendError,
    BackendNotInstalledError,
    ObjectNotFoundError,
    StorageError,
)
from bucketserve.storage.gcs import GCSBackend
from bucketserve.storage.memory import MemoryBackend
from bucketserve.storage.minio import MinioBackend
from bucketserve.storage.protocol import ObjectBackend, ObjectStat

__all__ = [
    "BackendError",
    "BackendNotInstalledError",
    "GCSBackend",
    "MemoryBackend",
    "MinioBackend",
    "ObjectBackend",
    "ObjectNotFoundError",
    "ObjectStat",
    "StorageError",
]
