"""Storage backend error hierarchy."""

from bucketserve.errors import BucketServeError


class StorageError(BucketServeError):
    """Base for all bucketserve.storage errors."""


class ObjectNotFoundError(StorageError):
    """Raised when the bucket or the object key does not exist."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(f"object not found: {bucket}/{key}")
        self.bucket = bucket
        self.key = key


class BackendError(StorageError):
    """Raised for access-denied, transient, and other backend failures."""


class BackendNotInstalledError(StorageError):
    """Raised when the SDK a backend wraps is not installed."""
