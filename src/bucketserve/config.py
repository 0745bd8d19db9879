"""Middleware configuration.

StaticBucketConfig is a frozen dataclass: validated once at creation and
shared read-only by every request.
"""

from dataclasses import dataclass

from bucketserve.errors import ConfigurationError
from bucketserve.storage.protocol import ObjectBackend


@dataclass(frozen=True, slots=True)
class StaticBucketConfig:
    """Configuration for ``StaticBucket``. Immutable after creation.

    Only the backend and bucket are required::

        config = StaticBucketConfig(
            backend=GCSBackend(),
            bucket="my-site",
            spa=True,
            root_path="/app/",
            enable_compression=True,
            min_size_for_compression=1024,
        )
    """

    backend: ObjectBackend
    bucket: str

    # Exact request paths that skip the middleware (e.g. "/healthz")
    bypass_paths: tuple[str, ...] = ()

    # Serve index.html for routes with no stored object
    spa: bool = False

    # URL prefix stripped from request paths before key lookup
    root_path: str = "/"

    # Compression
    enable_compression: bool = False
    compression_level: int | None = None  # None = default (6); 0 = store only
    min_size_for_compression: int = 0

    # Sent with every 200 response when set
    cache_control: str | None = None

    def __post_init__(self) -> None:
        if not self.bucket:
            msg = "StaticBucketConfig.bucket must be a non-empty bucket name."
            raise ConfigurationError(msg)
        if self.compression_level is not None and not 0 <= self.compression_level <= 9:
            msg = f"compression_level must be between 0 and 9, got {self.compression_level}."
            raise ConfigurationError(msg)
        if self.min_size_for_compression < 0:
            msg = "min_size_for_compression must not be negative."
            raise ConfigurationError(msg)
        # Accept any iterable of paths, store a tuple
        object.__setattr__(self, "bypass_paths", tuple(self.bypass_paths))
