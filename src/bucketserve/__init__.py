"""bucketserve: serve an object-storage bucket as a static site.

Resolves request paths to object keys, fetches them (and, for
single-page apps, the ``index.html`` fallback) concurrently, negotiates
gzip, and answers through an async middleware.

Basic usage::

    from bucketserve import App, StaticBucket, StaticBucketConfig
    from bucketserve.storage import GCSBackend

    app = App()
    app.add_middleware(StaticBucket(StaticBucketConfig(
        backend=GCSBackend(),
        bucket="my-site",
        spa=True,
    )))

Backends (``pip install bucketserve[gcs]`` / ``bucketserve[minio]``)::

    from bucketserve.storage import GCSBackend, MinioBackend
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "BucketServeError",
    "ConfigurationError",
    "Middleware",
    "Next",
    "Request",
    "Response",
    "StaticBucket",
    "StaticBucketConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import bucketserve`` fast while providing a clean top-level API.
    """
    if name == "App":
        from bucketserve.app import App

        return App

    if name == "StaticBucketConfig":
        from bucketserve.config import StaticBucketConfig

        return StaticBucketConfig

    if name == "StaticBucket":
        from bucketserve.middleware.bucket import StaticBucket

        return StaticBucket

    if name in ("Middleware", "Next"):
        from bucketserve.middleware import protocol

        return getattr(protocol, name)

    if name == "Request":
        from bucketserve.http.request import Request

        return Request

    if name == "Response":
        from bucketserve.http.response import Response

        return Response

    if name in ("BucketServeError", "ConfigurationError"):
        from bucketserve import errors

        return getattr(errors, name)

    msg = f"module 'bucketserve' has no attribute {name!r}"
    raise AttributeError(msg)
