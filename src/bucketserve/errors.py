"""bucketserve exception hierarchy.

Shared across the asset pipeline, storage backends, and the ASGI host
so every module raises and catches the same types.
"""


class BucketServeError(Exception):
    """Base for all bucketserve-specific errors."""


class ConfigurationError(BucketServeError):
    """Raised when middleware configuration is invalid.

    Raised from ``StaticBucketConfig.__post_init__`` so mistakes surface
    at startup rather than on the first request.
    """


class CompressionError(BucketServeError):
    """Base for errors raised while encoding a response body."""


class UnsupportedEncodingError(CompressionError):
    """The requested content-coding is not one bucketserve knows about."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"unsupported encoding: {encoding}")
        self.encoding = encoding


class EncodingNotImplementedError(CompressionError):
    """The content-coding is recognised but has no encoder yet (``br``)."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"{encoding} compression not implemented")
        self.encoding = encoding
