"""Asset pipeline: key resolution, content types, fetching, compression.

Each stage is usable on its own; ``StaticBucket`` composes them.
"""

from bucketserve.assets.compression import COMPRESSIBLE_TYPES, Compressor, select_encoding
from bucketserve.assets.content_types import MIME_TYPES, content_type
from bucketserve.assets.fetch import FetchResult, ObjectFetcher
from bucketserve.assets.paths import INDEX_DOCUMENT, normalize_root, resolve_key

__all__ = [
    "COMPRESSIBLE_TYPES",
    "INDEX_DOCUMENT",
    "MIME_TYPES",
    "Compressor",
    "FetchResult",
    "ObjectFetcher",
    "content_type",
    "normalize_root",
    "resolve_key",
    "select_encoding",
]
