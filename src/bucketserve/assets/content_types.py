"""Content-type resolution for object keys.

Lookup order: the static table below, then the backend-reported type,
then the stdlib ``mimetypes`` registry, then ``application/octet-stream``.
"""

import mimetypes
import posixpath
from types import MappingProxyType

OCTET_STREAM = "application/octet-stream"

MIME_TYPES = MappingProxyType(
    {
        ".html": "text/html",
        ".css": "text/css",
        ".js": "application/javascript",
        ".json": "application/json",
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".gif": "image/gif",
        ".svg": "image/svg+xml",
        ".ico": "image/x-icon",
        ".txt": "text/plain",
        ".pdf": "application/pdf",
        ".woff": "font/woff",
        ".woff2": "font/woff2",
        ".ttf": "font/ttf",
        ".eot": "application/vnd.ms-fontobject",
    }
)


def extension(key: str) -> str:
    """Lowercase extension of *key*'s final segment, including the dot."""
    path, _, _ = key.partition("?")
    return posixpath.splitext(path)[1].lower()


def content_type(key: str, fallback: str = "") -> str:
    """Resolve the MIME type for an object key.

    Extension matching is case-insensitive and ignores a trailing query
    string, so ``styles.css?v=1`` and ``STYLES.CSS`` are both ``text/css``.
    A non-empty *fallback* (usually the type the backend stored with the
    object) wins over the ``mimetypes`` registry.
    """
    ext = extension(key)
    known = MIME_TYPES.get(ext)
    if known is not None:
        return known

    if fallback:
        return fallback

    if ext:
        guessed, _ = mimetypes.guess_type(f"object{ext}")
        if guessed:
            return guessed.split(";", 1)[0].strip()

    return OCTET_STREAM
