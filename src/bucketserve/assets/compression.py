"""Response body compression: eligibility, negotiation, and encoding.

Only ``gzip`` has an encoder. ``br`` is negotiated (and preferred) but
its encoder is not built yet, so compressing with it raises
``EncodingNotImplementedError`` and the caller sends the body as-is.
"""

import gzip

from bucketserve.errors import EncodingNotImplementedError, UnsupportedEncodingError

DEFAULT_LEVEL = 6

# Text-like and structured-data types. Images, fonts, and opaque binary
# are already compressed or not worth the CPU.
COMPRESSIBLE_TYPES = frozenset(
    {
        "text/html",
        "text/css",
        "text/plain",
        "text/xml",
        "application/javascript",
        "application/json",
        "application/xml",
        "application/x-javascript",
        "application/ld+json",
    }
)

# Preference order when the client accepts several
PREFERRED_ENCODINGS = ("br", "gzip")


def accepted_encodings(header: str) -> tuple[frozenset[str], frozenset[str]]:
    """Parse an ``Accept-Encoding`` value into ``(accepted, refused)`` codings.

    Codings are lowercased. A coding with ``q=0`` or a malformed q-value
    is refused.
    """
    accepted: set[str] = set()
    refused_codings: set[str] = set()
    for part in header.split(","):
        name, _, params = part.partition(";")
        name = name.strip().lower()
        if not name:
            continue
        refused = False
        for param in params.split(";"):
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    refused = float(value) <= 0
                except ValueError:
                    refused = True
        if refused:
            refused_codings.add(name)
        else:
            accepted.add(name)
    return frozenset(accepted), frozenset(refused_codings)


def select_encoding(accept_encoding: str | None) -> str | None:
    """Pick the preferred coding the client accepts, or ``None``.

    ``*`` matches any coding the header does not explicitly refuse.
    """
    accepted, refused = accepted_encodings(accept_encoding or "")
    for encoding in PREFERRED_ENCODINGS:
        if encoding in accepted:
            return encoding
        if "*" in accepted and encoding not in refused:
            return encoding
    return None


class Compressor:
    """Decide whether to compress a body, and compress it.

    ``level`` of ``None`` means "not configured" and uses gzip level 6;
    ``0`` is a real level (store only, no compression).
    """

    __slots__ = ("enabled", "level", "min_size")

    def __init__(
        self, *, enabled: bool = False, level: int | None = None, min_size: int = 0
    ) -> None:
        self.enabled = enabled
        self.level = DEFAULT_LEVEL if level is None else level
        self.min_size = min_size

    def should_compress(self, content_type: str, size: int) -> bool:
        """True if a body of this type and size is worth compressing."""
        if not self.enabled:
            return False
        if size < self.min_size:
            return False
        return content_type in COMPRESSIBLE_TYPES

    def compress(self, body: bytes, encoding: str) -> bytes:
        """Encode *body* with *encoding*.

        Raises:
            EncodingNotImplementedError: For ``br``.
            UnsupportedEncodingError: For anything other than ``gzip``.
        """
        if encoding == "gzip":
            return gzip.compress(body, compresslevel=self.level, mtime=0)
        if encoding == "br":
            raise EncodingNotImplementedError(encoding)
        raise UnsupportedEncodingError(encoding)
