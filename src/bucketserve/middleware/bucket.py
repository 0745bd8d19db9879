"""Bucket-backed static file middleware.

Serves objects from a storage bucket as if they were a static file
tree, with optional single-page-application fallback and gzip
compression.

Per request::

    bypass? -> resolve key -> fetch (key [+ index.html]) concurrently
            -> pick primary or SPA fallback -> maybe compress -> respond

Backend and compression failures never escape: they become an SPA
fallback, a 404, or an uncompressed body.
"""

import logging
from dataclasses import replace

from bucketserve.assets.compression import Compressor, select_encoding
from bucketserve.assets.fetch import FetchResult, ObjectFetcher
from bucketserve.assets.paths import INDEX_DOCUMENT, resolve_key
from bucketserve.config import StaticBucketConfig
from bucketserve.errors import CompressionError
from bucketserve.http.request import Request
from bucketserve.http.response import Response
from bucketserve.middleware.protocol import Next

logger = logging.getLogger("bucketserve.static")

_SERVED_METHODS = frozenset({"GET", "HEAD"})


class StaticBucket:
    """Middleware that serves files from an object-storage bucket.

    Requests whose path exactly matches one of ``bypass_paths``, and
    anything other than GET or HEAD, fall through to the next handler.
    Every other request is answered here: 200 with the object, 200 with
    ``index.html`` in SPA mode, or an empty 404.

    Usage::

        app.add_middleware(StaticBucket(StaticBucketConfig(
            backend=GCSBackend(),
            bucket="my-site",
            bypass_paths=("/healthz",),
            spa=True,
            enable_compression=True,
            min_size_for_compression=1024,
        )))
    """

    __slots__ = ("_bypass", "_compressor", "_fetcher", "config")

    def __init__(self, config: StaticBucketConfig) -> None:
        self.config = config
        self._bypass = frozenset(config.bypass_paths)
        self._fetcher = ObjectFetcher(config.backend, config.bucket)
        self._compressor = Compressor(
            enabled=config.enable_compression,
            level=config.compression_level,
            min_size=config.min_size_for_compression,
        )

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve an object from the bucket or fall through."""
        if request.method not in _SERVED_METHODS or request.path in self._bypass:
            return await next(request)

        key = resolve_key(request.path, self.config.root_path, spa=self.config.spa)
        keys = [key, INDEX_DOCUMENT] if self.config.spa and key != INDEX_DOCUMENT else [key]
        results = await self._fetcher.fetch_many(keys)

        selected = self._select(results)
        if selected is None:
            logger.debug("no object for %s (key %r)", request.path, key)
            return Response(status=404, content_type="text/plain")

        return self._respond(selected, request.accept_encoding)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select(self, results: list[FetchResult]) -> FetchResult | None:
        """Primary result if it loaded, else the SPA fallback if that did."""
        primary = results[0]
        if primary.ok:
            return primary
        if len(results) > 1 and results[1].ok:
            logger.debug("serving %s in place of %r", INDEX_DOCUMENT, primary.key)
            return results[1]
        return None

    def _respond(self, result: FetchResult, accept_encoding: str | None) -> Response:
        response = Response(body=result.body, content_type=result.content_type)
        if self.config.cache_control:
            response = response.with_header("Cache-Control", self.config.cache_control)

        encoding = select_encoding(accept_encoding)
        eligible = self._compressor.should_compress(result.content_type, result.size)
        if encoding is not None and eligible:
            try:
                compressed = self._compressor.compress(result.body, encoding)
            except CompressionError as exc:
                logger.debug("sending %r uncompressed: %s", result.key, exc)
            else:
                return (
                    replace(response, body=compressed)
                    .with_header("Content-Encoding", encoding)
                    .with_header("Content-Length", str(len(compressed)))
                    .with_header("Vary", "Accept-Encoding")
                )

        return response.with_header("Content-Length", str(result.size))
