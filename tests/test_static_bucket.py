"""Tests for the StaticBucket middleware, end to end through App."""

import gzip

import pytest

from bucketserve.app import App
from bucketserve.config import StaticBucketConfig
from bucketserve.middleware.bucket import StaticBucket
from bucketserve.storage.memory import MemoryBackend
from bucketserve.storage.protocol import ObjectStat
from bucketserve.testing import TestClient

INDEX = b"<!doctype html><h1>App shell</h1>"
BIG_HTML = b"<p>" + b"Hello, World! " * 200 + b"</p>"


@pytest.fixture
def backend() -> MemoryBackend:
    """A bucket laid out like a built single-page app."""
    backend = MemoryBackend()
    backend.put("site", "index.html", INDEX)
    backend.put("site", "about/index.html", b"<h1>About</h1>")
    backend.put("site", "big.html", BIG_HTML)
    backend.put("site", "css/style.css", b"body { color: red; }")
    backend.put("site", "img/logo.png", b"\x89PNG\r\n\x1a\n" * 300)
    backend.put("site", "data.bin", b"\x00\x01\x02\x03")
    return backend


class StaleStatBackend(MemoryBackend):
    """Stat reports half the real size, as for a transcoded or replaced object."""

    def stat(self, bucket: str, key: str) -> ObjectStat:
        real = super().stat(bucket, key)
        return ObjectStat(size=real.size // 2, content_type=real.content_type)


class CountingBackend(MemoryBackend):
    """Records every key looked up."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.lookups: list[str] = []

    def stat(self, bucket: str, key: str) -> ObjectStat:
        self.lookups.append(key)
        return super().stat(bucket, key)


def make_app(backend: MemoryBackend, **overrides) -> App:
    app = App()
    app.add_middleware(StaticBucket(StaticBucketConfig(backend=backend, bucket="site", **overrides)))

    @app.route("/healthz")
    def healthz(request):
        return "ok"

    @app.route("/upload", methods=["POST"])
    def upload(request):
        return "uploaded"

    return app


# ------------------------------------------------------------------
# Plain static serving
# ------------------------------------------------------------------


class TestStaticServing:
    async def test_serves_object(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/css/style.css")
            assert response.status == 200
            assert response.content_type == "text/css"
            assert response.text == "body { color: red; }"
            assert response.header("content-length") == "20"

    async def test_root_prefix_stripped(self, backend) -> None:
        async with TestClient(make_app(backend, root_path="static")) as client:
            response = await client.get("/static/css/style.css")
            assert response.status == 200
            assert response.text == "body { color: red; }"

    async def test_missing_object_is_empty_404(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/missing.js")
            assert response.status == 404
            assert response.body == b""

    async def test_route_without_spa_is_404(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/dashboard")
            assert response.status == 404
            assert response.body == b""

    async def test_query_string_ignored(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/css/style.css?v=1.2.3")
            assert response.status == 200
            assert response.content_type == "text/css"

    async def test_binary_object(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/data.bin")
            assert response.status == 200
            assert response.content_type == "application/octet-stream"
            assert response.body == b"\x00\x01\x02\x03"

    async def test_content_length_matches_body_read(self) -> None:
        backend = StaleStatBackend({"site": {"app.js": b"x" * 100}})
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/app.js")
        assert response.status == 200
        assert len(response.body) == 100
        assert response.header("content-length") == "100"

    async def test_cache_control(self, backend) -> None:
        app = make_app(backend, cache_control="public, max-age=300")
        async with TestClient(app) as client:
            ok = await client.get("/css/style.css")
            missing = await client.get("/missing.css")
        assert ok.header("cache-control") == "public, max-age=300"
        assert missing.header("cache-control") is None

    async def test_head_has_length_but_no_body(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.head("/css/style.css")
            assert response.status == 200
            assert response.body == b""
            assert response.header("content-length") == "20"


# ------------------------------------------------------------------
# Fall-through to the next handler
# ------------------------------------------------------------------


class TestBypass:
    async def test_bypass_path_reaches_route(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True, bypass_paths=("/healthz",))) as client:
            response = await client.get("/healthz")
            assert response.status == 200
            assert response.text == "ok"

    async def test_bypass_is_exact_match(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True, bypass_paths=("/healthz",))) as client:
            response = await client.get("/healthz/deep")
            assert response.status == 200
            assert response.body == INDEX

    async def test_unlisted_path_is_served_from_bucket(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True)) as client:
            response = await client.get("/healthz")
            assert response.body == INDEX

    async def test_post_falls_through(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True)) as client:
            response = await client.post("/upload")
            assert response.status == 200
            assert response.text == "uploaded"


# ------------------------------------------------------------------
# SPA fallback
# ------------------------------------------------------------------


class TestSPA:
    async def test_unknown_route_serves_index(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True, root_path="/app/")) as client:
            response = await client.get("/app/dashboard")
            assert response.status == 200
            assert response.body == INDEX
            assert response.content_type == "text/html"
            assert response.header("content-length") == str(len(INDEX))

    async def test_root_serves_index(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True, root_path="/app/")) as client:
            response = await client.get("/app/")
            assert response.status == 200
            assert response.body == INDEX

    async def test_root_looks_up_index_once(self) -> None:
        backend = CountingBackend({"site": {"index.html": INDEX}})
        async with TestClient(make_app(backend, spa=True)) as client:
            response = await client.get("/")
        assert response.body == INDEX
        assert backend.lookups == ["index.html"]

    async def test_route_looks_up_key_and_index(self) -> None:
        backend = CountingBackend({"site": {"index.html": INDEX}})
        async with TestClient(make_app(backend, spa=True)) as client:
            await client.get("/dashboard")
        assert sorted(backend.lookups) == ["dashboard/index.html", "index.html"]

    async def test_route_with_own_index(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True)) as client:
            response = await client.get("/about")
            assert response.status == 200
            assert response.text == "<h1>About</h1>"

    async def test_missing_file_serves_index(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True)) as client:
            response = await client.get("/assets/gone.js")
            assert response.status == 200
            assert response.body == INDEX

    async def test_existing_file_not_replaced(self, backend) -> None:
        async with TestClient(make_app(backend, spa=True)) as client:
            response = await client.get("/css/style.css")
            assert response.content_type == "text/css"

    async def test_404_when_index_also_missing(self) -> None:
        async with TestClient(make_app(MemoryBackend(), spa=True)) as client:
            response = await client.get("/dashboard")
            assert response.status == 404
            assert response.body == b""


# ------------------------------------------------------------------
# Compression
# ------------------------------------------------------------------


class TestCompression:
    def _app(self, backend: MemoryBackend, **overrides) -> App:
        return make_app(
            backend,
            enable_compression=True,
            min_size_for_compression=1024,
            **overrides,
        )

    async def test_gzip_large_html(self, backend) -> None:
        async with TestClient(self._app(backend)) as client:
            response = await client.get("/big.html", headers={"Accept-Encoding": "gzip"})
        assert response.status == 200
        assert response.header("content-encoding") == "gzip"
        assert response.header("vary") == "Accept-Encoding"
        assert response.header("content-length") == str(len(response.body))
        assert gzip.decompress(response.body) == BIG_HTML
        assert response.content_type == "text/html"

    async def test_brotli_preferred_but_unimplemented(self, backend) -> None:
        async with TestClient(self._app(backend)) as client:
            response = await client.get("/big.html", headers={"Accept-Encoding": "gzip, br"})
        assert response.header("content-encoding") is None
        assert response.body == BIG_HTML
        assert response.header("content-length") == str(len(BIG_HTML))

    async def test_wildcard_falls_back_to_gzip_when_brotli_refused(self, backend) -> None:
        async with TestClient(self._app(backend)) as client:
            response = await client.get("/big.html", headers={"Accept-Encoding": "br;q=0, *"})
        assert response.header("content-encoding") == "gzip"
        assert gzip.decompress(response.body) == BIG_HTML

    async def test_no_accept_encoding(self, backend) -> None:
        async with TestClient(self._app(backend)) as client:
            response = await client.get("/big.html")
        assert response.header("content-encoding") is None
        assert response.body == BIG_HTML

    async def test_small_body_not_compressed(self, backend) -> None:
        async with TestClient(self._app(backend)) as client:
            response = await client.get("/css/style.css", headers={"Accept-Encoding": "gzip"})
        assert response.header("content-encoding") is None

    async def test_image_not_compressed(self, backend) -> None:
        async with TestClient(self._app(backend)) as client:
            response = await client.get("/img/logo.png", headers={"Accept-Encoding": "gzip"})
        assert response.header("content-encoding") is None
        assert response.content_type == "image/png"

    async def test_disabled(self, backend) -> None:
        async with TestClient(make_app(backend)) as client:
            response = await client.get("/big.html", headers={"Accept-Encoding": "gzip"})
        assert response.header("content-encoding") is None

    async def test_spa_fallback_is_compressed(self) -> None:
        backend = MemoryBackend({"site": {"index.html": BIG_HTML}})
        async with TestClient(self._app(backend, spa=True)) as client:
            response = await client.get("/dashboard", headers={"Accept-Encoding": "gzip"})
        assert response.status == 200
        assert response.header("content-encoding") == "gzip"
        assert gzip.decompress(response.body) == BIG_HTML

    async def test_cache_control_kept_when_compressed(self, backend) -> None:
        app = self._app(backend, cache_control="no-cache")
        async with TestClient(app) as client:
            response = await client.get("/big.html", headers={"Accept-Encoding": "gzip"})
        assert response.header("cache-control") == "no-cache"
