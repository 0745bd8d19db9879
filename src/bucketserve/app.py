"""ASGI host for bucketserve middleware.

Mutable during setup (routes, middleware). Frozen when ``__call__()`` is
first invoked. Routes are exact-path handlers; they exist so bypassed
paths such as health checks have somewhere to land.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from bucketserve._internal.asgi import Receive, Scope, Send
from bucketserve.errors import ConfigurationError
from bucketserve.http.request import Request
from bucketserve.http.response import Response
from bucketserve.middleware.protocol import Middleware, Next
from bucketserve.server.sender import send_response

logger = logging.getLogger("bucketserve.server")

Handler = Callable[[Request], Any]


def _to_response(value: Any) -> Response:
    """Coerce a handler return value to a Response."""
    if isinstance(value, Response):
        return value
    if isinstance(value, str):
        return Response(body=value, content_type="text/plain; charset=utf-8")
    if isinstance(value, bytes):
        return Response(body=value)
    msg = f"Handler returned {type(value).__name__}; expected Response, str, or bytes."
    raise TypeError(msg)


class App:
    """An ASGI application: a middleware chain around an exact-path route table.

    Usage::

        app = App()
        app.add_middleware(StaticBucket(config))

        @app.route("/healthz")
        def healthz(request):
            return "ok"

    Serve it with any ASGI server (``uvicorn myapp:app``).

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the middleware chain.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_handler",
        "_middleware_list",
        "_routes",
    )

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Handler] = {}
        self._middleware_list: list[Middleware] = []
        self._handler: Next | None = None
        self._frozen: bool = False
        self._freeze_lock = threading.Lock()

    # -- Setup --

    def route(self, path: str, *, methods: list[str] | None = None) -> Callable[[Handler], Handler]:
        """Register a handler for an exact *path* via decorator.

        ``methods`` defaults to ``["GET"]``; HEAD is answered by GET handlers.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            for method in methods or ["GET"]:
                self._routes[(method.upper(), path)] = func
            return func

        return decorator

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline. The first added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        self._ensure_frozen()
        assert self._handler is not None

        request = Request.from_asgi(dict(scope))
        try:
            response = await self._handler(request)
        except Exception:
            logger.exception("Unhandled error serving %s %s", request.method, request.path)
            response = Response(
                body="Internal Server Error", status=500, content_type="text/plain"
            )

        await send_response(response, send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol; freeze at startup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._ensure_frozen()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    async def _dispatch(self, request: Request) -> Response:
        method = "GET" if request.method == "HEAD" else request.method
        handler = self._routes.get((method, request.path))
        if handler is None:
            return Response(body="Not Found", status=404, content_type="text/plain")
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        return _to_response(result)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise ConfigurationError(msg)

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Wrap the middleware around route dispatch.

        MUST only be called while holding _freeze_lock.
        """
        handler: Next = self._dispatch
        for mw in reversed(self._middleware_list):

            async def make_next(
                req: Request, _mw: Middleware = mw, _next: Next = handler
            ) -> Response:
                return await _mw(req, _next)

            handler = make_next

        self._handler = handler
        self._frozen = True
