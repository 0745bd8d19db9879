"""Request path to object key resolution.

Pure functions: no I/O, no state beyond their arguments.
"""

import posixpath

INDEX_DOCUMENT = "index.html"


def normalize_root(root_path: str) -> str:
    """Return *root_path* with exactly one leading and trailing ``/``.

    An empty root normalizes to ``"/"``.
    """
    stripped = root_path.strip("/")
    return f"/{stripped}/" if stripped else "/"


def resolve_key(request_path: str, root_path: str = "/", *, spa: bool = False) -> str:
    """Map a request path to the object key to fetch.

    The normalized root is removed once, at its first occurrence. In SPA
    mode, a final segment without a ``.`` is treated as a client-side route
    and resolved to that directory's ``index.html``::

        resolve_key("/static/css/app.css", "/static")   -> "css/app.css"
        resolve_key("/app/dashboard", "/app/", spa=True) -> "dashboard/index.html"
        resolve_key("/app/", "/app/", spa=True)          -> "index.html"

    A query string is never part of the key.
    """
    path, _, _ = request_path.partition("?")
    key = path.replace(normalize_root(root_path), "", 1)

    if not spa:
        return key

    base = posixpath.basename(key.rstrip("/")) if key.strip("/") else "."
    if base == ".":
        return INDEX_DOCUMENT
    if "." not in base:
        return f"{key.strip('/')}/{INDEX_DOCUMENT}"
    return key
