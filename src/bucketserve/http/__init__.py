"""HTTP primitives: headers, request, response."""

from bucketserve.http.headers import Headers
from bucketserve.http.request import Request
from bucketserve.http.response import Response

__all__ = ["Headers", "Request", "Response"]
