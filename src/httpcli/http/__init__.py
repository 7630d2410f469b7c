"""HTTP transport for http-cli."""

from .client import AsyncHttpClient, ResponseStream, collect_headers
from .protocols import HttpTransport, PreparedRequest

__all__ = [
    "AsyncHttpClient",
    "HttpTransport",
    "PreparedRequest",
    "ResponseStream",
    "collect_headers",
]
