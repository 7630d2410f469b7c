"""Protocol definitions for the HTTP transport abstraction."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..models.config import ProxyConfig
from ..models.response import RenderedResponse


@dataclass
class PreparedRequest:
    """
    Wire-ready request produced by the request builder.

    Attributes:
        method: Final HTTP method (after any GET to POST switch)
        url: Absolute target URL
        headers: Final lowercased header set
        data: Encoded body (bytes or an aiohttp multipart payload), if any
        proxy: Proxy to route the request through
        stream: Return the body as a byte stream instead of a parsed value
        body_summary: Human-readable body description for the verbose trace
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None
    proxy: ProxyConfig | None = None
    stream: bool = False
    body_summary: Any = None

    def describe(self) -> dict[str, Any]:
        """Request description for the verbose trace (credentials omitted)."""
        description: dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
        }
        if self.proxy is not None:
            description["proxy"] = {"host": self.proxy.host, "port": self.proxy.port}
            if self.proxy.username:
                description["proxy"]["auth"] = {"username": self.proxy.username}
        if self.body_summary is not None:
            description["data"] = self.body_summary
        if self.stream:
            description["responseType"] = "stream"
        return description


class HttpTransport(Protocol):
    """
    Protocol for HTTP transports.

    This abstraction allows for:
    - In-memory fakes in tests
    - Swapping the aiohttp backend
    """

    def send(self, request: PreparedRequest) -> AbstractAsyncContextManager[RenderedResponse]:
        """
        Send a request and hold the response open for the caller.

        Args:
            request: The prepared request

        Returns:
            Async context manager yielding the response; a streamed body
            stays readable until the context exits

        Raises:
            NetworkError: On connection, DNS, TLS or timeout failures
            HttpStatusError: When the final status is not 2xx
        """
        ...
