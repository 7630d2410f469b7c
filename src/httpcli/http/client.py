"""Async HTTP transport backed by aiohttp."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Any

import aiohttp
from charset_normalizer import from_bytes as detect_encoding
from multidict import CIMultiDictProxy

from ..exceptions import HttpStatusError, NetworkError
from ..models.response import HeaderValue, RenderedResponse
from .protocols import PreparedRequest

logger = logging.getLogger(__name__)

# Exceptions raised by aiohttp for network-level failures
NETWORK_EXCEPTIONS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ConnectionError,
)


def collect_headers(raw: CIMultiDictProxy[str]) -> dict[str, HeaderValue]:
    """
    Flatten aiohttp response headers.

    Names are lowercased and keep their received order. A header that
    appears more than once becomes a list; ``set-cookie`` is always a list.
    """
    headers: dict[str, HeaderValue] = {}
    for name in raw.keys():
        key = name.lower()
        if key in headers:
            continue
        values = raw.getall(name)
        if key == "set-cookie" or len(values) > 1:
            headers[key] = list(values)
        else:
            headers[key] = values[0]
    return headers


class ResponseStream:
    """Byte stream over an aiohttp body that reports failures as NetworkError."""

    def __init__(self, content: aiohttp.StreamReader) -> None:
        self._content = content

    async def iter_chunked(self, n: int) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._content.iter_chunked(n):
                yield chunk
        except NETWORK_EXCEPTIONS as e:
            raise NetworkError(f"Connection lost while reading response: {e}") from e


class AsyncHttpClient:
    """
    Async HTTP transport for a single request/response exchange.

    Features:
    - Buffered mode: body decoded and parsed as JSON when possible
    - Stream mode: body exposed as a chunked byte stream
    - Proxy support, including https targets behind plaintext proxies
    - Network failures and non-2xx answers mapped to TransportError

    Example:
        async with AsyncHttpClient() as client:
            async with client.send(request) as response:
                print(response.status, response.body)
    """

    def __init__(self, timeout: float | None = None) -> None:
        """
        Initialize the transport.

        Args:
            timeout: Total request timeout in seconds (aiohttp default if None)
        """
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        if self._timeout:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self._timeout))
        else:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _decode_content(self, content: bytes, content_type: str) -> str:
        """
        Decode content with intelligent encoding detection.

        Fallback chain:
        1. Content-Type header charset
        2. UTF-8
        3. charset-normalizer detection
        4. UTF-8 with replacement

        Args:
            content: Raw bytes content
            content_type: Content-Type header value

        Returns:
            Decoded string
        """
        encoding = None
        if content_type:
            for part in content_type.split(";"):
                part = part.strip()
                if part.lower().startswith("charset="):
                    encoding = part.split("=", 1)[1].strip().strip("\"'")
                    break

        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared encoding: {encoding}")

        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            pass

        result = detect_encoding(content)
        best_match = result.best() if result else None
        if best_match:
            logger.debug(f"Detected encoding: {best_match.encoding}")
            return str(best_match)

        return content.decode("utf-8", errors="replace")

    def _parse_body(self, content: bytes, content_type: str) -> Any:
        """Parse a buffered body as JSON, falling back to text."""
        if not content:
            return ""
        text = self._decode_content(content, content_type)
        try:
            return json.loads(text)
        except ValueError:
            return text

    def _request_kwargs(self, request: PreparedRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "headers": request.headers,
            "data": request.data,
            "allow_redirects": True,
        }
        proxy = request.proxy
        if proxy is not None:
            kwargs["proxy"] = proxy.url
            if proxy.username:
                kwargs["proxy_auth"] = aiohttp.BasicAuth(proxy.username, proxy.password or "")
            if proxy.plain_to_tls:
                logger.debug(f"Tunnelling {request.url} through plaintext proxy {proxy.url}")
        return kwargs

    @asynccontextmanager
    async def send(self, request: PreparedRequest) -> AsyncIterator[RenderedResponse]:
        """
        Send a request and yield the response.

        Args:
            request: Prepared request from the request builder

        Yields:
            RenderedResponse with a buffered body, or with a byte stream
            when ``request.stream`` is set

        Raises:
            NetworkError: On connection, DNS, TLS or timeout failures
            HttpStatusError: When the final status is not 2xx
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        try:
            response = await self._session.request(
                request.method,
                request.url,
                **self._request_kwargs(request),
            )
        except NETWORK_EXCEPTIONS as e:
            logger.debug(f"HTTP error for {request.method} {request.url}: {e!r}")
            raise NetworkError(str(e) or e.__class__.__name__) from e

        try:
            if not 200 <= response.status < 300:
                raise HttpStatusError(response.status, response.reason, str(response.url))

            headers = collect_headers(response.headers)

            if request.stream:
                rendered = RenderedResponse(
                    status=response.status,
                    headers=headers,
                    stream=ResponseStream(response.content),
                    reason=response.reason,
                    url=str(response.url),
                )
            else:
                try:
                    content = await response.read()
                except NETWORK_EXCEPTIONS as e:
                    raise NetworkError(f"Connection lost while reading response: {e}") from e
                rendered = RenderedResponse(
                    status=response.status,
                    headers=headers,
                    body=self._parse_body(content, response.headers.get("Content-Type", "")),
                    reason=response.reason,
                    url=str(response.url),
                )

            yield rendered
        finally:
            response.release()
