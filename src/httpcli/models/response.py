"""Response model handed from the transport to the renderer."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

HeaderValue = Union[str, list[str]]


class ByteStream(Protocol):
    """Incrementally readable response body."""

    def iter_chunked(self, n: int) -> AsyncIterator[bytes]: ...


@dataclass
class RenderedResponse:
    """
    HTTP response as seen by the renderer.

    Exactly one of ``body`` (buffered mode) or ``stream`` (stream mode) is
    populated, depending on whether an output file was requested.

    Attributes:
        status: HTTP status code
        headers: Lowercased header names in received order; repeated
            headers map to a list, ``set-cookie`` always does
        body: Parsed JSON value or decoded text
        stream: Byte stream to copy into the output file
        reason: HTTP reason phrase
        url: Final URL after any redirects
    """

    status: int
    headers: dict[str, HeaderValue] = field(default_factory=dict)
    body: Any = None
    stream: ByteStream | None = None
    reason: str | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        if self.stream is not None and self.body is not None:
            raise ValueError("A response carries either a buffered body or a stream, not both")

    @property
    def streamed(self) -> bool:
        return self.stream is not None

    @property
    def set_cookies(self) -> list[str]:
        """All Set-Cookie header values, in received order."""
        value = self.headers.get("set-cookie")
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)
