"""Exception hierarchy for http-cli."""

from __future__ import annotations


class HttpCliError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(HttpCliError):
    """Raised when command-line input cannot be turned into a request."""


class DataFileError(ConfigError):
    """Raised when the file given with --datafile cannot be read."""


class TransportError(HttpCliError):
    """Raised when the request could not be completed."""


class NetworkError(TransportError):
    """Connection, DNS, TLS or timeout failure."""


class HttpStatusError(TransportError):
    """The server answered with a non-2xx status."""

    def __init__(self, status: int, reason: str | None = None, url: str | None = None) -> None:
        self.status = status
        self.reason = reason
        self.url = url
        super().__init__(f"Request failed with status code {status}")
