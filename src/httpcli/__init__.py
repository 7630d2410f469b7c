"""
httpcli - Send a single HTTP request from the command line and render the response.

Usage:
    from httpcli import AsyncHttpClient, DisplayConfig, ResponseRenderer
    from httpcli.core import RequestExchange, normalize

    config = await normalize("post", "example.com/users", data="name=alice")

    async with AsyncHttpClient() as transport:
        exchange = RequestExchange(config, transport, ResponseRenderer(console, style))
        exit_code = await exchange.run()
"""

__version__ = "1.0.0"

from .cookies import SENTINEL_COOKIE, CookieStore
from .exceptions import (
    ConfigError,
    DataFileError,
    HttpCliError,
    HttpStatusError,
    NetworkError,
    TransportError,
)
from .http import AsyncHttpClient, HttpTransport, PreparedRequest
from .models.config import (
    BodyKind,
    DisplayConfig,
    HttpMethod,
    ProxyConfig,
    RequestBody,
    RequestConfig,
    default_config_home,
)
from .models.response import RenderedResponse
from .output import OutputStyle, ResponseRenderer

__all__ = [
    "__version__",
    # Config
    "BodyKind",
    "DisplayConfig",
    "HttpMethod",
    "ProxyConfig",
    "RequestBody",
    "RequestConfig",
    "default_config_home",
    # Transport
    "AsyncHttpClient",
    "HttpTransport",
    "PreparedRequest",
    "RenderedResponse",
    # Output
    "OutputStyle",
    "ResponseRenderer",
    # Cookies
    "CookieStore",
    "SENTINEL_COOKIE",
    # Errors
    "ConfigError",
    "DataFileError",
    "HttpCliError",
    "HttpStatusError",
    "NetworkError",
    "TransportError",
]
