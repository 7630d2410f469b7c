"""http-cli request and response models."""

from .config import (
    BodyKind,
    DisplayConfig,
    HttpMethod,
    ProxyConfig,
    RequestBody,
    RequestConfig,
    default_config_home,
)
from .response import ByteStream, HeaderValue, RenderedResponse

__all__ = [
    # Config
    "BodyKind",
    "DisplayConfig",
    "HttpMethod",
    "ProxyConfig",
    "RequestBody",
    "RequestConfig",
    "default_config_home",
    # Response
    "ByteStream",
    "HeaderValue",
    "RenderedResponse",
]
