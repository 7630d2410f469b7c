"""Request normalization, building and the exchange runner."""

from .builder import (
    METHOD_DEFAULT_HEADERS,
    TRANSPORT_DEFAULT_HEADERS,
    build_request,
    encode_body,
    layer_headers,
    resolve_method,
)
from .exchange import RequestExchange
from .normalizer import (
    load_datafile,
    normalize,
    normalize_url,
    parse_data,
    parse_header,
    parse_headers,
    parse_proxy,
    properties_to_dict,
    resolve_content_type,
)

__all__ = [
    # Normalizer
    "load_datafile",
    "normalize",
    "normalize_url",
    "parse_data",
    "parse_header",
    "parse_headers",
    "parse_proxy",
    "properties_to_dict",
    "resolve_content_type",
    # Builder
    "METHOD_DEFAULT_HEADERS",
    "TRANSPORT_DEFAULT_HEADERS",
    "build_request",
    "encode_body",
    "layer_headers",
    "resolve_method",
    # Exchange
    "RequestExchange",
]
