"""Assemble the wire-ready request from a RequestConfig."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import aiohttp

from .. import __version__
from ..cookies import CookieStore
from ..http.protocols import PreparedRequest
from ..models.config import BodyKind, HttpMethod, RequestBody, RequestConfig
from ..output.formatting import to_yaml

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Lowest-priority layer, sent with every request
TRANSPORT_DEFAULT_HEADERS = {
    "accept": "application/json, text/plain, */*",
    "user-agent": f"http-cli/{__version__}",
}

METHOD_DEFAULT_HEADERS: dict[HttpMethod, dict[str, str]] = {
    HttpMethod.GET: {},
    HttpMethod.HEAD: {},
    HttpMethod.DELETE: {},
    HttpMethod.POST: {"content-type": JSON_CONTENT_TYPE},
    HttpMethod.PUT: {"content-type": JSON_CONTENT_TYPE},
    HttpMethod.PATCH: {"content-type": JSON_CONTENT_TYPE},
}


def layer_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header layers, lowest priority first; names are lowercased."""
    merged: dict[str, str] = {}
    for layer in layers:
        for name, value in (layer or {}).items():
            merged[name.lower()] = value
    return merged


def resolve_method(config: RequestConfig) -> HttpMethod:
    """GET with a body is sent as POST."""
    if config.body is not None and config.method == HttpMethod.GET:
        logger.warning("Cannot send data with GET, POST will be used")
        return HttpMethod.POST
    return config.method


def _is_flat_mapping(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(item, (str, int, float, bool)) or item is None for item in value.values()
    )


def encode_body(body: RequestBody, content_type: str | None) -> tuple[Any, dict[str, str]]:
    """
    Encode a body for the transport.

    Returns:
        Tuple of (payload, body-derived headers)
    """
    if body.kind == BodyKind.MULTIPART:
        form = aiohttp.FormData()
        form.add_field(
            "file",
            body.content or b"",
            filename=body.filename,
            content_type=body.content_type,
        )
        payload = form()
        return payload, {"content-type": payload.content_type}

    media_type = content_type.split(";")[0].strip().lower() if content_type else None
    if media_type == FORM_CONTENT_TYPE and _is_flat_mapping(body.value):
        pairs = {key: "" if value is None else str(value) for key, value in body.value.items()}
        return urlencode(pairs).encode("utf-8"), {}

    payload = json.dumps(body.value, ensure_ascii=False, allow_nan=False)
    return payload.encode("utf-8"), {"content-type": JSON_CONTENT_TYPE}


def summarize_body(body: RequestBody | None) -> Any:
    """Body description for the verbose trace."""
    if body is None:
        return None
    if body.kind == BodyKind.MULTIPART:
        return {"file": body.filename, "contentType": body.content_type, "size": len(body.content or b"")}
    return body.value


async def build_request(
    config: RequestConfig,
    cookie_store: CookieStore | None = None,
) -> PreparedRequest:
    """
    Turn a normalized config into the request handed to the transport.

    Headers are layered from transport defaults, then per-method defaults,
    then body-derived headers, then the command-line headers (which
    include the --type content type and the cookie). A content-type that
    only came from defaults is dropped when there is no body.

    Args:
        config: Normalized request configuration
        cookie_store: Cookie file to read the Cookie header from

    Returns:
        PreparedRequest ready for the transport
    """
    method = resolve_method(config)
    logger.debug(f"Sending {method.value} request to {config.url}")

    cli_headers = dict(config.headers)
    if cookie_store is not None:
        cookie = await cookie_store.load()
        if cookie:
            cli_headers["cookie"] = cookie

    data: Any = None
    body_headers: dict[str, str] = {}
    if config.body is not None:
        data, body_headers = encode_body(config.body, cli_headers.get("content-type"))

    headers = layer_headers(
        TRANSPORT_DEFAULT_HEADERS,
        METHOD_DEFAULT_HEADERS[method],
        body_headers,
        cli_headers,
    )
    if config.body is None and "content-type" not in cli_headers:
        headers.pop("content-type", None)

    request = PreparedRequest(
        method=method.value,
        url=config.url,
        headers=headers,
        data=data,
        proxy=config.proxy,
        stream=config.output_file is not None,
        body_summary=summarize_body(config.body),
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"\nRequest headers:\n{to_yaml(headers)}")
        if config.proxy is not None:
            logger.debug(f"Proxy={json.dumps(request.describe()['proxy'])}")
        logger.debug(f"Request={json.dumps(request.describe(), default=str)}")

    return request
