"""Turn raw command-line values into a RequestConfig."""

from __future__ import annotations

import asyncio
import json
import logging
import mimetypes
import re
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import unquote, urlparse

from pydantic import ValidationError

from ..exceptions import ConfigError, DataFileError
from ..models.config import BodyKind, HttpMethod, ProxyConfig, RequestBody, RequestConfig

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"
DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"

# Short --type tokens
CONTENT_TYPES = {
    "json": "application/json",
    "text": "text/plain",
    "html": "text/html",
    "xml": "application/xml",
    "csv": "text/csv",
    "yaml": "application/yaml",
    "form": "application/x-www-form-urlencoded",
    "urlencoded": "application/x-www-form-urlencoded",
    "binary": "application/octet-stream",
}

DEFAULT_PORTS = {"http": 80, "https": 443, "socks5": 1080}

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_MIME_RE = re.compile(r"^[\w.+-]+/[\w.+-]+(\s*;.*)?$")


def parse_header(raw: str) -> tuple[str, str]:
    """
    Parse one ``-H`` value.

    Examples:
        >>> parse_header("accept=text/plain")
        ('accept', 'text/plain')
        >>> parse_header("x-empty")
        ('x-empty', '')
    """
    name, _, value = raw.partition("=")
    return name.strip(), value.strip()


def parse_headers(raws: Iterable[str] | None) -> dict[str, str]:
    """Accumulate ``-H`` values; a repeated name keeps its last value."""
    headers: dict[str, str] = {}
    for raw in raws or ():
        name, value = parse_header(raw)
        if not name:
            logger.warning(f"Ignoring header without a name: {raw!r}")
            continue
        headers[name.lower()] = value
    return headers


def properties_to_dict(text: str) -> dict[str, str]:
    """
    Parse properties-style ``key=value`` lines into a flat mapping.

    A backslash at the end of a line joins it to the next one with a
    space. Lines without ``=`` map the whole line to an empty string.

    Examples:
        >>> properties_to_dict("name = alice\\nadmin")
        {'name': 'alice', 'admin': ''}
    """
    result: dict[str, str] = {}
    for line in text.replace("\\\n", " ").split("\n"):
        line = line.strip()
        if not line:
            continue
        index = line.find("=")
        if index <= 0:
            result[line] = ""
        else:
            result[line[:index].strip()] = line[index + 1 :].strip()
    return result


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not valid JSON")


def parse_data(data: str | None) -> RequestBody | None:
    """
    Parse ``--data``: JSON when valid, properties-style otherwise.

    NaN and Infinity are not JSON and fall through to the properties parse.
    A JSON ``null`` counts as no data.

    Returns:
        RequestBody, or None when there is no data
    """
    if not data:
        return None
    try:
        value = json.loads(data, parse_constant=_reject_constant)
    except ValueError:
        logger.debug("Data is not valid JSON, reading it as properties")
        return RequestBody(kind=BodyKind.PROPERTIES, value=properties_to_dict(data))
    if value is None:
        return None
    return RequestBody(kind=BodyKind.JSON, value=value)


def resolve_content_type(token: str) -> str:
    """
    Resolve a ``--type`` token to a MIME type.

    Tries the short-name table, then the file-extension registry, then
    accepts a full MIME type as given. Anything else falls back to
    ``application/x-www-form-urlencoded``.
    """
    key = token.strip().lower()
    if key in CONTENT_TYPES:
        return CONTENT_TYPES[key]

    guessed = mimetypes.types_map.get("." + key.lstrip("."))
    if guessed:
        return guessed

    if _MIME_RE.match(token.strip()):
        return token.strip()

    logger.debug(f"Unknown content type {token!r}, using {DEFAULT_CONTENT_TYPE}")
    return DEFAULT_CONTENT_TYPE


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless the URL already starts with http(s)://."""
    url = url.strip()
    if _SCHEME_RE.match(url):
        return url
    return "https://" + url


def parse_proxy(proxy_url: str, target_url: str) -> ProxyConfig:
    """
    Parse ``http(s)://[username:password@]proxyhost:proxyport``.

    Args:
        proxy_url: Proxy URL from ``--proxy``
        target_url: Normalized request URL, used to detect an https
            target behind a plaintext proxy

    Raises:
        ConfigError: If the proxy URL has no host or an invalid port
    """
    if "://" not in proxy_url:
        proxy_url = "http://" + proxy_url

    parsed = urlparse(proxy_url)
    scheme = parsed.scheme.lower()
    try:
        port = parsed.port
    except ValueError as err:
        raise ConfigError(f"Invalid proxy port in {proxy_url!r}") from err

    if not parsed.hostname:
        raise ConfigError(f"Invalid proxy URL {proxy_url!r}: missing host")

    target_scheme = urlparse(target_url).scheme.lower()

    return ProxyConfig(
        scheme=scheme,
        host=parsed.hostname,
        port=port or DEFAULT_PORTS.get(scheme, 80),
        username=unquote(parsed.username) if parsed.username else None,
        password=unquote(parsed.password) if parsed.password is not None else None,
        plain_to_tls=scheme == "http" and target_scheme == "https",
    )


def guess_file_content_type(path: Path) -> str:
    content_type, encoding = mimetypes.guess_type(path.name)
    if content_type is None or encoding is not None:
        return DEFAULT_FILE_CONTENT_TYPE
    return content_type


async def load_datafile(path: Path) -> RequestBody:
    """
    Read ``--datafile`` into a multipart body with a single ``file`` field.

    Raises:
        DataFileError: If the file is missing or unreadable
    """
    path = Path(path)
    try:
        content = await asyncio.to_thread(path.read_bytes)
    except FileNotFoundError as err:
        raise DataFileError(f"Data file not found: {path}") from err
    except OSError as err:
        raise DataFileError(f"Cannot read data file {path}: {err}") from err

    return RequestBody(
        kind=BodyKind.MULTIPART,
        filename=path.name,
        content=content,
        content_type=guess_file_content_type(path),
    )


async def normalize(
    method: str,
    url: str,
    *,
    headers: Iterable[str] | None = None,
    data: str | None = None,
    datafile: Path | None = None,
    content_type: str | None = None,
    proxy: str | None = None,
    cookie_file: Path | None = None,
    output_file: Path | None = None,
) -> RequestConfig:
    """
    Build a RequestConfig from raw flag values.

    A data file takes precedence over ``data``. The ``content_type``
    token only applies to a body given with ``data``.

    Raises:
        ConfigError: On an unknown method or an invalid proxy URL
        DataFileError: If the data file cannot be read
    """
    try:
        http_method = HttpMethod(method.upper())
    except ValueError as err:
        raise ConfigError(f"Unsupported method: {method}") from err

    target = normalize_url(url)
    header_map = parse_headers(headers)

    body: RequestBody | None
    if datafile is not None:
        body = await load_datafile(datafile)
    else:
        body = parse_data(data)
        if body is not None and content_type:
            header_map["content-type"] = resolve_content_type(content_type)

    try:
        return RequestConfig(
            method=http_method,
            url=target,
            headers=header_map,
            body=body,
            content_type_hint=content_type,
            proxy=parse_proxy(proxy, target) if proxy else None,
            cookie_file=cookie_file,
            output_file=output_file,
        )
    except ValidationError as err:
        raise ConfigError(str(err)) from err
