r"""Composition of transport-ready request descriptors.

``compose_request`` turns a URL string, an HTTP method, an optional body
and optional query items into an immutable ``RequestDescriptor``. The
active credential is captured as a snapshot on the descriptor; its
header or query contribution is applied when the descriptor is read, so
the retry coordinator can re-bind a refreshed credential without
touching anything else.
"""

from __future__ import annotations

__all__ = ["BODY_METHODS", "HttpMethod", "RequestDescriptor", "compose_request"]

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import httpx

from arefresh.core.config import DEFAULT_CACHE_POLICY, DEFAULT_TIMEOUT, CachePolicy
from arefresh.core.serialization import JSON_CONTENT_TYPE, encode_body
from arefresh.core.validation import validate_timeout
from arefresh.exceptions import InvalidURLError
from arefresh.tokens import HeaderCredential, QueryCredential

if TYPE_CHECKING:
    from arefresh.tokens import Credential

logger: logging.Logger = logging.getLogger(__name__)

QueryItems = Mapping[str, Any] | Iterable[tuple[str, Any]]
HeaderItems = Mapping[str, str] | Iterable[tuple[str, str]]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


# Only these methods carry a request body
BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})


@dataclass(frozen=True)
class RequestDescriptor:
    r"""Fully composed description of one HTTP request.

    Attributes:
        base_url: The parsed target URL, without the composed query items.
        method: The HTTP method.
        body: The encoded body. Always ``None`` for GET and DELETE.
        params: The caller-supplied query items, in order.
        headers: The caller-supplied headers, in order.
        credential: The credential snapshot taken at composition time.
        cache_policy: The cache directive of the request.
        timeout: Maximum seconds to wait for this request.
    """

    base_url: httpx.URL
    method: HttpMethod
    body: bytes | None = None
    params: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    credential: Credential | None = None
    cache_policy: CachePolicy = DEFAULT_CACHE_POLICY
    timeout: float = DEFAULT_TIMEOUT

    @property
    def query_items(self) -> tuple[tuple[str, str], ...]:
        r"""Caller query items followed by the credential's query item."""
        _, query_item = _contribution(self.credential)
        if query_item is None:
            return self.params
        return (*self.params, query_item)

    @property
    def query_string(self) -> str:
        r"""The encoded query, after any query already on ``base_url``."""
        existing = self.base_url.query.decode("ascii")
        composed = urlencode(self.query_items)
        return "&".join(part for part in (existing, composed) if part)

    @property
    def url(self) -> httpx.URL:
        query = self.query_string
        if not query:
            return self.base_url
        return self.base_url.copy_with(query=query.encode("ascii"))

    @property
    def header_items(self) -> tuple[tuple[str, str], ...]:
        r"""Headers sent on the wire.

        Cache headers come first, then the JSON content type when a body
        is present, then the credential header. Caller headers are
        applied last and replace any earlier header with the same name.
        """
        merged: dict[str, tuple[str, str]] = {}
        items: list[tuple[str, str]] = list(self.cache_policy.headers)
        if self.body is not None:
            items.append(("Content-Type", JSON_CONTENT_TYPE))
        header, _ = _contribution(self.credential)
        if header is not None:
            items.append(header)
        items.extend(self.headers)
        for name, value in items:
            merged[name.lower()] = (name, value)
        return tuple(merged.values())

    def with_credential(self, credential: Credential | None) -> RequestDescriptor:
        r"""Return the same request bound to another credential
        snapshot."""
        return dataclasses.replace(self, credential=credential)


def _contribution(
    credential: Credential | None,
) -> tuple[tuple[str, str] | None, tuple[str, str] | None]:
    r"""Return the ``(header, query_item)`` a credential contributes."""
    if credential is None:
        return None, None
    if isinstance(credential, HeaderCredential):
        return credential.header, None
    if isinstance(credential, QueryCredential):
        return None, credential.query_item
    msg = f"Unsupported credential type: {type(credential).__name__}"
    raise TypeError(msg)


def _parse_url(url: str, method: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(
            method=method, url=str(url), message=f"URL is malformed: {url!r}", cause=exc
        ) from exc
    if parsed.scheme not in {"http", "https"} or not parsed.host:
        raise InvalidURLError(method=method, url=url, message=f"URL is malformed: {url!r}")
    return parsed


def _normalize_items(items: QueryItems | HeaderItems | None) -> tuple[tuple[str, str], ...]:
    if items is None:
        return ()
    if isinstance(items, Mapping):
        items = items.items()
    return tuple((str(key), str(value)) for key, value in items)


def compose_request(
    url: str,
    method: HttpMethod | str,
    *,
    body: Any = None,
    params: QueryItems | None = None,
    headers: HeaderItems | None = None,
    credential: Credential | None = None,
    cache_policy: CachePolicy = DEFAULT_CACHE_POLICY,
    timeout: float = DEFAULT_TIMEOUT,
) -> RequestDescriptor:
    r"""Compose a transport-ready request descriptor.

    Args:
        url: The target URL. Must be an absolute http(s) URL.
        method: The HTTP method.
        body: Optional body. Encoded for POST, PUT and PATCH, ignored for
            GET and DELETE.
        params: Optional query items, sent before the credential's
            query item.
        headers: Optional extra headers. They override the credential
            header.
        credential: The active credential, if any.
        cache_policy: The cache directive of the request.
        timeout: Maximum seconds to wait for the request. Must be > 0.

    Returns:
        The composed descriptor.

    Raises:
        InvalidURLError: If ``url`` is not a valid http(s) URL.
        SerializationError: If ``body`` cannot be encoded.
        ValueError: If ``method`` is not supported or ``timeout`` is
            non-positive.

    Example:
        ```pycon
        >>> from arefresh.core.composer import compose_request
        >>> from arefresh.tokens import QueryCredential
        >>> descriptor = compose_request(
        ...     "https://x.test/posts",
        ...     "GET",
        ...     params=[("other", "value")],
        ...     credential=QueryCredential("apiKey", "apiValue"),
        ... )
        >>> descriptor.query_string
        'other=value&apiKey=apiValue'

        ```
    """
    method = HttpMethod(method.upper() if isinstance(method, str) else method)
    validate_timeout(timeout)
    base_url = _parse_url(url, method.value)

    encoded: bytes | None = None
    if body is not None:
        if method in BODY_METHODS:
            encoded = encode_body(body, method=method.value, url=url)
        else:
            logger.debug(f"{method.value} request to {url} ignores the supplied body")

    return RequestDescriptor(
        base_url=base_url,
        method=method,
        body=encoded,
        params=_normalize_items(params),
        headers=_normalize_items(headers),
        credential=credential,
        cache_policy=cache_policy,
        timeout=timeout,
    )
