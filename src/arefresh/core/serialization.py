r"""JSON encoding and decoding of request and response bodies.

The client does not interpret payload schemas. Bodies are plain JSON
values, dataclass instances, or already-encoded ``bytes``.
"""

from __future__ import annotations

__all__ = ["JSON_CONTENT_TYPE", "decode_body", "encode_body", "try_decode_body"]

import dataclasses
import json
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from arefresh.exceptions import SerializationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


def _default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)


def encode_body(body: Any, *, method: str = "", url: str = "") -> bytes:
    r"""Encode a request body to bytes.

    Args:
        body: The body to encode. ``bytes`` are returned unchanged,
            dataclass instances are converted with ``dataclasses.asdict``
            and anything else must be JSON serializable.
        method: The HTTP method, used in error messages.
        url: The target URL, used in error messages.

    Returns:
        The encoded body.

    Raises:
        SerializationError: If the body cannot be encoded.

    Example:
        ```pycon
        >>> from arefresh.core.serialization import encode_body
        >>> encode_body({"id": "123"})
        b'{"id": "123"}'

        ```
    """
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    try:
        return json.dumps(body, default=_default).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            method=method,
            url=url,
            message=f"{method} request body for {url} could not be encoded: {exc}",
            cause=exc,
        ) from exc


def decode_body(
    content: bytes,
    into: Callable[..., T] | None = None,
    *,
    method: str = "",
    url: str = "",
) -> T | Any:
    r"""Decode a JSON response body.

    Args:
        content: The raw response bytes.
        into: Optional factory called with the decoded mapping as
            keyword arguments (e.g. a dataclass).
        method: The HTTP method, used in error messages.
        url: The requested URL, used in error messages.

    Returns:
        The decoded JSON value, or ``into(**value)`` if ``into`` is given.

    Raises:
        SerializationError: If the content is not valid JSON or does not
            fit ``into``.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from arefresh.core.serialization import decode_body
        >>> @dataclass
        ... class Post:
        ...     id: str
        ...
        >>> decode_body(b'{"id": "123"}', Post)
        Post(id='123')

        ```
    """
    try:
        data = json.loads(content)
        if into is None:
            return data
        if not isinstance(data, dict):
            msg = f"expected a JSON object, got {type(data).__name__}"
            raise TypeError(msg)
        return into(**data)
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            method=method,
            url=url,
            message=f"{method} response body from {url} could not be decoded: {exc}",
            cause=exc,
        ) from exc


def try_decode_body(content: bytes, into: Callable[..., T] | None = None) -> T | Any | None:
    r"""Decode a JSON response body, returning ``None`` on failure.

    Example:
        ```pycon
        >>> from arefresh.core.serialization import try_decode_body
        >>> try_decode_body(b"not json") is None
        True

        ```
    """
    try:
        return decode_body(content, into)
    except SerializationError as exc:
        logger.debug(f"Could not decode body: {exc}")
        return None
