r"""Exception hierarchy for authenticated HTTP requests.

Every failure surfaced to the caller is an ``HttpRequestError``. Each
subclass carries a ``kind`` class attribute so callers can dispatch on
the failure category without ``isinstance`` chains.
"""

from __future__ import annotations

__all__ = [
    "FailureKind",
    "ForbiddenError",
    "HttpRequestError",
    "InvalidResponseError",
    "InvalidURLError",
    "NotFoundError",
    "RequestCancelledError",
    "SerializationError",
    "ServerError",
    "TooManyRetriesError",
    "TransportError",
    "UnauthorizedError",
    "UnknownStatusError",
]

from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from arefresh.transport import TransportResponse


class FailureKind(str, Enum):
    r"""Category of a failed request chain."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"
    INVALID_RESPONSE = "invalid_response"
    INVALID_URL = "invalid_url"
    TOO_MANY_RETRIES = "too_many_retries"
    TRANSPORT = "transport"
    SERIALIZATION = "serialization"


class HttpRequestError(Exception):
    r"""Base exception for a request that did not produce a payload.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A human-readable description of the failure.
        status_code: The HTTP status code, if a response was received.
        response: The raw transport response, if one was received.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from arefresh.exceptions import FailureKind, NotFoundError
        >>> exc = NotFoundError(
        ...     method="GET", url="https://x.test/posts", message="missing", status_code=404
        ... )
        >>> exc.kind is FailureKind.NOT_FOUND
        True
        >>> exc.status_code
        404

        ```
    """

    kind: ClassVar[FailureKind] = FailureKind.UNKNOWN

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: TransportResponse | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{type(self).__qualname__}(kind={self.kind.value!r}, method={self.method!r}, "
            f"url={self.url!r}, status_code={self.status_code!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "method": self.method,
            "url": self.url,
            "message": self.message,
            "status_code": self.status_code,
        }


class InvalidURLError(HttpRequestError):
    r"""The target URL is not a structurally valid http(s) URL."""

    kind = FailureKind.INVALID_URL


class SerializationError(HttpRequestError):
    r"""A request or response body could not be (de)serialized."""

    kind = FailureKind.SERIALIZATION


class InvalidResponseError(HttpRequestError):
    r"""The transport returned something that is not an HTTP response."""

    kind = FailureKind.INVALID_RESPONSE


class UnauthorizedError(HttpRequestError):
    r"""The server answered 401 and no refresh hook is configured."""

    kind = FailureKind.UNAUTHORIZED


class ForbiddenError(HttpRequestError):
    kind = FailureKind.FORBIDDEN


class NotFoundError(HttpRequestError):
    kind = FailureKind.NOT_FOUND


class ServerError(HttpRequestError):
    kind = FailureKind.SERVER_ERROR


class UnknownStatusError(HttpRequestError):
    r"""The server answered with a status outside the known ranges."""

    kind = FailureKind.UNKNOWN


class TooManyRetriesError(HttpRequestError):
    r"""The unauthorized-recovery chain gave up.

    Raised when the attempt bound is reached or when the refresh hook
    reports, raises, or times out without obtaining a new credential.
    """

    kind = FailureKind.TOO_MANY_RETRIES


class TransportError(HttpRequestError):
    r"""The transport failed before a response was received."""

    kind = FailureKind.TRANSPORT


class RequestCancelledError(TransportError):
    r"""The caller cancelled the request chain while it was in flight."""
