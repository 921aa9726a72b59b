r"""Classification of raw transport responses.

Status codes map to exactly one ``ResponseKind``. The mapping is total:
every integer falls in one branch.
"""

from __future__ import annotations

__all__ = ["ResponseKind", "classify_response", "classify_status", "error_for_kind"]

from enum import Enum
from typing import TYPE_CHECKING, Any

from arefresh.exceptions import (
    ForbiddenError,
    InvalidResponseError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnknownStatusError,
)

if TYPE_CHECKING:
    from arefresh.exceptions import HttpRequestError
    from arefresh.transport import TransportResponse


class ResponseKind(str, Enum):
    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"
    INVALID_RESPONSE = "invalid_response"


_ERRORS: dict[ResponseKind, tuple[type[HttpRequestError], str]] = {
    ResponseKind.UNAUTHORIZED: (
        UnauthorizedError,
        "Authentication is required to access this resource",
    ),
    ResponseKind.FORBIDDEN: (
        ForbiddenError,
        "User does not have proper permission to access this resource",
    ),
    ResponseKind.NOT_FOUND: (NotFoundError, "The requested resource does not exist"),
    ResponseKind.SERVER_ERROR: (ServerError, "The server returned an error"),
    ResponseKind.UNKNOWN: (UnknownStatusError, "The server returned an unknown error"),
    ResponseKind.INVALID_RESPONSE: (
        InvalidResponseError,
        "The server returned with a bad response",
    ),
}


def classify_status(status_code: int) -> ResponseKind:
    r"""Map an HTTP status code to its outcome kind.

    Args:
        status_code: The HTTP status code.

    Returns:
        The outcome kind.

    Example:
        ```pycon
        >>> from arefresh.core.classifier import classify_status
        >>> classify_status(204).value
        'success'
        >>> classify_status(401).value
        'unauthorized'
        >>> classify_status(418).value
        'unknown'

        ```
    """
    if 200 <= status_code <= 299:  # noqa: PLR2004
        return ResponseKind.SUCCESS
    if status_code == 401:  # noqa: PLR2004
        return ResponseKind.UNAUTHORIZED
    if status_code == 403:  # noqa: PLR2004
        return ResponseKind.FORBIDDEN
    if status_code == 404:  # noqa: PLR2004
        return ResponseKind.NOT_FOUND
    if 500 <= status_code <= 599:  # noqa: PLR2004
        return ResponseKind.SERVER_ERROR
    return ResponseKind.UNKNOWN


def classify_response(response: Any) -> ResponseKind:
    r"""Classify a transport response.

    Anything without an integer ``status_code`` (including ``None``) is
    ``INVALID_RESPONSE``; the status code is not inspected.

    Args:
        response: The object returned by the transport.

    Returns:
        The outcome kind.
    """
    status_code = getattr(response, "status_code", None)
    if response is None or isinstance(status_code, bool) or not isinstance(status_code, int):
        return ResponseKind.INVALID_RESPONSE
    return classify_status(status_code)


def error_for_kind(
    kind: ResponseKind,
    *,
    method: str,
    url: str,
    response: TransportResponse | None = None,
) -> HttpRequestError:
    r"""Build the exception reported for a non-success kind.

    Args:
        kind: The outcome kind. Must not be ``SUCCESS``.
        method: The HTTP method of the request.
        url: The URL of the request.
        response: The transport response, if one was received.

    Returns:
        The matching ``HttpRequestError`` subclass instance.

    Raises:
        ValueError: If ``kind`` is ``SUCCESS``.
    """
    if kind is ResponseKind.SUCCESS:
        msg = "error_for_kind() requires a failure kind"
        raise ValueError(msg)
    error_cls, description = _ERRORS[kind]
    status_code = getattr(response, "status_code", None)
    if kind is ResponseKind.INVALID_RESPONSE:
        status_code = None
    suffix = f" (status {status_code})" if status_code is not None else ""
    return error_cls(
        method=method,
        url=url,
        message=f"{method} request to {url} failed: {description}{suffix}",
        status_code=status_code,
        response=response if kind is not ResponseKind.INVALID_RESPONSE else None,
    )
