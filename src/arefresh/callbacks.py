r"""Callback types and data structures for observability.

This module provides callback support for the arefresh library, enabling
users to hook into the request lifecycle for logging, metrics and
alerting.

The callback system provides four lifecycle hooks:
- on_request: Called before each dispatch attempt
- on_refresh: Called before the refresh hook is invoked after a 401
- on_success: Called when a request chain succeeds
- on_failure: Called when a request chain terminates with an error

Example:
    ```pycon
    >>> from arefresh.callbacks import RefreshInfo
    >>> from arefresh.core import ClientConfig
    >>> def log_refresh(info: RefreshInfo):
    ...     print(f"Refreshing after attempt {info.attempt}/{info.max_retry_attempts}")
    ...
    >>> config = ClientConfig(on_refresh=log_refresh)

    ```
"""

from __future__ import annotations

__all__ = [
    "FailureInfo",
    "RefreshInfo",
    "RequestInfo",
    "ResponseInfo",
    "invoke_on_failure",
    "invoke_on_refresh",
    "invoke_on_request",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from arefresh.exceptions import HttpRequestError
    from arefresh.transport import TransportResponse


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The current attempt number (1-indexed).
        max_retry_attempts: Maximum number of attempts configured.
    """

    url: str
    method: str
    attempt: int
    max_retry_attempts: int


@dataclass
class RefreshInfo:
    """Information passed to on_refresh callback.

    Attributes:
        url: The URL that answered 401.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The attempt that was rejected (1-indexed).
        max_retry_attempts: Maximum number of attempts configured.
    """

    url: str
    method: str
    attempt: int
    max_retry_attempts: int


@dataclass
class ResponseInfo:
    """Information passed to on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The attempt number that succeeded (1-indexed).
        max_retry_attempts: Maximum number of attempts configured.
        response: The successful transport response.
        total_time: Total time spent on the chain, refreshes included (seconds).
    """

    url: str
    method: str
    attempt: int
    max_retry_attempts: int
    response: TransportResponse
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The final attempt number (1-indexed).
        max_retry_attempts: Maximum number of attempts configured.
        error: The error the chain terminated with.
        status_code: The final HTTP status code (if any).
        total_time: Total time spent on the chain, refreshes included (seconds).
    """

    url: str
    method: str
    attempt: int
    max_retry_attempts: int
    error: HttpRequestError
    status_code: int | None
    total_time: float


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retry_attempts: int,
) -> None:
    """Invoke on_request callback if provided.

    Args:
        on_request: Optional callback to invoke before each attempt.
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The current attempt number (1-indexed).
        max_retry_attempts: Maximum number of attempts.
    """
    if on_request is not None:
        on_request(
            RequestInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_retry_attempts=max_retry_attempts,
            )
        )


def invoke_on_refresh(
    on_refresh: Callable[[RefreshInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retry_attempts: int,
) -> None:
    """Invoke on_refresh callback if provided."""
    if on_refresh is not None:
        on_refresh(
            RefreshInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_retry_attempts=max_retry_attempts,
            )
        )


def invoke_on_success(
    on_success: Callable[[ResponseInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retry_attempts: int,
    response: TransportResponse,
    start_time: float,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when the chain succeeds.
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The attempt number that succeeded (1-indexed).
        max_retry_attempts: Maximum number of attempts.
        response: The successful transport response.
        start_time: The timestamp when the chain started.
    """
    if on_success is not None:
        on_success(
            ResponseInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_retry_attempts=max_retry_attempts,
                response=response,
                total_time=time.time() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retry_attempts: int,
    error: HttpRequestError,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when the chain fails.
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The final attempt number (1-indexed).
        max_retry_attempts: Maximum number of attempts.
        error: The error the chain terminated with.
        start_time: The timestamp when the chain started.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_retry_attempts=max_retry_attempts,
                error=error,
                status_code=error.status_code,
                total_time=time.time() - start_time,
            )
        )
