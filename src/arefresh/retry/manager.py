r"""Callback manager for orchestrating request lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points of a request chain.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

from arefresh.callbacks import (
    invoke_on_failure,
    invoke_on_refresh,
    invoke_on_request,
    invoke_on_success,
)

if TYPE_CHECKING:
    from arefresh.exceptions import HttpRequestError
    from arefresh.retry.config import CallbackConfig
    from arefresh.transport import TransportResponse


class CallbackManager:
    """Manages callback invocations during a request chain.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig) -> None:
        """Initialize callback manager.

        Args:
            callbacks: Callback configuration.
        """
        self.callbacks = callbacks

    def on_request(self, url: str, method: str, attempt: int, max_retry_attempts: int) -> None:
        """Invoke on_request callback.

        Args:
            url: The URL being requested.
            method: The HTTP method.
            attempt: Current attempt number (1-indexed).
            max_retry_attempts: Maximum number of attempts.
        """
        invoke_on_request(
            self.callbacks.on_request,
            url=url,
            method=method,
            attempt=attempt,
            max_retry_attempts=max_retry_attempts,
        )

    def on_refresh(self, url: str, method: str, attempt: int, max_retry_attempts: int) -> None:
        """Invoke on_refresh callback.

        Args:
            url: The URL that answered 401.
            method: The HTTP method.
            attempt: The rejected attempt number (1-indexed).
            max_retry_attempts: Maximum number of attempts.
        """
        invoke_on_refresh(
            self.callbacks.on_refresh,
            url=url,
            method=method,
            attempt=attempt,
            max_retry_attempts=max_retry_attempts,
        )

    def on_success(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retry_attempts: int,
        response: TransportResponse,
        start_time: float,
    ) -> None:
        """Invoke on_success callback.

        Args:
            url: The URL that was requested.
            method: The HTTP method.
            attempt: Attempt number that succeeded (1-indexed).
            max_retry_attempts: Maximum number of attempts.
            response: The successful response.
            start_time: Timestamp when the chain started.
        """
        invoke_on_success(
            self.callbacks.on_success,
            url=url,
            method=method,
            attempt=attempt,
            max_retry_attempts=max_retry_attempts,
            response=response,
            start_time=start_time,
        )

    def on_failure(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retry_attempts: int,
        error: HttpRequestError,
        start_time: float,
    ) -> None:
        """Invoke on_failure callback.

        Args:
            url: The URL that was requested.
            method: The HTTP method.
            attempt: Final attempt number (1-indexed).
            max_retry_attempts: Maximum number of attempts.
            error: The error that terminated the chain.
            start_time: Timestamp when the chain started.
        """
        invoke_on_failure(
            self.callbacks.on_failure,
            url=url,
            method=method,
            attempt=attempt,
            max_retry_attempts=max_retry_attempts,
            error=error,
            start_time=start_time,
        )
