r"""Parameter validation utilities for the authenticated client.

This module provides validation functions for client parameters to
ensure they meet the required constraints before being used by the
request composer and the retry coordinator.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for a single attempt.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from arefresh.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retry_attempts: int,
    refresh_timeout: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retry_attempts: Maximum number of dispatch attempts in one
            request chain, including the first one. Must be >= 1. A value
            of 1 means an unauthorized response is never retried.
        refresh_timeout: Maximum seconds to wait for the refresh hook.
            Must be > 0 if provided.

    Raises:
        ValueError: If max_retry_attempts is < 1 or refresh_timeout is
            non-positive.

    Example:
        ```pycon
        >>> from arefresh.core import validate_retry_params
        >>> validate_retry_params(max_retry_attempts=3)
        >>> validate_retry_params(max_retry_attempts=1, refresh_timeout=5.0)
        >>> validate_retry_params(max_retry_attempts=0)  # doctest: +SKIP

        ```
    """
    if max_retry_attempts < 1:
        msg = f"max_retry_attempts must be >= 1, got {max_retry_attempts}"
        raise ValueError(msg)
    if refresh_timeout is not None and refresh_timeout <= 0:
        msg = f"refresh_timeout must be > 0, got {refresh_timeout}"
        raise ValueError(msg)
