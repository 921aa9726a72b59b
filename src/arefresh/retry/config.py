r"""Configuration dataclasses for the retry coordinator.

This module provides configuration objects for the unauthorized-recovery
protocol and its lifecycle callbacks.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "RetryConfig"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

from arefresh.core.config import DEFAULT_MAX_RETRY_ATTEMPTS

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_retry_attempts: Maximum number of dispatch attempts per chain.
        refresh_timeout: Optional maximum seconds to wait for the refresh hook.
        debug: Whether to trace requests and responses.
    """

    max_retry_attempts: int = DEFAULT_MAX_RETRY_ATTEMPTS
    refresh_timeout: float | None = None
    debug: bool = False


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_request: Optional callback invoked before each dispatch attempt.
        on_refresh: Optional callback invoked before the refresh hook runs.
        on_success: Optional callback invoked when the chain succeeds.
        on_failure: Optional callback invoked when the chain fails.
    """

    on_request: Callable | None = None
    on_refresh: Callable | None = None
    on_success: Callable | None = None
    on_failure: Callable | None = None
