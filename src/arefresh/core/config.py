r"""Configuration dataclass and defaults for AsyncAuthClient.

This module provides configuration constants, the cache policy
directive applied to every request, and a dataclass-based configuration
object shared by the client and the retry coordinator.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CACHE_POLICY",
    "DEFAULT_MAX_RETRY_ATTEMPTS",
    "DEFAULT_TIMEOUT",
    "CachePolicy",
    "ClientConfig",
]

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from arefresh.core.validation import validate_retry_params, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable

    from arefresh.callbacks import FailureInfo, RefreshInfo, RequestInfo, ResponseInfo


class CachePolicy(str, Enum):
    r"""Cache directive sent with every request of a client.

    Each policy maps to the request headers that express it over HTTP.
    """

    USE_PROTOCOL = "use_protocol"
    RELOAD_IGNORING_CACHE = "reload_ignoring_cache"
    RETURN_CACHE_ELSE_LOAD = "return_cache_else_load"
    RETURN_CACHE_DONT_LOAD = "return_cache_dont_load"

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        r"""The request headers implementing this policy.

        Example:
            ```pycon
            >>> from arefresh.core.config import CachePolicy
            >>> CachePolicy.RETURN_CACHE_DONT_LOAD.headers
            (('Cache-Control', 'only-if-cached'),)
            >>> CachePolicy.USE_PROTOCOL.headers
            ()

            ```
        """
        return _CACHE_HEADERS[self]


_CACHE_HEADERS: dict[CachePolicy, tuple[tuple[str, str], ...]] = {
    CachePolicy.USE_PROTOCOL: (),
    CachePolicy.RELOAD_IGNORING_CACHE: (("Cache-Control", "no-cache"), ("Pragma", "no-cache")),
    CachePolicy.RETURN_CACHE_ELSE_LOAD: (("Cache-Control", "max-stale"),),
    CachePolicy.RETURN_CACHE_DONT_LOAD: (("Cache-Control", "only-if-cached"),),
}


# Default timeout in seconds for a single attempt
DEFAULT_TIMEOUT = 30.0

# Default number of dispatch attempts in one request chain
# (the first attempt plus the retries after a successful refresh)
DEFAULT_MAX_RETRY_ATTEMPTS = 3

# Ignore local and remote caches unless told otherwise
DEFAULT_CACHE_POLICY = CachePolicy.RELOAD_IGNORING_CACHE


@dataclass
class ClientConfig:
    """Configuration for AsyncAuthClient behavior.

    Args:
        cache_policy: Cache directive applied to every request.
        timeout: Maximum seconds to wait for a single attempt. Must be > 0.
        max_retry_attempts: Maximum number of dispatch attempts per
            request chain, including the first one. Must be >= 1.
        debug: If ``True``, outgoing requests and incoming payloads are
            traced on the ``arefresh`` logger at DEBUG level.
        refresh_timeout: Optional maximum seconds to wait for the refresh
            hook. Must be > 0 if provided. ``None`` waits indefinitely.
        on_request: Optional callback called before each dispatch attempt.
        on_refresh: Optional callback called before the refresh hook runs.
        on_success: Optional callback called when a chain succeeds.
        on_failure: Optional callback called when a chain fails.

    Example:
        ```pycon
        >>> from arefresh.core.config import ClientConfig
        >>> config = ClientConfig()  # Use defaults
        >>> config.max_retry_attempts
        3
        >>> config = ClientConfig(max_retry_attempts=5)
        >>> merged = config.merge(max_retry_attempts=1)  # Override specific parameters
        >>> merged.max_retry_attempts
        1
        >>> config.max_retry_attempts  # Original unchanged
        5

        ```
    """

    cache_policy: CachePolicy = DEFAULT_CACHE_POLICY
    timeout: float = DEFAULT_TIMEOUT
    max_retry_attempts: int = DEFAULT_MAX_RETRY_ATTEMPTS
    debug: bool = False
    refresh_timeout: float | None = None
    on_request: Callable[[RequestInfo], None] | None = None
    on_refresh: Callable[[RefreshInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_timeout(self.timeout)
        validate_retry_params(
            max_retry_attempts=self.max_retry_attempts,
            refresh_timeout=self.refresh_timeout,
        )

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.

        Example:
            ```pycon
            >>> from arefresh.core.config import ClientConfig
            >>> config = ClientConfig(timeout=10.0)
            >>> config.merge(timeout=2.0, debug=None).timeout
            2.0
            >>> config.timeout
            10.0

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.

        Example:
            ```pycon
            >>> from arefresh.core.config import ClientConfig
            >>> params = ClientConfig(max_retry_attempts=5).to_dict()
            >>> params["max_retry_attempts"]
            5

            ```
        """
        return {
            "cache_policy": self.cache_policy,
            "timeout": self.timeout,
            "max_retry_attempts": self.max_retry_attempts,
            "debug": self.debug,
            "refresh_timeout": self.refresh_timeout,
            "on_request": self.on_request,
            "on_refresh": self.on_refresh,
            "on_success": self.on_success,
            "on_failure": self.on_failure,
        }
