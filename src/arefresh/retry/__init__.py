r"""Retry package implementing the unauthorized-recovery protocol.

Public API:
    - RetryConfig: Configuration for retry behavior
    - CallbackConfig: Configuration for callbacks
    - RetryState, RetryPhase: Per-chain attempt counter and phase
    - CallbackManager: Manager for callback invocations
    - RefreshRetryExecutor: Asynchronous retry coordinator
    - RefreshHook, callback_refresh_hook: Refresh hook contract and adapter
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "CallbackManager",
    "CallbackRefreshHook",
    "RefreshHook",
    "RefreshRetryExecutor",
    "RetryConfig",
    "RetryPhase",
    "RetryState",
    "callback_refresh_hook",
]

from arefresh.retry.config import CallbackConfig, RetryConfig
from arefresh.retry.coordinator import RefreshRetryExecutor
from arefresh.retry.hooks import CallbackRefreshHook, RefreshHook, callback_refresh_hook
from arefresh.retry.manager import CallbackManager
from arefresh.retry.state import RetryPhase, RetryState
