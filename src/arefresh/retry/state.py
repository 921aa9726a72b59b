r"""Per-chain retry state.

A ``RetryState`` lives for one logical request chain. It moves through
``IDLE -> DISPATCHED -> CLASSIFYING -> {COMPLETED | REFRESHING ->
DISPATCHED}`` and counts dispatch attempts starting at 1.
"""

from __future__ import annotations

__all__ = ["RetryPhase", "RetryState"]

from dataclasses import dataclass
from enum import Enum

from arefresh.core.config import DEFAULT_MAX_RETRY_ATTEMPTS


class RetryPhase(str, Enum):
    IDLE = "idle"
    DISPATCHED = "dispatched"
    CLASSIFYING = "classifying"
    REFRESHING = "refreshing"
    COMPLETED = "completed"


_TRANSITIONS: dict[RetryPhase, frozenset[RetryPhase]] = {
    RetryPhase.IDLE: frozenset({RetryPhase.DISPATCHED}),
    # a transport error or cancellation ends the chain before classification
    RetryPhase.DISPATCHED: frozenset({RetryPhase.CLASSIFYING, RetryPhase.COMPLETED}),
    RetryPhase.CLASSIFYING: frozenset({RetryPhase.COMPLETED, RetryPhase.REFRESHING}),
    RetryPhase.REFRESHING: frozenset({RetryPhase.DISPATCHED, RetryPhase.COMPLETED}),
    RetryPhase.COMPLETED: frozenset(),
}


@dataclass
class RetryState:
    r"""Attempt counter and phase of one request chain.

    Attributes:
        max_attempts: Maximum number of dispatch attempts.
        attempt: Current attempt number (1-indexed).
        phase: Current phase of the chain.
        refresh_count: Number of successful refreshes so far.

    Example:
        ```pycon
        >>> from arefresh.retry.state import RetryPhase, RetryState
        >>> state = RetryState(max_attempts=2)
        >>> state.dispatch()
        >>> state.classify()
        >>> state.exhausted
        False
        >>> state.refresh()
        >>> state.dispatch()
        >>> state.attempt
        2
        >>> state.exhausted
        True

        ```
    """

    max_attempts: int = DEFAULT_MAX_RETRY_ATTEMPTS
    attempt: int = 1
    phase: RetryPhase = RetryPhase.IDLE
    refresh_count: int = 0

    @property
    def exhausted(self) -> bool:
        r"""Indicate if no further attempt is allowed."""
        return self.attempt >= self.max_attempts

    @property
    def done(self) -> bool:
        return self.phase is RetryPhase.COMPLETED

    def _move(self, target: RetryPhase) -> None:
        if target not in _TRANSITIONS[self.phase]:
            msg = f"Invalid retry state transition: {self.phase.value} -> {target.value}"
            raise RuntimeError(msg)
        self.phase = target

    def dispatch(self) -> None:
        r"""Enter ``DISPATCHED``; a re-dispatch after a refresh counts as a
        new attempt."""
        retrying = self.phase is RetryPhase.REFRESHING
        self._move(RetryPhase.DISPATCHED)
        if retrying:
            self.attempt += 1
            self.refresh_count += 1

    def classify(self) -> None:
        self._move(RetryPhase.CLASSIFYING)

    def refresh(self) -> None:
        self._move(RetryPhase.REFRESHING)

    def complete(self) -> None:
        self._move(RetryPhase.COMPLETED)
