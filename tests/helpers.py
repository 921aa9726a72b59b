r"""Shared test helpers for transport and refresh hook tests.

This module contains common test infrastructure used across multiple
test files to reduce duplication and improve maintainability.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "RefreshCounter",
    "ScriptedTransport",
    "create_transport_response",
]

from typing import TYPE_CHECKING

from arefresh.transport import TransportResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from arefresh.core.composer import RequestDescriptor

TEST_URL = "https://x.test/posts"


def create_transport_response(
    status_code: int = 200, content: bytes = b"", headers: dict[str, str] | None = None
) -> TransportResponse:
    """Create a transport response for testing."""
    return TransportResponse(status_code=status_code, content=content, headers=headers or {})


class ScriptedTransport:
    """Transport returning scripted responses and recording every
    submitted descriptor.

    Items of ``script`` are returned in order; exceptions are raised.
    The last item is repeated once the script is exhausted.
    """

    def __init__(self, script: Iterable[TransportResponse | BaseException | None]) -> None:
        self.script = list(script)
        self.submitted: list[RequestDescriptor] = []

    @property
    def calls(self) -> int:
        return len(self.submitted)

    async def submit(self, descriptor: RequestDescriptor) -> TransportResponse:
        self.submitted.append(descriptor)
        index = min(len(self.submitted), len(self.script)) - 1
        item = self.script[index]
        if isinstance(item, BaseException):
            raise item
        return item


class RefreshCounter:
    """Async refresh hook returning a fixed result and counting calls.

    Args:
        result: The value returned by every call.
        on_refresh: Optional function run before returning, e.g. to
            install a new credential.
    """

    def __init__(self, result: bool = True, on_refresh: Callable[[], None] | None = None) -> None:
        self.result = result
        self.on_refresh = on_refresh
        self.calls = 0

    async def __call__(self) -> bool:
        self.calls += 1
        if self.on_refresh is not None:
            self.on_refresh()
        return self.result

