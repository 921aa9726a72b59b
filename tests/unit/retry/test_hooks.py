from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

import pytest

from arefresh.retry.hooks import callback_refresh_hook

if TYPE_CHECKING:
    from collections.abc import Callable

##########################################
#     Tests for callback_refresh_hook    #
##########################################


@pytest.mark.asyncio
@pytest.mark.parametrize("refreshed", [True, False])
async def test_callback_refresh_hook_sync_completion(refreshed: bool) -> None:
    """Test a hook that completes before returning."""
    refresh = callback_refresh_hook(lambda complete: complete(refreshed))
    assert await refresh() is refreshed


@pytest.mark.asyncio
async def test_callback_refresh_hook_coerces_to_bool() -> None:
    """Test that the completion value is coerced to bool."""
    refresh = callback_refresh_hook(lambda complete: complete(1))
    assert await refresh() is True


@pytest.mark.asyncio
async def test_callback_refresh_hook_completion_from_thread() -> None:
    """Test a hook completed from another thread."""

    def hook(complete: Callable[[bool], None]) -> None:
        threading.Timer(0.01, complete, args=(True,)).start()

    refresh = callback_refresh_hook(hook)
    assert await asyncio.wait_for(refresh(), timeout=5) is True


@pytest.mark.asyncio
async def test_callback_refresh_hook_first_completion_wins() -> None:
    """Test that only the first completion is taken into account."""

    def hook(complete: Callable[[bool], None]) -> None:
        complete(False)
        complete(True)

    refresh = callback_refresh_hook(hook)
    assert await refresh() is False


@pytest.mark.asyncio
async def test_callback_refresh_hook_reusable() -> None:
    """Test that each call waits for its own completion."""
    results = iter([True, False])
    refresh = callback_refresh_hook(lambda complete: complete(next(results)))
    assert await refresh() is True
    assert await refresh() is False


@pytest.mark.asyncio
async def test_callback_refresh_hook_exception_propagates() -> None:
    """Test that an exception raised by the hook propagates."""

    def hook(complete: Callable[[bool], None]) -> None:
        msg = "boom"
        raise RuntimeError(msg)

    refresh = callback_refresh_hook(hook)
    with pytest.raises(RuntimeError, match=r"boom"):
        await refresh()
