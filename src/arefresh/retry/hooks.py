r"""Refresh hook types and adapters.

A refresh hook is an ``async`` callable with no arguments that tries to
obtain a new credential and returns ``True`` on success. Hooks written
in completion-callback style can be adapted with
``callback_refresh_hook``.
"""

from __future__ import annotations

__all__ = ["CallbackRefreshHook", "RefreshHook", "callback_refresh_hook"]

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)

RefreshHook = Callable[[], Awaitable[bool]]
CallbackRefreshHook = Callable[[Callable[[bool], None]], None]


def callback_refresh_hook(hook: CallbackRefreshHook) -> RefreshHook:
    r"""Adapt a completion-callback hook into an awaitable refresh hook.

    The wrapped ``hook`` receives a ``complete(refreshed)`` function. It
    may call it from any thread; only the first call is taken into
    account.

    Args:
        hook: The callback-style hook.

    Returns:
        An ``async`` refresh hook.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arefresh.retry.hooks import callback_refresh_hook
        >>> refresh = callback_refresh_hook(lambda complete: complete(True))
        >>> asyncio.run(refresh())
        True

        ```
    """

    async def refresh() -> bool:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[bool] = loop.create_future()

        def resolve(refreshed: bool) -> None:
            if future.done():
                logger.debug("Ignoring repeated refresh completion")
                return
            future.set_result(bool(refreshed))

        def complete(refreshed: bool) -> None:
            try:
                loop.call_soon_threadsafe(resolve, refreshed)
            except RuntimeError:
                logger.debug("Refresh completed after its event loop was closed")

        hook(complete)
        return await future

    return refresh
