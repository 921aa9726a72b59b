r"""Contains the function that composes and runs one authenticated
request chain."""

from __future__ import annotations

__all__ = ["request_async"]

from typing import TYPE_CHECKING, Any

from arefresh.core.composer import compose_request
from arefresh.core.config import ClientConfig
from arefresh.retry import CallbackConfig, RefreshRetryExecutor, RetryConfig

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable

    from arefresh.core.composer import HeaderItems, HttpMethod, QueryItems
    from arefresh.retry.hooks import RefreshHook
    from arefresh.tokens import Credential
    from arefresh.transport import Transport, TransportResponse


async def request_async(
    url: str,
    method: HttpMethod | str,
    *,
    transport: Transport,
    config: ClientConfig | None = None,
    credential: Credential | None = None,
    refresh_hook: RefreshHook | None = None,
    credential_provider: Callable[[], Credential | None] | None = None,
    body: Any = None,
    params: QueryItems | None = None,
    headers: HeaderItems | None = None,
    cancel_event: asyncio.Event | None = None,
) -> TransportResponse:
    """Compose an authenticated request and run it with automatic
    credential refresh.

    Composition failures (``InvalidURLError``, ``SerializationError``)
    are raised before anything is dispatched. On a 401 response the
    refresh hook is awaited and, if it reports success, the same request
    is dispatched again with the credential returned by
    ``credential_provider``, up to ``config.max_retry_attempts`` attempts
    in total.

    Args:
        url: The URL to send the request to.
        method: The HTTP method (GET, POST, PUT, DELETE, PATCH).
        transport: The transport executing the request.
        config: Optional client configuration. Defaults to ``ClientConfig()``.
        credential: The credential to attach to the first attempt.
        refresh_hook: Optional async hook invoked on 401. It must return
            ``True`` once a new credential is available.
        credential_provider: Optional callable returning the credential
            to attach after a refresh. If ``None``, ``credential`` is
            reused.
        body: Optional body for POST, PUT and PATCH.
        params: Optional query items.
        headers: Optional extra headers.
        cancel_event: Optional event cancelling the chain when set.

    Returns:
        The successful transport response.

    Raises:
        HttpRequestError: If the chain terminates with a failure.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from arefresh import HttpxTransport, request_async
        >>> async def example():
        ...     async with HttpxTransport() as transport:
        ...         response = await request_async(
        ...             "https://api.example.com/posts", "GET", transport=transport
        ...         )
        ...     return response.status_code
        ...
        >>> asyncio.run(example())  # doctest: +SKIP

        ```
    """
    config = config if config is not None else ClientConfig()
    descriptor = compose_request(
        url,
        method,
        body=body,
        params=params,
        headers=headers,
        credential=credential,
        cache_policy=config.cache_policy,
        timeout=config.timeout,
    )

    retry_config = RetryConfig(
        max_retry_attempts=config.max_retry_attempts,
        refresh_timeout=config.refresh_timeout,
        debug=config.debug,
    )
    callback_config = CallbackConfig(
        on_request=config.on_request,
        on_refresh=config.on_refresh,
        on_success=config.on_success,
        on_failure=config.on_failure,
    )

    executor = RefreshRetryExecutor(
        retry_config,
        callback_config,
        transport,
        refresh_hook=refresh_hook,
        credential_provider=credential_provider,
    )
    return await executor.execute(descriptor, cancel_event=cancel_event)
