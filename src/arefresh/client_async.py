r"""Asynchronous context manager client for authenticated HTTP requests.

This module provides an async context manager-based client that holds
the active credential, the refresh hook and a shared configuration, and
runs every request through the unauthorized-recovery protocol. The
AsyncAuthClient manages the lifecycle of its transport when it creates
one.
"""

from __future__ import annotations

__all__ = ["AsyncAuthClient"]

import logging
from typing import TYPE_CHECKING, Any

from arefresh.core.config import ClientConfig
from arefresh.core.serialization import decode_body
from arefresh.exceptions import HttpRequestError
from arefresh.outcome import Failure, Success
from arefresh.request_async import request_async
from arefresh.transport import HttpxTransport

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

    from arefresh.core.composer import HeaderItems, HttpMethod, QueryItems
    from arefresh.outcome import Outcome
    from arefresh.retry.hooks import RefreshHook
    from arefresh.tokens import Credential
    from arefresh.transport import Transport, TransportResponse

logger: logging.Logger = logging.getLogger(__name__)


class AsyncAuthClient:
    r"""Asynchronous context manager for authenticated HTTP requests.

    Args:
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
        credential: Optional initial credential.
        refresh_hook: Optional async hook invoked when the server answers
            401. It should obtain a new credential, install it with
            ``update_credential`` and return ``True``, or return
            ``False`` if it could not.
        transport: Optional transport. If ``None``, an ``HttpxTransport``
            is created when entering the context and closed on exit.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arefresh import AsyncAuthClient, HeaderCredential
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncAuthClient(credential=HeaderCredential("abc")) as client:
        ...         payload = await client.get("https://api.example.com/posts")
        ...         created = await client.post(
        ...             "https://api.example.com/posts", body={"title": "hello"}
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```

    Note:
        All HTTP method calls (get, post, put, delete, patch, request)
        accept per-request overrides of the client's configuration.
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        credential: Credential | None = None,
        refresh_hook: RefreshHook | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config if config is not None else ClientConfig()
        self._credential = credential
        self._refresh_hook = refresh_hook
        self._transport = transport
        self._owned_transport: HttpxTransport | None = None
        self._entered = False

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def credential(self) -> Credential | None:
        r"""The credential attached to newly composed requests."""
        return self._credential

    def update_credential(self, credential: Credential | None) -> None:
        r"""Replace the active credential.

        Requests composed afterwards, and requests re-dispatched after a
        refresh, carry the new credential. In-flight attempts keep the
        snapshot they were dispatched with.

        Args:
            credential: The new credential, or ``None`` to stop
                authenticating.
        """
        logger.debug(f"Updating active credential to {type(credential).__name__}")
        self._credential = credential

    @property
    def refresh_hook(self) -> RefreshHook | None:
        return self._refresh_hook

    def set_refresh_hook(self, refresh_hook: RefreshHook | None) -> None:
        self._refresh_hook = refresh_hook

    async def __aenter__(self) -> Self:
        """Enter the async context manager and open the transport if
        the client owns it.

        Returns:
            The AsyncAuthClient instance for making requests.
        """
        if self._transport is None:
            self._owned_transport = HttpxTransport()
            await self._owned_transport.__aenter__()
        self._entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the owned transport.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._owned_transport is not None:
            await self._owned_transport.aclose()
            self._owned_transport = None
        self._entered = False

    def _ensure_transport(self) -> Transport:
        """Ensure the transport is available for use.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        transport = self._transport if self._transport is not None else self._owned_transport
        if not self._entered or transport is None:
            msg = "AsyncAuthClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return transport

    async def send(
        self,
        method: HttpMethod | str,
        url: str,
        *,
        body: Any = None,
        params: QueryItems | None = None,
        headers: HeaderItems | None = None,
        cancel_event: asyncio.Event | None = None,
        **overrides: Any,
    ) -> TransportResponse:
        r"""Run one request chain and return the raw transport response.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH).
            url: The URL to send the request to.
            body: Optional body for POST, PUT and PATCH.
            params: Optional query items, sent before a query credential.
            headers: Optional extra headers, applied after the credential
                header.
            cancel_event: Optional event cancelling the chain when set.
            **overrides: Per-request overrides of ``ClientConfig`` fields
                (e.g. ``timeout``, ``max_retry_attempts``).

        Returns:
            The successful transport response.

        Raises:
            RuntimeError: If called outside of a context manager.
            HttpRequestError: If the chain terminates with a failure.
        """
        transport = self._ensure_transport()
        return await request_async(
            url,
            method,
            transport=transport,
            config=self._config.merge(**overrides),
            credential=self._credential,
            refresh_hook=self._refresh_hook,
            credential_provider=lambda: self._credential,
            body=body,
            params=params,
            headers=headers,
            cancel_event=cancel_event,
        )

    async def request(self, method: HttpMethod | str, url: str, **kwargs: Any) -> bytes:
        r"""Send a request and return the response payload.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH).
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments (see send() method).

        Returns:
            The response body.

        Raises:
            HttpRequestError: If the chain terminates with a failure.
        """
        response = await self.send(method, url, **kwargs)
        return response.content

    async def request_json(
        self,
        method: HttpMethod | str,
        url: str,
        *,
        into: Callable[..., Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        r"""Send a request and decode the JSON response payload.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH).
            url: The URL to send the request to.
            into: Optional factory called with the decoded object as
                keyword arguments.
            **kwargs: Additional keyword arguments (see send() method).

        Raises:
            SerializationError: If the payload is not valid JSON or does
                not fit ``into``.
        """
        content = await self.request(method, url, **kwargs)
        method_name = method.value if hasattr(method, "value") else str(method).upper()
        return decode_body(content, into, method=method_name, url=url)

    async def request_outcome(self, method: HttpMethod | str, url: str, **kwargs: Any) -> Outcome:
        r"""Send a request and return a ``Success`` or ``Failure`` instead
        of raising.

        Example:
            ```pycon
            >>> import asyncio
            >>> from arefresh import AsyncAuthClient
            >>> async def main():  # doctest: +SKIP
            ...     async with AsyncAuthClient() as client:
            ...         outcome = await client.request_outcome("GET", "https://api.example.com")
            ...     return outcome.ok
            ...
            >>> asyncio.run(main())  # doctest: +SKIP

            ```
        """
        try:
            response = await self.send(method, url, **kwargs)
        except HttpRequestError as error:
            return Failure(error)
        return Success(content=response.content, status_code=response.status_code)

    async def get(self, url: str, **kwargs: Any) -> bytes:
        r"""Send an HTTP GET request. See request()."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> bytes:
        r"""Send an HTTP POST request. See request()."""
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> bytes:
        r"""Send an HTTP PUT request. See request()."""
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> bytes:
        r"""Send an HTTP DELETE request. See request()."""
        return await self.request("DELETE", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> bytes:
        r"""Send an HTTP PATCH request. See request()."""
        return await self.request("PATCH", url, **kwargs)
