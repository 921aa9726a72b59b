r"""Unauthorized-recovery retry coordinator.

This module provides the RefreshRetryExecutor class that dispatches a
composed request through a transport, classifies the outcome and, when
the server answers 401, invokes the refresh hook and re-dispatches the
same request a bounded number of times.
"""

from __future__ import annotations

__all__ = ["RefreshRetryExecutor"]

import asyncio
import contextlib
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from arefresh.core.classifier import ResponseKind, classify_response, error_for_kind
from arefresh.exceptions import (
    HttpRequestError,
    RequestCancelledError,
    TooManyRetriesError,
    TransportError,
)
from arefresh.retry.manager import CallbackManager
from arefresh.retry.state import RetryState
from arefresh.utils.tracing import trace_request, trace_response

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from arefresh.core.composer import RequestDescriptor
    from arefresh.retry.config import CallbackConfig, RetryConfig
    from arefresh.retry.hooks import RefreshHook
    from arefresh.tokens import Credential
    from arefresh.transport import Transport, TransportResponse

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class RefreshRetryExecutor:
    """Executes requests with automatic credential refresh on 401.

    Each call to ``execute`` is one logical request chain with its own
    ``RetryState``, so concurrent chains never share an attempt counter.

    The chain ends with:
    - 2xx: the transport response is returned
    - 403, 404, 5xx, other statuses, invalid responses, transport errors:
      the matching ``HttpRequestError`` is raised immediately
    - a transport call exceeding ``descriptor.timeout`` or raising any
      other exception: ``TransportError`` chained to the cause
    - 401 without refresh hook: ``UnauthorizedError``
    - 401 with the attempt bound reached, or a refresh that reports
      ``False``, raises or times out: ``TooManyRetriesError``. This also
      applies when the hook raises an ``HttpRequestError`` of its own,
      which is then available as ``cause``.

    The attempt bound is checked before the refresh hook runs, so with
    ``max_retry_attempts=1`` the hook is never invoked.

    Attributes:
        config: Retry configuration.
        transport: The transport used to dispatch requests.
        refresh_hook: Optional async hook returning ``True`` once a new
            credential is in place.
        credential_provider: Optional callable returning the credential
            to bind to a re-dispatched request.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arefresh.core.composer import compose_request
        >>> from arefresh.retry import CallbackConfig, RefreshRetryExecutor, RetryConfig
        >>> from arefresh.transport import TransportResponse
        >>> class StaticTransport:
        ...     async def submit(self, descriptor):
        ...         return TransportResponse(status_code=200, content=b"{}")
        ...
        >>> executor = RefreshRetryExecutor(RetryConfig(), CallbackConfig(), StaticTransport())
        >>> response = asyncio.run(executor.execute(compose_request("https://x.test", "GET")))
        >>> response.content
        b'{}'

        ```
    """

    def __init__(
        self,
        retry_config: RetryConfig,
        callback_config: CallbackConfig,
        transport: Transport,
        refresh_hook: RefreshHook | None = None,
        credential_provider: Callable[[], Credential | None] | None = None,
    ) -> None:
        self.config = retry_config
        self.transport = transport
        self.refresh_hook = refresh_hook
        self.credential_provider = credential_provider
        self.callbacks: CallbackManager = CallbackManager(callback_config)

    async def execute(
        self,
        descriptor: RequestDescriptor,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> TransportResponse:
        """Run one request chain to completion.

        Args:
            descriptor: The composed request. It is reused unchanged for
                every attempt, except for the credential snapshot which
                is re-read from ``credential_provider`` after a refresh.
            cancel_event: Optional event; setting it cancels the
                in-flight transport call or refresh hook.

        Returns:
            The successful transport response.

        Raises:
            HttpRequestError: The typed failure the chain ended with.
                A failing refresh hook always ends the chain with
                ``TooManyRetriesError``, whose ``cause`` is the hook's
                exception, even when that exception is itself an
                ``HttpRequestError``.
        """
        state = RetryState(max_attempts=self.config.max_retry_attempts)
        start_time = time.time()
        try:
            return await self._run(descriptor, state, start_time, cancel_event)
        except HttpRequestError as error:
            if not state.done:
                state.complete()
            self.callbacks.on_failure(
                str(descriptor.base_url),
                descriptor.method.value,
                state.attempt,
                state.max_attempts,
                error,
                start_time,
            )
            raise

    async def _run(
        self,
        descriptor: RequestDescriptor,
        state: RetryState,
        start_time: float,
        cancel_event: asyncio.Event | None,
    ) -> TransportResponse:
        method = descriptor.method.value
        url = str(descriptor.base_url)

        while True:
            state.dispatch()
            self.callbacks.on_request(url, method, state.attempt, state.max_attempts)
            if self.config.debug:
                trace_request(descriptor, state.attempt)
            response = await self._cancellable(
                lambda: self._dispatch(descriptor),
                cancel_event,
                method=method,
                url=url,
                stage="dispatch",
            )

            state.classify()
            if self.config.debug:
                trace_response(descriptor, response, state.attempt)
            kind = classify_response(response)

            if kind is ResponseKind.SUCCESS:
                state.complete()
                self.callbacks.on_success(
                    url, method, state.attempt, state.max_attempts, response, start_time
                )
                return response

            if kind is not ResponseKind.UNAUTHORIZED or self.refresh_hook is None:
                state.complete()
                logger.debug(
                    f"{method} request to {url} failed on attempt "
                    f"{state.attempt}/{state.max_attempts}: {kind.value}"
                )
                raise error_for_kind(kind, method=method, url=url, response=response)

            if state.exhausted:
                state.complete()
                raise TooManyRetriesError(
                    method=method,
                    url=url,
                    message=(
                        f"{method} request to {url} was still unauthorized after "
                        f"{state.attempt} attempts"
                    ),
                    status_code=response.status_code,
                    response=response,
                )

            state.refresh()
            self.callbacks.on_refresh(url, method, state.attempt, state.max_attempts)
            logger.debug(
                f"{method} request to {url} unauthorized on attempt "
                f"{state.attempt}/{state.max_attempts}, refreshing credential"
            )
            await self._refresh(state, response, cancel_event, method=method, url=url)
            if self.credential_provider is not None:
                descriptor = descriptor.with_credential(self.credential_provider())

    async def _dispatch(self, descriptor: RequestDescriptor) -> TransportResponse:
        r"""Submit one attempt, bounded by ``descriptor.timeout``.

        Errors raised by the transport that are not already an
        ``HttpRequestError`` are re-raised as ``TransportError``.
        """
        method = descriptor.method.value
        url = str(descriptor.base_url)
        try:
            return await asyncio.wait_for(
                self.transport.submit(descriptor), timeout=descriptor.timeout
            )
        except HttpRequestError:
            raise
        except asyncio.TimeoutError as exc:
            logger.debug(f"{method} request to {url} timed out after {descriptor.timeout}s")
            raise TransportError(
                method=method,
                url=url,
                message=f"{method} request to {url} timed out after {descriptor.timeout}s",
                cause=exc,
            ) from exc
        except Exception as exc:
            error_type = type(exc).__name__
            logger.debug(f"{method} request to {url} encountered {error_type}: {exc}")
            raise TransportError(
                method=method,
                url=url,
                message=f"{method} request to {url} failed: {error_type}: {exc}",
                cause=exc,
            ) from exc

    async def _refresh(
        self,
        state: RetryState,
        response: TransportResponse,
        cancel_event: asyncio.Event | None,
        *,
        method: str,
        url: str,
    ) -> None:
        r"""Run the refresh hook; return only if it obtained a new
        credential."""
        refresh_hook = self.refresh_hook
        timeout = self.config.refresh_timeout
        reason: str | None = None
        cause: BaseException | None = None
        try:
            refreshed = await asyncio.wait_for(
                self._cancellable(
                    refresh_hook, cancel_event, method=method, url=url, stage="refresh"
                ),
                timeout=timeout,
            )
        except RequestCancelledError:
            raise
        except asyncio.TimeoutError as exc:
            reason = f"refresh hook did not complete within {timeout}s"
            cause = exc
        except Exception as exc:  # noqa: BLE001
            reason = f"refresh hook raised {type(exc).__name__}: {exc}"
            cause = exc
        else:
            if refreshed:
                return
            reason = "refresh hook could not obtain a new credential"

        state.complete()
        logger.debug(f"{method} request to {url}: {reason}")
        error = TooManyRetriesError(
            method=method,
            url=url,
            message=f"{method} request to {url} failed after {state.attempt} attempts: {reason}",
            status_code=response.status_code,
            response=response,
            cause=cause,
        )
        if cause is not None:
            raise error from cause
        raise error

    async def _cancellable(
        self,
        factory: Callable[[], Awaitable[T]],
        cancel_event: asyncio.Event | None,
        *,
        method: str,
        url: str,
        stage: str,
    ) -> T:
        r"""Await ``factory()`` unless ``cancel_event`` is set first."""
        if cancel_event is None:
            return await factory()
        if cancel_event.is_set():
            raise self._cancelled(method, url, stage)

        task: asyncio.Future[Any] = asyncio.ensure_future(factory())
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
        if task in done:
            return task.result()
        # drain the abandoned operation
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task
        raise self._cancelled(method, url, stage)

    @staticmethod
    def _cancelled(method: str, url: str, stage: str) -> RequestCancelledError:
        logger.debug(f"{method} request to {url} cancelled during {stage}")
        return RequestCancelledError(
            method=method,
            url=url,
            message=f"{method} request to {url} was cancelled during {stage}",
        )
