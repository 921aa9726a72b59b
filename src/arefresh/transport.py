r"""Transport adapter boundary.

The retry coordinator only needs one asynchronous operation from the
transport: submit a ``RequestDescriptor`` and get back the status code
and raw bytes, or a ``TransportError``. ``HttpxTransport`` implements
this contract on top of ``httpx.AsyncClient``, which owns sockets, TLS
and connection pooling.
"""

from __future__ import annotations

__all__ = ["HttpxTransport", "Transport", "TransportResponse"]

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from arefresh.exceptions import TransportError

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from arefresh.core.composer import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    r"""Raw outcome of one dispatch attempt.

    Attributes:
        status_code: The HTTP status code.
        content: The response body.
        headers: The response headers.
    """

    status_code: int
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    r"""Asynchronous HTTP execution primitive."""

    async def submit(self, descriptor: RequestDescriptor) -> TransportResponse:
        r"""Execute one request.

        Raises:
            TransportError: If no response could be obtained.
        """


class HttpxTransport:
    r"""Transport backed by an ``httpx.AsyncClient``.

    Args:
        client: Optional client to use. If ``None``, a client is created
            when the transport is entered and closed when it exits.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from arefresh.core.composer import compose_request
        >>> from arefresh.transport import HttpxTransport
        >>> async def main():
        ...     mock = httpx.MockTransport(lambda request: httpx.Response(200, content=b"ok"))
        ...     async with httpx.AsyncClient(transport=mock) as client:
        ...         transport = HttpxTransport(client)
        ...         response = await transport.submit(compose_request("https://x.test", "GET"))
        ...     return response.content
        ...
        >>> asyncio.run(main())
        b'ok'

        ```
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> Self:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "HttpxTransport must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._client

    async def submit(self, descriptor: RequestDescriptor) -> TransportResponse:
        client = self._ensure_client()
        method = descriptor.method.value
        url = str(descriptor.url)
        try:
            response = await client.request(
                method,
                url,
                headers=list(descriptor.header_items),
                content=descriptor.body,
                timeout=descriptor.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.debug(f"{method} request to {url} timed out after {descriptor.timeout}s")
            raise TransportError(
                method=method,
                url=url,
                message=f"{method} request to {url} timed out after {descriptor.timeout}s",
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            error_type = type(exc).__name__
            logger.debug(f"{method} request to {url} encountered {error_type}: {exc}")
            raise TransportError(
                method=method,
                url=url,
                message=f"{method} request to {url} failed: {exc}",
                cause=exc,
            ) from exc
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )
