r"""arefresh - Authenticated async HTTP client with credential refresh.

This package provides an asynchronous HTTP client core that attaches a
credential to outgoing requests, classifies responses into typed
outcomes, and recovers from expired credentials by invoking a
caller-supplied refresh hook and re-dispatching the original request a
bounded number of times. Built on top of the modern httpx library.

Key Features:
    - Header (``Authorization``) and query-parameter credentials
    - Credential expiry checks with configurable tolerance windows
    - Typed failures for 401, 403, 404, 5xx, unknown statuses,
      invalid responses, invalid URLs and transport errors
    - Bounded refresh-and-retry on 401 with an async refresh hook
    - Per-request cancellation through an ``asyncio.Event``
    - Callback/Event system for observability
    - Opt-in debug tracing and structured JSON logging

Example:
    ```pycon
    >>> import asyncio
    >>> from arefresh import AsyncAuthClient, HeaderCredential
    >>> async def main():  # doctest: +SKIP
    ...     async def refresh() -> bool:
    ...         client.update_credential(HeaderCredential("new-token"))
    ...         return True
    ...
    ...     async with AsyncAuthClient(
    ...         credential=HeaderCredential("old-token"), refresh_hook=refresh
    ...     ) as client:
    ...         return await client.get("https://api.example.com/posts")
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncAuthClient",
    "CachePolicy",
    "ClientConfig",
    "Credential",
    "Failure",
    "FailureKind",
    "ForbiddenError",
    "HeaderCredential",
    "HttpMethod",
    "HttpRequestError",
    "HttpxTransport",
    "InvalidResponseError",
    "InvalidURLError",
    "NotFoundError",
    "QueryCredential",
    "RequestCancelledError",
    "RequestDescriptor",
    "ResponseKind",
    "SerializationError",
    "ServerError",
    "Success",
    "ToleranceLevel",
    "TooManyRetriesError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnauthorizedError",
    "UnknownStatusError",
    "__version__",
    "callback_refresh_hook",
    "classify_status",
    "compose_request",
    "request_async",
]

from importlib.metadata import PackageNotFoundError, version

from arefresh.client_async import AsyncAuthClient
from arefresh.core import (
    CachePolicy,
    ClientConfig,
    HttpMethod,
    RequestDescriptor,
    ResponseKind,
    classify_status,
    compose_request,
)
from arefresh.exceptions import (
    FailureKind,
    ForbiddenError,
    HttpRequestError,
    InvalidResponseError,
    InvalidURLError,
    NotFoundError,
    RequestCancelledError,
    SerializationError,
    ServerError,
    TooManyRetriesError,
    TransportError,
    UnauthorizedError,
    UnknownStatusError,
)
from arefresh.outcome import Failure, Success
from arefresh.request_async import request_async
from arefresh.retry import callback_refresh_hook
from arefresh.tokens import Credential, HeaderCredential, QueryCredential, ToleranceLevel
from arefresh.transport import HttpxTransport, Transport, TransportResponse

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
