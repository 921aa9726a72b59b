r"""Debug tracing of requests and responses.

Tracing is a side channel enabled by ``ClientConfig.debug``. It only
logs; it never raises for a payload it cannot render and never changes
what the caller receives.
"""

from __future__ import annotations

__all__ = ["trace_request", "trace_response"]

import logging
from typing import TYPE_CHECKING, Any

from arefresh.tokens import QueryCredential
from arefresh.utils.structured_logging import log_structured, redact_headers

if TYPE_CHECKING:
    from arefresh.core.composer import RequestDescriptor
    from arefresh.transport import TransportResponse

logger: logging.Logger = logging.getLogger("arefresh.trace")

# Bodies longer than this are truncated in trace output
MAX_TRACE_BYTES = 4096


def _render(content: Any) -> str | None:
    if content is None:
        return None
    if not isinstance(content, (bytes, bytearray)):
        return repr(content)
    text = content[:MAX_TRACE_BYTES].decode("utf-8", errors="replace")
    if len(content) > MAX_TRACE_BYTES:
        text += f"... ({len(content)} bytes)"
    return text


def _redacted_url(descriptor: RequestDescriptor) -> str:
    if not isinstance(descriptor.credential, QueryCredential):
        return str(descriptor.url)
    masked = descriptor.with_credential(
        QueryCredential(key=descriptor.credential.key, value="***")
    )
    return str(masked.url)


def trace_request(descriptor: RequestDescriptor, attempt: int) -> None:
    log_structured(
        logger,
        logging.DEBUG,
        f"--> {descriptor.method.value} {_redacted_url(descriptor)} (attempt {attempt})",
        http_method=descriptor.method.value,
        attempt=attempt,
        request_headers=redact_headers(descriptor.header_items),
        request_body=_render(descriptor.body),
    )


def trace_response(descriptor: RequestDescriptor, response: Any, attempt: int) -> None:
    response_obj: TransportResponse | None = response
    status_code = getattr(response_obj, "status_code", None)
    log_structured(
        logger,
        logging.DEBUG,
        f"<-- {status_code} {descriptor.method.value} {_redacted_url(descriptor)}",
        http_method=descriptor.method.value,
        attempt=attempt,
        status_code=status_code,
        response_body=_render(getattr(response_obj, "content", None)),
    )
