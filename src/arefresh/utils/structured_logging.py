r"""Structured logging utilities for machine-readable log output.

This module provides a JSON log formatter, correlation IDs that follow a
request chain across retries, and a helper to log structured fields.
Credentials are masked before they reach a handler.

The structured logging system is opt-in and can be enabled by configuring
Python's logging system to use the provided formatter.

Example:
    Enable structured logging for arefresh:

    ```python
    import logging
    from arefresh.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("arefresh")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Tag every log entry of a request chain:

    ```python
    from arefresh.utils.structured_logging import correlation_scope

    with correlation_scope("checkout-42"):
        payload = await client.get("https://api.example.com/cart")
    ```
"""

from __future__ import annotations

__all__ = [
    "REDACTED",
    "StructuredFormatter",
    "clear_correlation_id",
    "correlation_scope",
    "get_correlation_id",
    "log_structured",
    "redact_headers",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator, Iterable

REDACTED = "***"

# Header names whose values never reach a log handler
SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "set-cookie"})

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "arefresh_correlation_id", default=None
)


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Example:
        ```pycon
        >>> from arefresh.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("req-123")
        >>> get_correlation_id()
        'req-123'
        >>> clear_correlation_id()

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context.

    The ID is stored in a context variable, so concurrent request
    chains running in separate tasks keep separate IDs.

    Args:
        correlation_id: The correlation ID to set (e.g., request ID, trace ID).
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id.set(None)


@contextmanager
def correlation_scope(correlation_id: str) -> Generator[None, None, None]:
    """Set a correlation ID for the duration of a ``with`` block.

    The previous ID is restored on exit.

    Example:
        ```pycon
        >>> from arefresh.utils.structured_logging import (
        ...     correlation_scope,
        ...     get_correlation_id,
        ... )
        >>> with correlation_scope("chain-1"):
        ...     get_correlation_id()
        ...
        'chain-1'
        >>> get_correlation_id() is None
        True

        ```
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield
    finally:
        _correlation_id.reset(token)


def redact_headers(headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Return headers as a dict with sensitive values masked.

    Example:
        ```pycon
        >>> from arefresh.utils.structured_logging import redact_headers
        >>> redact_headers([("Authorization", "bearer abc"), ("Accept", "*/*")])
        {'Authorization': '***', 'Accept': '*/*'}

        ```
    """
    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value for name, value in headers
    }


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes one JSON object with the fields ``timestamp``,
    ``level``, ``logger``, ``message``, ``module``, ``function`` and
    ``line``, plus ``correlation_id`` when one is set, ``exception`` when
    the record carries exception info, and every field passed through
    ``extra``. Values that are not JSON serializable are rendered with
    ``repr``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from arefresh.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_logger")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Dispatched", extra={"attempt": 1})
        >>> '"attempt": 1' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format timestamp as ISO 8601 in UTC, ignoring ``datefmt``."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Nothing is computed when ``level`` is disabled for ``logger``.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from arefresh.utils.structured_logging import (
        ...     StructuredFormatter,
        ...     log_structured,
        ... )
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> log_structured(logger, logging.INFO, "Request completed", status_code=200)
        >>> "status_code" in stream.getvalue()
        True

        ```
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
