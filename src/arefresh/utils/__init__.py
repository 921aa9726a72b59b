r"""Logging and tracing helpers.

This package provides opt-in structured JSON logging with correlation
IDs, and the debug tracing used when ``ClientConfig.debug`` is enabled.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "correlation_scope",
    "get_correlation_id",
    "log_structured",
    "redact_headers",
    "set_correlation_id",
    "trace_request",
    "trace_response",
]

from arefresh.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    correlation_scope,
    get_correlation_id,
    log_structured,
    redact_headers,
    set_correlation_id,
)
from arefresh.utils.tracing import trace_request, trace_response
