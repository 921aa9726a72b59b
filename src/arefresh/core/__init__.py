r"""Core request composition, classification and configuration.

This package contains the pure building blocks used by the client: the
request composer, the response classifier, the JSON serialization
boundary, configuration and validation.
"""

from __future__ import annotations

__all__ = [
    "BODY_METHODS",
    "DEFAULT_CACHE_POLICY",
    "DEFAULT_MAX_RETRY_ATTEMPTS",
    "DEFAULT_TIMEOUT",
    "CachePolicy",
    "ClientConfig",
    "HttpMethod",
    "RequestDescriptor",
    "ResponseKind",
    "classify_response",
    "classify_status",
    "compose_request",
    "decode_body",
    "encode_body",
    "error_for_kind",
    "try_decode_body",
    "validate_retry_params",
    "validate_timeout",
]

from arefresh.core.classifier import (
    ResponseKind,
    classify_response,
    classify_status,
    error_for_kind,
)
from arefresh.core.composer import (
    BODY_METHODS,
    HttpMethod,
    RequestDescriptor,
    compose_request,
)
from arefresh.core.config import (
    DEFAULT_CACHE_POLICY,
    DEFAULT_MAX_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT,
    CachePolicy,
    ClientConfig,
)
from arefresh.core.serialization import decode_body, encode_body, try_decode_body
from arefresh.core.validation import validate_retry_params, validate_timeout
