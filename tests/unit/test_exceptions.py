from __future__ import annotations

import pytest
from coola.equality import objects_are_equal

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
from tests.helpers import TEST_URL, create_transport_response

######################################
#     Tests for HttpRequestError     #
######################################


def test_http_request_error_attributes() -> None:
    """Test that HttpRequestError stores all request details."""
    response = create_transport_response(status_code=500)
    cause = OSError("reset")
    error = HttpRequestError(
        method="GET",
        url=TEST_URL,
        message="failed",
        status_code=500,
        response=response,
        cause=cause,
    )
    assert str(error) == "failed"
    assert error.method == "GET"
    assert error.url == TEST_URL
    assert error.message == "failed"
    assert error.status_code == 500
    assert error.response is response
    assert error.cause is cause
    assert error.kind is FailureKind.UNKNOWN


def test_http_request_error_defaults() -> None:
    error = HttpRequestError(method="GET", url=TEST_URL, message="failed")
    assert error.status_code is None
    assert error.response is None
    assert error.cause is None


def test_http_request_error_repr() -> None:
    error = NotFoundError(method="GET", url=TEST_URL, message="missing", status_code=404)
    assert repr(error) == (
        f"NotFoundError(kind='not_found', method='GET', url='{TEST_URL}', status_code=404)"
    )


def test_http_request_error_to_dict() -> None:
    error = ServerError(method="POST", url=TEST_URL, message="boom", status_code=503)
    assert objects_are_equal(
        error.to_dict(),
        {
            "kind": "server_error",
            "method": "POST",
            "url": TEST_URL,
            "message": "boom",
            "status_code": 503,
        },
    )


@pytest.mark.parametrize(
    ("error_cls", "kind"),
    [
        (InvalidURLError, FailureKind.INVALID_URL),
        (SerializationError, FailureKind.SERIALIZATION),
        (InvalidResponseError, FailureKind.INVALID_RESPONSE),
        (UnauthorizedError, FailureKind.UNAUTHORIZED),
        (ForbiddenError, FailureKind.FORBIDDEN),
        (NotFoundError, FailureKind.NOT_FOUND),
        (ServerError, FailureKind.SERVER_ERROR),
        (UnknownStatusError, FailureKind.UNKNOWN),
        (TooManyRetriesError, FailureKind.TOO_MANY_RETRIES),
        (TransportError, FailureKind.TRANSPORT),
        (RequestCancelledError, FailureKind.TRANSPORT),
    ],
)
def test_error_kind(error_cls: type[HttpRequestError], kind: FailureKind) -> None:
    """Test that each subclass carries its failure kind."""
    error = error_cls(method="GET", url=TEST_URL, message="failed")
    assert isinstance(error, HttpRequestError)
    assert error.kind is kind


def test_request_cancelled_error_is_transport_error() -> None:
    assert issubclass(RequestCancelledError, TransportError)


def test_http_request_error_can_be_raised() -> None:
    with pytest.raises(HttpRequestError, match=r"failed"):
        raise UnauthorizedError(method="GET", url=TEST_URL, message="failed", status_code=401)
