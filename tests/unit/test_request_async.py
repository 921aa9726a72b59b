r"""Unit tests for request_async."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from arefresh import request_async
from arefresh.core.config import CachePolicy, ClientConfig
from arefresh.exceptions import (
    InvalidURLError,
    SerializationError,
    TooManyRetriesError,
    UnauthorizedError,
)
from arefresh.tokens import HeaderCredential, QueryCredential
from tests.helpers import TEST_URL, RefreshCounter, ScriptedTransport, create_transport_response

UNAUTHORIZED = create_transport_response(status_code=401)
OK = create_transport_response(status_code=200, content=b"[]")

###################################
#     Tests for request_async     #
###################################


@pytest.mark.asyncio
async def test_request_async_success() -> None:
    transport = ScriptedTransport([OK])
    response = await request_async(TEST_URL, "GET", transport=transport)
    assert response == OK
    assert transport.calls == 1


@pytest.mark.asyncio
async def test_request_async_applies_config() -> None:
    """Test that cache policy and timeout come from the config."""
    transport = ScriptedTransport([OK])
    config = ClientConfig(cache_policy=CachePolicy.USE_PROTOCOL, timeout=4.0)

    await request_async(TEST_URL, "GET", transport=transport, config=config)

    (descriptor,) = transport.submitted
    assert descriptor.timeout == 4.0
    assert descriptor.header_items == ()


@pytest.mark.asyncio
async def test_request_async_composes_request() -> None:
    transport = ScriptedTransport([OK])

    await request_async(
        TEST_URL,
        "put",
        transport=transport,
        credential=QueryCredential("apiKey", "123"),
        body={"id": "1"},
        params={"a": "b"},
        headers={"X-Trace": "7"},
    )

    (descriptor,) = transport.submitted
    assert descriptor.method.value == "PUT"
    assert str(descriptor.url) == f"{TEST_URL}?a=b&apiKey=123"
    assert descriptor.body == b'{"id": "1"}'
    assert dict(descriptor.header_items)["X-Trace"] == "7"


@pytest.mark.asyncio
async def test_request_async_invalid_url_not_dispatched() -> None:
    """Test that composition failures happen before any dispatch."""
    transport = ScriptedTransport([OK])
    with pytest.raises(InvalidURLError):
        await request_async("not a url", "GET", transport=transport)
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_request_async_serialization_error_not_dispatched() -> None:
    transport = ScriptedTransport([OK])
    with pytest.raises(SerializationError):
        await request_async(TEST_URL, "POST", transport=transport, body={"x": object()})
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_request_async_unauthorized_without_hook() -> None:
    transport = ScriptedTransport([UNAUTHORIZED])
    with pytest.raises(UnauthorizedError):
        await request_async(TEST_URL, "GET", transport=transport)
    assert transport.calls == 1


@pytest.mark.asyncio
async def test_request_async_max_retry_attempts() -> None:
    """Test that max_retry_attempts bounds the chain."""
    transport = ScriptedTransport([UNAUTHORIZED])
    refresh = RefreshCounter()

    with pytest.raises(TooManyRetriesError):
        await request_async(
            TEST_URL,
            "GET",
            transport=transport,
            config=ClientConfig(max_retry_attempts=4),
            refresh_hook=refresh,
        )

    assert transport.calls == 4
    assert refresh.calls == 3


@pytest.mark.asyncio
async def test_request_async_credential_provider() -> None:
    """Test that the credential provider is read after each refresh."""
    transport = ScriptedTransport([UNAUTHORIZED, OK])
    provider = Mock(return_value=HeaderCredential("new"))

    await request_async(
        TEST_URL,
        "GET",
        transport=transport,
        credential=HeaderCredential("old"),
        refresh_hook=RefreshCounter(),
        credential_provider=provider,
    )

    provider.assert_called_once_with()
    assert [d.credential.token for d in transport.submitted] == ["old", "new"]


@pytest.mark.asyncio
async def test_request_async_callbacks(mock_callback: Mock) -> None:
    transport = ScriptedTransport([UNAUTHORIZED, OK])

    await request_async(
        TEST_URL,
        "GET",
        transport=transport,
        config=ClientConfig(on_refresh=mock_callback),
        refresh_hook=RefreshCounter(),
    )

    mock_callback.assert_called_once()
    assert mock_callback.call_args.args[0].attempt == 1
