from __future__ import annotations

from dataclasses import dataclass

import pytest
from coola.equality import objects_are_equal

from arefresh.core.serialization import decode_body, encode_body, try_decode_body
from arefresh.exceptions import FailureKind, SerializationError
from tests.helpers import TEST_URL


@dataclass
class Post:
    id: str
    title: str = ""


#################################
#     Tests for encode_body     #
#################################


def test_encode_body_mapping() -> None:
    assert encode_body({"id": "123", "tags": [1, 2]}) == b'{"id": "123", "tags": [1, 2]}'


def test_encode_body_dataclass() -> None:
    """Test that dataclass instances are encoded field by field."""
    assert encode_body(Post(id="1", title="x")) == b'{"id": "1", "title": "x"}'


def test_encode_body_nested_dataclass() -> None:
    assert encode_body({"post": Post(id="1")}) == b'{"post": {"id": "1", "title": ""}}'


@pytest.mark.parametrize("body", [b"raw", bytearray(b"raw")])
def test_encode_body_bytes(body: bytes) -> None:
    """Test that bytes are returned unchanged."""
    assert encode_body(body) == b"raw"


def test_encode_body_unicode() -> None:
    assert encode_body("é") == b'"\\u00e9"'


@pytest.mark.parametrize("body", [{1j}, {"when": object()}, Post])
def test_encode_body_invalid(body: object) -> None:
    """Test that unserializable bodies raise SerializationError."""
    with pytest.raises(
        SerializationError, match=r"POST request body for .* could not be encoded"
    ) as exc:
        encode_body(body, method="POST", url=TEST_URL)
    assert exc.value.kind is FailureKind.SERIALIZATION
    assert exc.value.url == TEST_URL
    assert isinstance(exc.value.cause, TypeError)


def test_encode_body_nan_allowed() -> None:
    assert encode_body(float("nan")) == b"NaN"


#################################
#     Tests for decode_body     #
#################################


def test_decode_body() -> None:
    assert objects_are_equal(decode_body(b'{"id": "123", "n": [1]}'), {"id": "123", "n": [1]})


def test_decode_body_into_dataclass() -> None:
    """Test that the decoded object is passed to the factory as keyword
    arguments."""
    assert decode_body(b'{"id": "123", "title": "x"}', Post) == Post(id="123", title="x")


@pytest.mark.parametrize(
    ("content", "into"),
    [
        (b"not json", None),
        (b"", None),
        (b"[1, 2]", Post),
        (b'{"unknown": 1}', Post),
        (b"\xff\xfe", None),
    ],
)
def test_decode_body_invalid(content: bytes, into: type | None) -> None:
    """Test that invalid payloads raise SerializationError."""
    with pytest.raises(SerializationError, match=r"could not be decoded"):
        decode_body(content, into, method="GET", url=TEST_URL)


#####################################
#     Tests for try_decode_body     #
#####################################


def test_try_decode_body() -> None:
    assert try_decode_body(b'{"id": "1"}', Post) == Post(id="1")


@pytest.mark.parametrize("content", [b"not json", b"[]"])
def test_try_decode_body_failure(content: bytes) -> None:
    """Test that decoding failures return None."""
    assert try_decode_body(content, Post) is None
