r"""Unit tests for header and query credentials."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from arefresh.tokens import (
    AUTHORIZATION_HEADER,
    HeaderCredential,
    QueryCredential,
    ToleranceLevel,
    parse_expiration,
)

EXPIRATION = datetime(2021, 10, 11, 13, 0, 45, tzinfo=timezone.utc)

######################################
#     Tests for parse_expiration     #
######################################


@pytest.mark.parametrize(
    "value",
    [
        "2021-10-11T13:00:45Z",
        "2021-10-11T13:00:45+00:00",
        "2021-10-11T15:00:45+02:00",
        "2021-10-11T13:00:45",
        datetime(2021, 10, 11, 13, 0, 45),
        EXPIRATION,
    ],
)
def test_parse_expiration(value: str | datetime) -> None:
    """Test that supported formats normalize to the same aware instant."""
    parsed = parse_expiration(value)
    assert parsed == EXPIRATION
    assert parsed.tzinfo is not None


@pytest.mark.parametrize("value", [None, ""])
def test_parse_expiration_unknown(value: str | None) -> None:
    assert parse_expiration(value) is None


def test_parse_expiration_invalid() -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        parse_expiration("yesterday")


######################################
#     Tests for HeaderCredential     #
######################################


def test_header_credential_defaults() -> None:
    credential = HeaderCredential("abc")
    assert credential.token_type == "bearer"
    assert credential.expiration is None
    assert credential.refresh_token is None


def test_header_credential_header() -> None:
    """Test the Authorization header value."""
    assert HeaderCredential(token="abc", token_type="bearer").header == (
        AUTHORIZATION_HEADER,
        "bearer abc",
    )


def test_header_credential_header_custom_type() -> None:
    assert HeaderCredential(token="abc", token_type="Token").header == ("Authorization", "Token abc")


def test_header_credential_header_empty_type() -> None:
    """Test that an empty scheme sends the bare token."""
    assert HeaderCredential(token="abc", token_type="").header == ("Authorization", "abc")


def test_header_credential_expiration_string() -> None:
    """Test that an ISO 8601 expiration string is parsed."""
    credential = HeaderCredential("abc", expiration="2021-10-11T13:00:45Z")
    assert credential.expiration == EXPIRATION


def test_header_credential_invalid_expiration() -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        HeaderCredential("abc", expiration="not a date")


def test_header_credential_repr_hides_refresh_token() -> None:
    assert "secret" not in repr(HeaderCredential("abc", refresh_token="secret"))


def test_header_credential_is_frozen() -> None:
    credential = HeaderCredential("abc")
    with pytest.raises(AttributeError):
        credential.token = "def"


def test_header_credential_equality() -> None:
    assert HeaderCredential("abc", expiration="2021-10-11T13:00:45Z") == HeaderCredential(
        "abc", expiration=EXPIRATION
    )
    assert HeaderCredential("abc") != HeaderCredential("def")


def test_header_credential_expiring_in() -> None:
    """Test that expiring_in adds the lifetime to the reference time."""
    start = datetime(2021, 10, 11, 13, 0, 0, tzinfo=timezone.utc)
    credential = HeaderCredential.expiring_in(
        45, "abc", token_type="Token", refresh_token="r", reference=start
    )
    assert credential.expiration == EXPIRATION
    assert credential.token_type == "Token"
    assert credential.refresh_token == "r"


def test_header_credential_expiring_in_now() -> None:
    """Test that expiring_in defaults to the current time."""
    before = datetime.now(timezone.utc)
    credential = HeaderCredential.expiring_in(60, "abc")
    after = datetime.now(timezone.utc)
    assert before + timedelta(seconds=60) <= credential.expiration <= after + timedelta(seconds=60)


def test_header_credential_is_expired() -> None:
    """Test expiry relative to a reference time."""
    credential = HeaderCredential("abc", expiration=EXPIRATION)
    assert not credential.is_expired(EXPIRATION - timedelta(seconds=1))
    assert not credential.is_expired(EXPIRATION)
    assert credential.is_expired(EXPIRATION + timedelta(seconds=1))


def test_header_credential_is_expired_naive_reference() -> None:
    credential = HeaderCredential("abc", expiration=EXPIRATION)
    assert credential.is_expired(datetime(2021, 10, 11, 14, 0, 0))


def test_header_credential_is_expired_defaults_to_now() -> None:
    assert HeaderCredential.expiring_in(-1, "abc").is_expired()
    assert not HeaderCredential.expiring_in(3600, "abc").is_expired()


def test_header_credential_is_expired_unknown_expiration() -> None:
    """Test that a credential without expiration is reported expired."""
    assert HeaderCredential("abc").is_expired()


@pytest.mark.parametrize(
    ("distance", "tolerance", "level", "expected"),
    [
        (timedelta(seconds=30), 45, ToleranceLevel.SECONDS, True),
        (timedelta(seconds=45), 45, ToleranceLevel.SECONDS, True),
        (timedelta(seconds=46), 45, ToleranceLevel.SECONDS, False),
        (timedelta(minutes=4), 5, ToleranceLevel.MINUTES, True),
        (timedelta(minutes=6), 5, ToleranceLevel.MINUTES, False),
        (timedelta(hours=2), 4, ToleranceLevel.HOURS, True),
        (timedelta(hours=12), 4, ToleranceLevel.HOURS, False),
        (timedelta(days=1), 2, ToleranceLevel.DAYS, True),
        (timedelta(days=3), 2, ToleranceLevel.DAYS, False),
    ],
)
def test_header_credential_is_about_to_expire(
    distance: timedelta, tolerance: float, level: ToleranceLevel, expected: bool
) -> None:
    """Test the tolerance window for each level."""
    credential = HeaderCredential("abc", expiration=EXPIRATION)
    assert credential.is_about_to_expire(EXPIRATION - distance, tolerance, level) is expected


def test_header_credential_is_about_to_expire_after_expiration() -> None:
    """Test that the distance is absolute once the credential expired."""
    credential = HeaderCredential("abc", expiration=EXPIRATION)
    assert credential.is_about_to_expire(EXPIRATION + timedelta(seconds=10), 30)
    assert not credential.is_about_to_expire(EXPIRATION + timedelta(minutes=10), 30)


def test_header_credential_is_about_to_expire_default_level() -> None:
    credential = HeaderCredential("abc", expiration=EXPIRATION)
    assert credential.is_about_to_expire(EXPIRATION - timedelta(seconds=59), 60)


def test_header_credential_is_about_to_expire_unknown_expiration() -> None:
    """Test that a credential without expiration is always about to
    expire."""
    assert HeaderCredential("abc").is_about_to_expire(EXPIRATION, 1, ToleranceLevel.DAYS)


####################################
#     Tests for ToleranceLevel     #
####################################


def test_tolerance_level_values() -> None:
    assert ToleranceLevel.SECONDS.value == 1.0
    assert ToleranceLevel.MINUTES.value == 60.0
    assert ToleranceLevel.HOURS.value == 3600.0
    assert ToleranceLevel.DAYS.value == 86400.0


#####################################
#     Tests for QueryCredential     #
#####################################


def test_query_credential_query_item() -> None:
    assert QueryCredential(key="apiKey", value="123").query_item == ("apiKey", "123")


def test_query_credential_repr_hides_value() -> None:
    assert "secret" not in repr(QueryCredential(key="apiKey", value="secret"))


def test_query_credential_is_frozen() -> None:
    credential = QueryCredential(key="apiKey", value="123")
    with pytest.raises(AttributeError):
        credential.value = "456"
