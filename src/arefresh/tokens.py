r"""Credential types attached to outgoing requests.

A credential contributes to a request in exactly one way: a
``HeaderCredential`` adds an ``Authorization`` header, while a
``QueryCredential`` appends a key/value pair to the URL query string.
``Credential`` is the union of both and is matched exhaustively by the
request composer.

Example:
    ```pycon
    >>> from arefresh.tokens import HeaderCredential, QueryCredential
    >>> HeaderCredential(token="abc", token_type="bearer").header
    ('Authorization', 'bearer abc')
    >>> QueryCredential(key="apiKey", value="123").query_item
    ('apiKey', '123')

    ```
"""

from __future__ import annotations

__all__ = [
    "AUTHORIZATION_HEADER",
    "Credential",
    "HeaderCredential",
    "QueryCredential",
    "ToleranceLevel",
    "parse_expiration",
]

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Union

AUTHORIZATION_HEADER = "Authorization"


class ToleranceLevel(Enum):
    r"""Unit used to express how close to expiry a credential may get.

    The value is the number of seconds in one unit.
    """

    SECONDS = 1.0
    MINUTES = 60.0
    HOURS = 60.0 * 60.0
    DAYS = 60.0 * 60.0 * 24.0


def parse_expiration(value: datetime | str | None) -> datetime | None:
    r"""Normalize an expiration timestamp to an aware UTC ``datetime``.

    Args:
        value: An ISO 8601 string, a ``datetime`` or ``None``. Naive
            datetimes are assumed to be in UTC. An empty string is
            treated as ``None``.

    Returns:
        The timezone-aware expiration, or ``None`` if unknown.

    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp.

    Example:
        ```pycon
        >>> from arefresh.tokens import parse_expiration
        >>> parse_expiration("2021-10-11T13:00:45Z").isoformat()
        '2021-10-11T13:00:45+00:00'
        >>> parse_expiration("") is None
        True

        ```
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value:
            return None
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _as_aware(reference: datetime) -> datetime:
    if reference.tzinfo is None:
        return reference.replace(tzinfo=timezone.utc)
    return reference


@dataclass(frozen=True)
class HeaderCredential:
    r"""Token sent in the ``Authorization`` header.

    Args:
        token: The raw token string.
        token_type: The authorization scheme (e.g. ``"bearer"``). When
            empty, the header value is the bare token.
        expiration: Optional expiration timestamp, as a ``datetime`` or
            an ISO 8601 string.
        refresh_token: Optional token a refresh hook can exchange for a
            new credential.
    """

    token: str
    token_type: str = "bearer"
    expiration: datetime | None = None
    refresh_token: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "expiration", parse_expiration(self.expiration))

    @classmethod
    def expiring_in(
        cls,
        seconds: float,
        token: str,
        token_type: str = "bearer",
        refresh_token: str | None = None,
        reference: datetime | None = None,
    ) -> HeaderCredential:
        r"""Create a credential that expires ``seconds`` after
        ``reference``.

        Args:
            seconds: Lifetime of the token in seconds.
            token: The raw token string.
            token_type: The authorization scheme.
            refresh_token: Optional refresh token.
            reference: The start of the lifetime. Defaults to now (UTC).

        Returns:
            The new credential.

        Example:
            ```pycon
            >>> from datetime import datetime, timezone
            >>> from arefresh.tokens import HeaderCredential
            >>> start = datetime(2021, 10, 11, 13, 0, 0, tzinfo=timezone.utc)
            >>> cred = HeaderCredential.expiring_in(45, "abc", reference=start)
            >>> cred.expiration.isoformat()
            '2021-10-11T13:00:45+00:00'

            ```
        """
        start = _as_aware(reference) if reference is not None else datetime.now(timezone.utc)
        return cls(
            token=token,
            token_type=token_type,
            expiration=start + timedelta(seconds=seconds),
            refresh_token=refresh_token,
        )

    @property
    def header(self) -> tuple[str, str]:
        r"""The ``(name, value)`` pair this credential contributes."""
        if not self.token_type:
            return (AUTHORIZATION_HEADER, self.token)
        return (AUTHORIZATION_HEADER, f"{self.token_type} {self.token}")

    def is_expired(self, reference: datetime | None = None) -> bool:
        r"""Indicate if the credential has expired as of ``reference``.

        A credential without a known expiration is reported expired.

        Args:
            reference: The time to compare against. Defaults to now (UTC).

        Returns:
            ``True`` if ``reference`` is past the expiration.
        """
        if self.expiration is None:
            return True
        reference = _as_aware(reference) if reference is not None else datetime.now(timezone.utc)
        return reference > self.expiration

    def is_about_to_expire(
        self,
        reference: datetime,
        tolerance: float,
        level: ToleranceLevel = ToleranceLevel.SECONDS,
    ) -> bool:
        r"""Indicate if ``reference`` is within ``tolerance`` units of the
        expiration.

        The distance is absolute, so a reference past the expiration is
        measured the same way as one before it.

        Args:
            reference: The time to compare against.
            tolerance: The window size, expressed in ``level`` units.
            level: The unit of ``tolerance``.

        Returns:
            ``True`` if the credential expires within the window, or if
            its expiration is unknown.

        Example:
            ```pycon
            >>> from datetime import datetime, timezone
            >>> from arefresh.tokens import HeaderCredential, ToleranceLevel
            >>> cred = HeaderCredential("abc", expiration="2021-01-02T00:00:00Z")
            >>> cred.is_about_to_expire(
            ...     datetime(2021, 1, 1, 22, tzinfo=timezone.utc), 4, ToleranceLevel.HOURS
            ... )
            True
            >>> cred.is_about_to_expire(
            ...     datetime(2021, 1, 1, 12, tzinfo=timezone.utc), 4, ToleranceLevel.HOURS
            ... )
            False

            ```
        """
        if self.expiration is None:
            return True
        diff = abs((_as_aware(reference) - self.expiration).total_seconds()) / level.value
        return diff <= tolerance


@dataclass(frozen=True)
class QueryCredential:
    r"""API key sent as a URL query parameter.

    Args:
        key: The query parameter name.
        value: The query parameter value.
    """

    key: str
    value: str = field(repr=False)

    @property
    def query_item(self) -> tuple[str, str]:
        return (self.key, self.value)


Credential = Union[HeaderCredential, QueryCredential]
