r"""Tagged result of a request chain.

``AsyncAuthClient.request_outcome`` returns an ``Outcome`` instead of
raising, for callers that prefer to branch on a value.
"""

from __future__ import annotations

__all__ = ["Failure", "Outcome", "Success"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from arefresh.exceptions import FailureKind, HttpRequestError


@dataclass(frozen=True)
class Success:
    content: bytes
    status_code: int

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: HttpRequestError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> FailureKind:
        return self.error.kind


Outcome = Union[Success, Failure]
