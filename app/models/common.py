"""Result types shared by every upstream call.

A ``FetchOutcome`` is either a ``Success`` carrying the decoded value or a
``Failure`` carrying a displayable message.  Loaders never raise past this
boundary; presentation code inspects ``ok`` instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(str, Enum):
    DECODE_ERROR = "decode_error"
    UPSTREAM_ERROR = "upstream_error"
    UPSTREAM_ERROR_OPAQUE = "upstream_error_opaque"
    CONNECTION_REFUSED = "connection_refused"
    NETWORK_ERROR = "network_error"


class Success(BaseModel, Generic[T]):
    ok: Literal[True] = True
    value: T


class Failure(BaseModel):
    ok: Literal[False] = False
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    timed_out: bool = False

    def http_status(self) -> int:
        """Status a page or API endpoint should answer with for this failure."""
        if self.status_code is not None and self.status_code >= 400:
            return self.status_code
        if self.kind is ErrorKind.CONNECTION_REFUSED:
            return 503
        if self.timed_out:
            return 504
        return 502


FetchOutcome = Union[Success[T], Failure]


class ErrorResponse(BaseModel):
    detail: str
