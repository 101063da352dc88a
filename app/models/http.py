from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class NetworkFailure(BaseModel):
    """The request never produced an HTTP response."""

    connection_refused: bool = False
    timed_out: bool = False
    detail: str = ""


class RawResponse(BaseModel):
    """What came back from one outbound call, before any interpretation.

    ``data`` is only meaningful when ``is_json`` is true; ``text`` always
    holds the body as received.  When ``network_error`` is set there is no
    status code and no body.
    """

    status_code: Optional[int] = None
    text: str = ""
    data: Any = None
    is_json: bool = False
    network_error: Optional[NetworkFailure] = None

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300
