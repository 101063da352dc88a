"""Turn a ``RawResponse`` into a ``FetchOutcome``.

This is the single place that knows the error body shapes the upstream
server (and the FastAPI layer in front of it) may produce.  Loaders pass the
resulting ``Failure`` through unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from app.models.common import ErrorKind, Failure, FetchOutcome, Success
from app.models.http import NetworkFailure, RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def extract_error_message(data: Any) -> Optional[str]:
    """Pull a human-readable message out of an error body.

    Shapes are tried in order and the first match wins:

    1. ``{"error": {"message": ...}}`` or ``{"error": {"detail": ...}}``
       (any other ``error`` object is stringified)
    2. ``{"detail": "..."}``
    3. ``{"detail": [{"msg": ...}, ...]}`` (validation errors)
    4. any other ``detail`` value, stringified
    5. ``{"error": "NotFoundError", "message": "..."}``

    Returns ``None`` when nothing matched; the caller then falls back to the
    raw response text.
    """
    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, dict) and error:
        for key in ("message", "detail"):
            if error.get(key):
                return _stringify(error[key])
        return _stringify(error)

    detail = data.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and first.get("msg"):
            return _stringify(first["msg"])
    if detail:
        return _stringify(detail)

    message = data.get("message")
    if isinstance(message, str) and message:
        if isinstance(error, str) and error:
            return f"{error}: {message}"
        return message
    return None


def network_failure_message(failure: NetworkFailure, remote_address: str) -> str:
    if failure.connection_refused:
        return (
            f"Could not connect to ChromaDB at {remote_address}. "
            "Please ensure ChromaDB is running and accessible."
        )
    message = "An unexpected error occurred while trying to connect to ChromaDB."
    if failure.detail:
        message += f" Details: {failure.detail}"
    return message


def normalize(
    raw: RawResponse,
    context: str,
    adapter: TypeAdapter[T],
    remote_address: str,
) -> FetchOutcome[T]:
    """Classify *raw* and decode it with *adapter* when it succeeded.

    *context* names the operation for messages, e.g. ``"fetch collections"``.
    """
    if raw.network_error is not None:
        kind = (
            ErrorKind.CONNECTION_REFUSED
            if raw.network_error.connection_refused
            else ErrorKind.NETWORK_ERROR
        )
        message = network_failure_message(raw.network_error, remote_address)
        logger.error("Network error trying to %s: %s", context, raw.network_error.detail)
        return Failure(
            kind=kind, message=message, timed_out=raw.network_error.timed_out
        )

    if raw.is_success:
        if raw.is_json:
            try:
                return Success(value=adapter.validate_python(raw.data))
            except ValidationError as exc:
                logger.warning("Unexpected body trying to %s: %s", context, exc)
        else:
            logger.warning("Non-JSON body trying to %s", context)
        return Failure(
            kind=ErrorKind.DECODE_ERROR,
            message=f"Failed to {context}: unexpected response body. Response: {raw.text}",
            status_code=raw.status_code,
        )

    extracted = extract_error_message(raw.data) if raw.is_json else None
    if extracted is not None:
        failure = Failure(
            kind=ErrorKind.UPSTREAM_ERROR,
            message=f"Failed to {context}. Status: {raw.status_code}: {extracted}",
            status_code=raw.status_code,
        )
    else:
        failure = Failure(
            kind=ErrorKind.UPSTREAM_ERROR_OPAQUE,
            message=f"Failed to {context}. Status: {raw.status_code}. Response: {raw.text}",
            status_code=raw.status_code,
        )
    logger.warning(failure.message)
    return failure
