"""Async HTTP client for the ChromaDB REST API.

Uses httpx.AsyncClient which is meant to be long-lived and reused.
A single shared client is managed by the module; see ``get_http_client``
and ``close_http_client`` for lifecycle hooks.

``fetch_json`` never raises for transport problems: every call resolves to
a ``RawResponse``, with ``network_error`` set when no HTTP response came back.
"""

from __future__ import annotations

import errno
import json
import logging
from typing import Any, Optional

import httpx

from app.core.config import settings
from app.models.http import NetworkFailure, RawResponse

logger = logging.getLogger(__name__)

# Module-level shared client
_http_client: Optional[httpx.AsyncClient] = None

# Remote data is mutable; no intermediary may serve a stored copy.
_NO_CACHE_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


def get_http_client() -> httpx.AsyncClient:
    """Return the shared AsyncClient.  Creates one if missing."""
    global _http_client  # noqa: PLW0603
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            verify=settings.http_verify_ssl,
            headers={"User-Agent": "ChromaViewer/1.0"},
        )
    return _http_client


async def close_http_client() -> None:
    """Close the shared AsyncClient gracefully."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        _http_client = None
        logger.info("HTTP client closed.")


def _is_connection_refused(exc: BaseException) -> bool:
    """Look for ECONNREFUSED anywhere in the cause chain.

    Hosts resolving to several addresses (``localhost`` on dual-stack
    machines) surface one error per attempt inside an exception group.
    """
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, ConnectionRefusedError):
            return True
        if getattr(current, "errno", None) == errno.ECONNREFUSED:
            return True
        pending.extend(getattr(current, "exceptions", None) or ())
        for linked in (current.__cause__, current.__context__):
            if linked is not None:
                pending.append(linked)
    return "connection refused" in str(exc).lower()


def _network_failure(exc: Exception) -> NetworkFailure:
    return NetworkFailure(
        connection_refused=isinstance(exc, httpx.ConnectError)
        and _is_connection_refused(exc),
        timed_out=isinstance(exc, httpx.TimeoutException),
        detail=str(exc) or type(exc).__name__,
    )


async def fetch_json(
    url: str,
    method: str = "GET",
    headers: Optional[dict[str, str]] = None,
    body: Any = None,
) -> RawResponse:
    """Issue one request and capture whatever came back.

    The body is parsed as JSON when possible; otherwise ``data`` stays
    ``None`` and only ``text`` is populated.
    """
    request_headers = dict(_NO_CACHE_HEADERS)
    if body is not None:
        request_headers["Content-Type"] = "application/json"
    if headers:
        request_headers.update(headers)

    client = get_http_client()
    try:
        response = await client.request(
            method,
            url,
            headers=request_headers,
            content=json.dumps(body) if body is not None else None,
        )
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        logger.debug("%s %s failed before a response: %r", method, url, exc)
        return RawResponse(network_error=_network_failure(exc))

    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        return RawResponse(status_code=response.status_code, text=text)
    return RawResponse(
        status_code=response.status_code, text=text, data=data, is_json=True
    )
