"""Abstract base class for repositories backed by the ChromaDB REST API.

Every repository in this project must extend ``BaseRepository``.

The remote API scopes everything under a tenant and a database::

    {chroma_url}{chroma_api_prefix}/tenants/{tenant}/databases/{database}/...

``BaseRepository`` owns that addressing scheme; subclasses only name the
trailing path segments.

Example::

    class CollectionRepository(BaseRepository):
        async def list_collections(self) -> RawResponse:
            return await self._fetch(self._url("collections"))
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any, Optional, TypeVar
from urllib.parse import quote

from app.clients.http import fetch_json
from app.core.config import Settings
from app.models.http import RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseRepository")


class BaseRepository(ABC):
    """Base class that wires a repository to one tenant/database on a server.

    The ``from_settings`` classmethod is the standard factory used
    throughout the app.
    """

    def __init__(
        self,
        base_url: str,
        tenant: str,
        database: str,
        api_prefix: str = "/api/v2",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._tenant = tenant
        self._database = database
        prefix = api_prefix.strip("/")
        self._api_prefix = f"/{prefix}" if prefix else ""

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(cls: type[T], settings: Settings) -> T:
        """Instantiate the repository for the configured server.

        Usage::

            repo = ChromaRepository.from_settings(get_settings())
        """
        return cls(
            settings.chroma_url,
            settings.chroma_tenant,
            settings.chroma_database,
            settings.chroma_api_prefix,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _url(self, *segments: str) -> str:
        """Build a tenant/database-scoped URL; every segment is percent-encoded."""
        scope = [
            "tenants",
            self._tenant,
            "databases",
            self._database,
            *segments,
        ]
        path = "/".join(quote(str(s), safe="") for s in scope)
        return f"{self.base_url}{self._api_prefix}/{path}"

    async def _fetch(
        self, url: str, method: str = "GET", body: Optional[Any] = None
    ) -> RawResponse:
        logger.debug("%s %s", method, url)
        return await fetch_json(url, method=method, body=body)
