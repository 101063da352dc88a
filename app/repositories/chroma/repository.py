from __future__ import annotations

from typing import Optional

from app.models.chroma.schemas import GetDocumentsRequest
from app.models.http import RawResponse
from app.repositories.base import BaseRepository


class ChromaRepository(BaseRepository):
    """Read-only access to the collection, count and get endpoints."""

    async def list_collections(self) -> RawResponse:
        return await self._fetch(self._url("collections"))

    async def get_collection(self, name: str) -> RawResponse:
        return await self._fetch(self._url("collections", name))

    async def count_documents(self, collection_id: str) -> RawResponse:
        return await self._fetch(self._url("collections", collection_id, "count"))

    async def get_documents(
        self, collection_id: str, limit: Optional[int] = None
    ) -> RawResponse:
        """Fetch up to *limit* records with their content and metadata."""
        body = GetDocumentsRequest(limit=limit).model_dump(exclude_none=True)
        return await self._fetch(
            self._url("collections", collection_id, "get"),
            method="POST",
            body=body,
        )
