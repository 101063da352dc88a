from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import TypeAdapter

from app.models.chroma.schemas import (
    Collection,
    CollectionDetail,
    Document,
    GetDocumentsResponse,
)
from app.models.common import Failure, FetchOutcome, Success
from app.repositories.chroma.repository import ChromaRepository
from app.services.chroma.assembler import assemble_documents
from app.services.chroma.normalizer import normalize

logger = logging.getLogger(__name__)

_COLLECTIONS = TypeAdapter(list[Collection])
_COLLECTION = TypeAdapter(Collection)
_COUNT = TypeAdapter(int)
_GET_RESPONSE = TypeAdapter(GetDocumentsResponse)


def parse_limit(raw: Optional[str], default: int) -> int:
    """Parse the row-limit selector value.

    Only a plain non-negative base-10 integer is accepted; anything else
    (missing, empty, ``"abc"``, ``"-3"``, ``"2.5"``) yields *default*.
    """
    if raw is None:
        return default
    value = raw.strip()
    if not value.isascii() or not value.isdigit():
        return default
    try:
        return int(value)
    except ValueError:
        # longer than the interpreter's int conversion digit limit
        return default


class ChromaViewerService:
    """Loads the data behind the collection list and collection detail views."""

    def __init__(self, repo: ChromaRepository) -> None:
        self._repo = repo

    async def list_collections(self) -> FetchOutcome[list[Collection]]:
        raw = await self._repo.list_collections()
        return normalize(raw, "fetch collections", _COLLECTIONS, self._repo.base_url)

    async def get_collection(self, name: str) -> FetchOutcome[Collection]:
        raw = await self._repo.get_collection(name)
        return normalize(
            raw, f'fetch collection "{name}"', _COLLECTION, self._repo.base_url
        )

    async def count_documents(self, collection_id: str) -> FetchOutcome[int]:
        raw = await self._repo.count_documents(collection_id)
        return normalize(
            raw,
            f'fetch document count for collection "{collection_id}"',
            _COUNT,
            self._repo.base_url,
        )

    async def get_documents(
        self, collection_id: str, limit: Optional[int] = None
    ) -> FetchOutcome[list[Document]]:
        raw = await self._repo.get_documents(collection_id, limit)
        outcome = normalize(
            raw,
            f'fetch documents for collection "{collection_id}"',
            _GET_RESPONSE,
            self._repo.base_url,
        )
        if isinstance(outcome, Failure):
            return outcome
        data = outcome.value
        return Success(
            value=assemble_documents(data.ids, data.documents, data.metadatas)
        )

    async def load_collection_detail(
        self, name: str, limit: int
    ) -> FetchOutcome[CollectionDetail]:
        """Resolve the collection, then fetch its count and documents.

        A failed collection lookup ends the request there.  Otherwise the
        count and documents calls run concurrently and each keeps its own
        outcome.
        """
        resolved = await self.get_collection(name)
        if isinstance(resolved, Failure):
            return resolved

        collection = resolved.value
        count, documents = await asyncio.gather(
            self.count_documents(collection.id),
            self.get_documents(collection.id, limit),
        )
        if isinstance(count, Failure):
            logger.warning(
                "Count unavailable for collection %s: %s", collection.name, count.message
            )
        return Success(
            value=CollectionDetail(
                collection=collection, documents=documents, count=count, limit=limit
            )
        )
