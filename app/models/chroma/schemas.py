from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from app.models.common import Failure, Success

Metadata = dict[str, JsonValue]


class Collection(BaseModel):
    """A collection as returned by the collections endpoints.

    The upstream payload carries more fields (configuration, log position,
    version); only the ones the viewer shows are kept.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    metadata: Optional[Metadata] = None
    tenant: Optional[str] = None
    database: Optional[str] = None
    dimension: Optional[int] = None


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: Optional[str] = None
    metadata: Optional[Metadata] = None


class GetDocumentsRequest(BaseModel):
    """Request body for ``POST .../collections/{id}/get``."""

    include: list[str] = Field(default_factory=lambda: ["documents", "metadatas"])
    limit: Optional[int] = None


class GetDocumentsResponse(BaseModel):
    """Parallel arrays returned by ``POST .../collections/{id}/get``."""

    model_config = ConfigDict(extra="ignore")

    ids: list[str]
    documents: Optional[list[Optional[str]]] = None
    metadatas: Optional[list[Optional[Metadata]]] = None


class CollectionDetail(BaseModel):
    """Everything the detail page needs once the collection itself resolved.

    ``documents`` and ``count`` are independent outcomes: one failing never
    hides the other.
    """

    collection: Collection
    documents: Union[Success, Failure]
    count: Union[Success, Failure]
    limit: int


class CollectionDetailResponse(BaseModel):
    """API response shape for ``GET /api/collections/{name}``."""

    collection: Collection
    limit: int
    documents: Optional[list[Document]] = None
    documents_error: Optional[str] = None
    count: Optional[int] = None
    count_error: Optional[str] = None
