from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_service
from app.core.config import Settings, get_settings
from app.models.chroma.schemas import Collection, CollectionDetailResponse, Document
from app.models.common import ErrorResponse, Failure, Success
from app.services.chroma.service import ChromaViewerService, parse_limit

router = APIRouter(prefix="/api/collections", tags=["collections"])

_ERRORS = {
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def _raise(failure: Failure) -> None:
    raise HTTPException(status_code=failure.http_status(), detail=failure.message)


# ---------------------------------------------------------------------------
# GET /api/collections
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=list[Collection],
    responses=_ERRORS,
    summary="List collections",
)
async def list_collections(
    service: ChromaViewerService = Depends(get_service),
) -> list[Collection]:
    outcome = await service.list_collections()
    if isinstance(outcome, Failure):
        _raise(outcome)
    return outcome.value


# ---------------------------------------------------------------------------
# GET /api/collections/{name}
# ---------------------------------------------------------------------------


@router.get(
    "/{name}",
    response_model=CollectionDetailResponse,
    responses=_ERRORS,
    summary="Collection with its document count and first documents",
)
async def get_collection(
    name: str,
    limit: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    service: ChromaViewerService = Depends(get_service),
) -> CollectionDetailResponse:
    """Return the collection plus independent documents/count results.

    A failure of either secondary call is reported in its ``*_error`` field
    while the other is still returned.
    """
    outcome = await service.load_collection_detail(
        name, parse_limit(limit, settings.default_limit)
    )
    if isinstance(outcome, Failure):
        _raise(outcome)

    detail = outcome.value
    response = CollectionDetailResponse(collection=detail.collection, limit=detail.limit)
    if isinstance(detail.documents, Success):
        response.documents = detail.documents.value
    else:
        response.documents_error = detail.documents.message
    if isinstance(detail.count, Success):
        response.count = detail.count.value
    else:
        response.count_error = detail.count.message
    return response


# ---------------------------------------------------------------------------
# GET /api/collections/{name}/documents
# ---------------------------------------------------------------------------


@router.get(
    "/{name}/documents",
    response_model=list[Document],
    responses=_ERRORS,
    summary="Documents of a collection",
)
async def get_documents(
    name: str,
    limit: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    service: ChromaViewerService = Depends(get_service),
) -> list[Document]:
    collection = await service.get_collection(name)
    if isinstance(collection, Failure):
        _raise(collection)

    documents = await service.get_documents(
        collection.value.id, parse_limit(limit, settings.default_limit)
    )
    if isinstance(documents, Failure):
        _raise(documents)
    return documents.value
