"""HTML pages: the collection list and the collection detail view."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.dependencies import get_service
from app.core.config import Settings, get_settings
from app.models.common import Failure, Success
from app.services.chroma.service import ChromaViewerService, parse_limit

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=Path(__file__).resolve().parents[2] / "templates")


def _limit_options(
    choices: list[int], limit: int, count: Optional[int]
) -> list[tuple[int, str]]:
    """Options for the row-limit selector, always including the current limit."""
    options = [
        (choice, f"All ({count})" if choice == count else str(choice))
        for choice in choices
    ]
    if count is not None and count not in choices:
        options.append((count, f"All ({count})"))
    if all(value != limit for value, _ in options):
        options.append((limit, str(limit)))
    return options


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse, name="collections_page")
async def collections_page(
    request: Request,
    service: ChromaViewerService = Depends(get_service),
) -> HTMLResponse:
    """List every collection in the configured tenant/database."""
    outcome = await service.list_collections()
    if isinstance(outcome, Failure):
        return templates.TemplateResponse(
            request,
            "collections.html",
            {"collections": None, "error": outcome.message},
            status_code=outcome.http_status(),
        )
    return templates.TemplateResponse(
        request,
        "collections.html",
        {"collections": outcome.value, "error": None},
    )


# ---------------------------------------------------------------------------
# GET /collections/{name}
# ---------------------------------------------------------------------------


@router.get("/collections/{name}", response_class=HTMLResponse, name="collection_page")
async def collection_page(
    name: str,
    request: Request,
    limit: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    service: ChromaViewerService = Depends(get_service),
) -> HTMLResponse:
    """Show one collection with up to ``limit`` of its documents.

    - **200** — collection found; documents/count errors are shown inline
    - **4xx/5xx** — collection could not be fetched; error panel only
    """
    row_limit = parse_limit(limit, settings.default_limit)
    outcome = await service.load_collection_detail(name, row_limit)
    if isinstance(outcome, Failure):
        return templates.TemplateResponse(
            request,
            "collection_error.html",
            {"error": outcome.message},
            status_code=outcome.http_status(),
        )

    detail = outcome.value
    count = detail.count.value if isinstance(detail.count, Success) else None
    return templates.TemplateResponse(
        request,
        "collection_detail.html",
        {
            "collection": detail.collection,
            "documents": detail.documents,
            "count": detail.count,
            "limit": detail.limit,
            "limit_options": _limit_options(settings.limit_choices, detail.limit, count),
        },
    )
