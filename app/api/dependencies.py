from __future__ import annotations

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.repositories.chroma.repository import ChromaRepository
from app.services.chroma.service import ChromaViewerService


def get_service(settings: Settings = Depends(get_settings)) -> ChromaViewerService:
    """FastAPI dependency that builds a ``ChromaViewerService`` for each request."""
    return ChromaViewerService(ChromaRepository.from_settings(settings))
