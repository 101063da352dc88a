from fastapi import APIRouter

from app.api.collections.routes import router as collections_router
from app.api.pages.routes import router as pages_router

router = APIRouter()
router.include_router(pages_router)
router.include_router(collections_router)
