"""API routes module."""

from levelnotes.api.routes.files import router as files_router
from levelnotes.api.routes.notes import router as notes_router
from levelnotes.api.routes.search import router as search_router

__all__ = ["files_router", "notes_router", "search_router"]
