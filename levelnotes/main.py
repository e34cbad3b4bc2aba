"""LevelNotes API - Main Application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from levelnotes import __version__
from levelnotes.api.routes.files import router as files_router
from levelnotes.api.routes.notes import router as notes_router
from levelnotes.api.routes.search import router as search_router
from levelnotes.config import settings
from levelnotes.database import build_engine, create_db_and_tables
from levelnotes.logging_config import setup_logging
from levelnotes.repositories.note_repository import NoteRepository
from levelnotes.services.blob_store import BlobStore
from levelnotes.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    engine = build_engine(echo=settings.debug)
    create_db_and_tables(engine)
    repository = NoteRepository(engine, blob_store=BlobStore(settings.data_dir))
    repository.verify_index()
    app.state.repository = repository
    logger.info(f"LevelNotes DB {settings.resolved_database_url}")

    yield
    app.state.repository = None
    engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Local store for web clips with full-text search and Markdown export",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(notes_router)
app.include_router(search_router)
app.include_router(files_router)


@app.exception_handler(StorageError)
async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
    """Report database faults; the failed operation has been rolled back."""
    logger.error(f"Storage failure: {exc.detail}")
    return JSONResponse(status_code=500, content={"detail": exc.detail})


@app.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    """Liveness probe."""
    return "ok"


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
