"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import Generator

# Keep the app's own startup away from the real data directory
os.environ.setdefault("LEVELNOTES_DATA_DIR", tempfile.mkdtemp(prefix="levelnotes-test-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from levelnotes.api.deps import get_repository  # noqa: E402
from levelnotes.database import build_engine, create_db_and_tables  # noqa: E402
from levelnotes.main import app  # noqa: E402
from levelnotes.repositories.note_repository import NoteRepository  # noqa: E402
from levelnotes.schemas.note import NoteFields, Rect  # noqa: E402
from levelnotes.services.blob_store import BlobStore  # noqa: E402
from levelnotes.services.note_service import NoteService  # noqa: E402

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite://"

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


@pytest.fixture(name="engine")
def engine_fixture():
    """Create a test database engine with the notes schema."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="blob_store")
def blob_store_fixture(tmp_path) -> BlobStore:
    """Blob store rooted in a temporary directory."""
    return BlobStore(tmp_path)


@pytest.fixture(name="repository")
def repository_fixture(engine, blob_store: BlobStore) -> NoteRepository:
    """Note repository over the test database."""
    return NoteRepository(engine, blob_store=blob_store)


@pytest.fixture(name="file_engine")
def file_engine_fixture(tmp_path):
    """On-disk WAL database, so separate connections really run side by side."""
    engine = build_engine(f"sqlite:///{tmp_path / 'notes.db'}")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="file_repository")
def file_repository_fixture(file_engine, blob_store: BlobStore) -> NoteRepository:
    return NoteRepository(file_engine, blob_store=blob_store)


@pytest.fixture(name="note_service")
def note_service_fixture(repository: NoteRepository) -> NoteService:
    return NoteService(repository)


@pytest.fixture(name="client")
def client_fixture(repository: NoteRepository) -> Generator[TestClient, None, None]:
    """Create a test client with the repository override."""
    app.dependency_overrides[get_repository] = lambda: repository
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="test_note_id")
def test_note_fixture(repository: NoteRepository) -> str:
    """Create a test note."""
    return repository.create(
        NoteFields(
            text="Transformers replaced recurrent networks for sequence modelling.",
            html="<p>Transformers replaced <b>recurrent</b> networks.</p>",
            source_url="https://example.com/attention",
            tags=["ml", "papers"],
            page_number=3,
            highlights=[Rect(x=1.0, y=2.0, w=30.5, h=4.25)],
        )
    )
