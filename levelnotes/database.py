"""Database engine and schema management."""

from sqlalchemy import Engine, event
from sqlmodel import SQLModel, create_engine

from levelnotes.config import settings
from levelnotes.models import Note  # noqa: F401  (registers the table)
from levelnotes.repositories.search_index import SearchIndex


def _set_sqlite_pragmas(dbapi_conn, _connection_record):
    """Use write-ahead logging so readers do not block on the writer."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def build_engine(database_url: str | None = None, echo: bool = False) -> Engine:
    """Create a SQLite engine usable from any request thread."""
    url = database_url or settings.resolved_database_url
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        url,
        echo=echo,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def create_db_and_tables(engine: Engine, search_index: SearchIndex | None = None) -> None:
    """Create the notes table and its full-text index if absent."""
    SQLModel.metadata.create_all(engine)
    with engine.begin() as connection:
        (search_index or SearchIndex()).create_schema(connection)
