"""
Note persistence.

Every write runs under the repository's lock and inside a single session
transaction together with the matching search index change. Readers open
their own sessions and never take the lock.
"""

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from levelnotes.models.note import Note
from levelnotes.repositories.search_index import DEFAULT_SEARCH_LIMIT, SearchIndex
from levelnotes.schemas.note import NoteFields, Rect
from levelnotes.services.blob_store import BlobStore
from levelnotes.services.merge import (
    derive_title,
    first_write_preview,
    merge_tags,
    merge_text,
)
from levelnotes.utils.exceptions import BlobStoreError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

RECENT_LIMIT = 200


def decode_tags(tags_json: str | None) -> list[str]:
    """Parse a stored tag array, tolerating empty or damaged values."""
    try:
        tags = json.loads(tags_json) if tags_json else []
    except json.JSONDecodeError:
        return []
    return [str(tag) for tag in tags]


def decode_highlights(highlights_json: str | None) -> list[Rect]:
    """Parse stored highlight rectangles."""
    try:
        items = json.loads(highlights_json) if highlights_json else []
    except json.JSONDecodeError:
        return []
    return [Rect.model_validate(item) for item in items]


class NoteRepository:
    """Owns the notes table and its full-text index."""

    def __init__(
        self,
        engine: Engine,
        blob_store: BlobStore | None = None,
        search_index: SearchIndex | None = None,
    ):
        """
        Initialize the repository.

        Args:
            engine: SQLAlchemy engine for the notes database
            blob_store: Where screenshot previews are written (optional)
            search_index: Full-text index maintained alongside the table
        """
        self.engine = engine
        self.blob_store = blob_store
        self.search_index = search_index or SearchIndex()
        self._write_lock = threading.RLock()

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Exclusive write session; commits on success, rolls back on any error."""
        with self._write_lock, Session(self.engine) as session:
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Note store write failed: {e}")
                raise StorageError(f"Note store write failed: {e}") from e

    @contextmanager
    def _reader(self) -> Iterator[Session]:
        with Session(self.engine) as session:
            try:
                yield session
            except SQLAlchemyError as e:
                logger.error(f"Note store read failed: {e}")
                raise StorageError(f"Note store read failed: {e}") from e

    @staticmethod
    def _rowid(session: Session, note_id: str) -> int:
        return session.execute(
            text("SELECT rowid FROM notes WHERE id = :id"), {"id": note_id}
        ).scalar_one()

    def _save_preview(self, note_id: str, raw_bytes: bytes | None) -> str | None:
        """Write preview bytes; a failed write just means no preview."""
        if not raw_bytes or self.blob_store is None:
            return None
        try:
            return self.blob_store.save(note_id, raw_bytes)
        except BlobStoreError as e:
            logger.warning(f"Preview for note {note_id} not saved: {e}")
            return None

    def _discard_preview(self, preview_path: str) -> None:
        """Best-effort removal of a preview file."""
        if self.blob_store is None:
            return
        try:
            self.blob_store.delete(preview_path)
        except BlobStoreError as e:
            logger.warning(f"Preview {preview_path} not removed: {e}")

    def create(self, fields: NoteFields) -> str:
        """
        Store a newly captured clip.

        Args:
            fields: Captured content and metadata

        Returns:
            The new note's ID

        Raises:
            StorageError: If the note could not be written
        """
        highlights = [rect.model_dump() for rect in fields.highlights or []]
        tags = merge_tags([], fields.tags)
        note = Note(
            title=derive_title(fields.text),
            plaintext=fields.text,
            html=fields.html,
            source_url=fields.source_url,
            text_quote=fields.text,
            page_number=fields.page_number,
            highlights_json=json.dumps(highlights),
            tags_json=json.dumps(tags),
        )
        note_id = note.id
        preview_path = self._save_preview(note_id, fields.preview_bytes)
        note.preview_path = preview_path

        try:
            with self._transaction() as session:
                session.add(note)
                session.flush()
                self.search_index.add(session, self._rowid(session, note_id), note)
        except StorageError:
            if preview_path:
                self._discard_preview(preview_path)
            raise

        logger.info(
            f"Saved clip {note_id} (source={fields.source_url}, "
            f"tags={tags}, page={fields.page_number})"
        )
        return note_id

    def get(self, note_id: str) -> Note:
        """
        Fetch a single note.

        Raises:
            NotFoundError: If no note has this ID
        """
        with self._reader() as session:
            note = session.get(Note, note_id)
            if note is None:
                raise NotFoundError("Note")
            return note

    def list_recent(self, limit: int = RECENT_LIMIT) -> list[Note]:
        """Newest notes first."""
        with self._reader() as session:
            statement = (
                select(Note)
                .order_by(Note.created_at.desc())  # type: ignore
                .limit(limit)
            )
            return list(session.exec(statement).all())

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Note]:
        """
        Full-text search; a blank query lists recent notes instead.

        Returns:
            Notes in index relevance order
        """
        if not query or not query.strip():
            return self.list_recent(limit)

        with self._reader() as session:
            return self.search_index.search(session, query, limit)

    def append(self, note_id: str, addition: NoteFields) -> None:
        """
        Grow an existing note with newly captured content.

        Text and HTML are appended, tags unioned, and a preview stored only if
        the note has none. Title and capture-time fields stay as they are.

        Raises:
            NotFoundError: If no note has this ID
            StorageError: If the update could not be written
        """
        with self._transaction() as session:
            note = session.get(Note, note_id)
            if note is None:
                raise NotFoundError("Note")

            note.plaintext = merge_text(note.plaintext, addition.text)
            note.html = merge_text(note.html, addition.html)
            note.tags_json = json.dumps(
                merge_tags(decode_tags(note.tags_json), addition.tags)
            )
            candidate = None
            if note.preview_path is None:
                candidate = self._save_preview(note_id, addition.preview_bytes)
            note.preview_path = first_write_preview(note.preview_path, candidate)

            session.add(note)
            session.flush()
            self.search_index.reindex(session, self._rowid(session, note_id), note)

        logger.info(f"Appended clip into note {note_id}")

    def update_metadata(
        self, note_id: str, title: str | None = None, tags: list[str] | None = None
    ) -> None:
        """
        Replace the title and/or add tags.

        Args:
            note_id: Note ID to update
            title: New title; None leaves it unchanged
            tags: Tags to union in; None leaves them unchanged

        Raises:
            NotFoundError: If no note has this ID
            StorageError: If the update could not be written
        """
        with self._transaction() as session:
            note = session.get(Note, note_id)
            if note is None:
                raise NotFoundError("Note")

            if title is not None:
                note.title = title
            if tags is not None:
                note.tags_json = json.dumps(merge_tags(decode_tags(note.tags_json), tags))

            session.add(note)
            session.flush()
            self.search_index.reindex(session, self._rowid(session, note_id), note)

        logger.info(f"Updated note {note_id}")

    def delete(self, note_id: str) -> int:
        """
        Delete a note and its index entry.

        Returns:
            Number of notes removed (0 if the ID was unknown)
        """
        preview_path = None
        with self._transaction() as session:
            note = session.get(Note, note_id)
            if note is None:
                affected = 0
            else:
                preview_path = note.preview_path
                self.search_index.remove(session, self._rowid(session, note_id))
                session.delete(note)
                affected = 1

        if preview_path:
            self._discard_preview(preview_path)

        logger.info(f"Deleted note {note_id} (affected={affected})")
        return affected

    def count(self) -> int:
        """Number of stored notes."""
        with self._reader() as session:
            return session.exec(select(func.count()).select_from(Note)).one()

    def verify_index(self) -> bool:
        """
        Rebuild the search index if its size disagrees with the table.

        Returns:
            True if a rebuild was needed
        """
        with self._transaction() as session:
            notes = session.exec(select(func.count()).select_from(Note)).one()
            indexed = self.search_index.count(session)
            if notes == indexed:
                return False
            logger.warning(
                f"Search index out of sync ({indexed} entries for {notes} notes), rebuilding"
            )
            self.search_index.rebuild(session)
            return True
