"""
Full-text index over notes.

Postings live in an FTS5 table whose rowid is the ``notes`` row's rowid. The
index never maintains itself: the repository calls ``add``/``reindex``/``remove``
with the same session it uses for the row change, so both land in one
transaction or neither does.
"""

import json
import logging

from sqlalchemy import Connection, text
from sqlmodel import Session

from levelnotes.models.note import Note

logger = logging.getLogger(__name__)

FTS_TABLE = "notes_fts"

DEFAULT_SEARCH_LIMIT = 100


def tags_text(tags_json: str | None) -> str:
    """Space-joined tag list as stored in the index."""
    try:
        tags = json.loads(tags_json) if tags_json else []
    except json.JSONDecodeError:
        return ""
    return " ".join(str(tag) for tag in tags)


def build_match_expression(query: str) -> str | None:
    """
    Turn free text into an FTS5 MATCH expression.

    Each whitespace-separated term becomes a quoted string, so punctuation and
    FTS operators in user input are matched literally. Terms are AND-ed; terms
    without any letters or digits are dropped since they index to nothing.

    Returns:
        The expression, or None if no searchable term remains
    """
    terms = [term for term in query.split() if any(ch.isalnum() for ch in term)]
    if not terms:
        return None
    return " ".join('"' + term.replace('"', '""') + '"' for term in terms)


class SearchIndex:
    """FTS5-backed text index kept in lockstep with the notes table."""

    def create_schema(self, connection: Connection) -> None:
        """Create the index table if it does not exist yet."""
        connection.execute(
            text(
                f"""
                CREATE VIRTUAL TABLE IF NOT EXISTS {FTS_TABLE}
                USING fts5(title, plaintext, html, tags,
                           tokenize='unicode61 remove_diacritics 2')
                """
            )
        )

    def add(self, session: Session, rowid: int, note: Note) -> None:
        """Insert the postings for one note."""
        session.execute(
            text(
                f"""
                INSERT INTO {FTS_TABLE}(rowid, title, plaintext, html, tags)
                VALUES (:rowid, :title, :plaintext, :html, :tags)
                """
            ),
            {
                "rowid": rowid,
                "title": note.title,
                "plaintext": note.plaintext,
                "html": note.html,
                "tags": tags_text(note.tags_json),
            },
        )

    def remove(self, session: Session, rowid: int) -> None:
        """Drop every posting for a row."""
        session.execute(
            text(f"DELETE FROM {FTS_TABLE} WHERE rowid = :rowid"), {"rowid": rowid}
        )

    def reindex(self, session: Session, rowid: int, note: Note) -> None:
        """Replace a row's postings wholesale (delete, then insert)."""
        self.remove(session, rowid)
        self.add(session, rowid, note)

    def search(
        self, session: Session, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[Note]:
        """
        Find notes matching a query.

        Postings and note rows are read by one statement, so hits and row
        contents always come from the same snapshot.

        Args:
            session: Open database session
            query: Free-text query (must not be blank)
            limit: Maximum notes to return

        Returns:
            Notes, best match first, newer first among equal matches
        """
        expression = build_match_expression(query)
        if expression is None:
            return []

        result = session.execute(
            text(
                f"""
                SELECT n.id, n.created_at, n.title, n.plaintext, n.html,
                       n.source_url, n.text_quote, n.page_number, n.highlights_json,
                       n.preview_path, n.tags_json
                FROM {FTS_TABLE}
                JOIN notes n ON n.rowid = {FTS_TABLE}.rowid
                WHERE {FTS_TABLE} MATCH :expression
                ORDER BY bm25({FTS_TABLE}), n.created_at DESC
                LIMIT :limit
                """
            ),
            {"expression": expression, "limit": limit},
        )
        return [Note.model_validate(dict(row._mapping)) for row in result.all()]

    def count(self, session: Session) -> int:
        """Number of indexed rows."""
        return session.execute(text(f"SELECT count(*) FROM {FTS_TABLE}")).scalar_one()

    def rebuild(self, session: Session) -> int:
        """
        Re-derive the whole index from the notes table.

        Returns:
            Number of notes indexed
        """
        session.execute(text(f"DELETE FROM {FTS_TABLE}"))
        rows = session.execute(
            text("SELECT rowid AS note_rowid, title, plaintext, html, tags_json FROM notes")
        ).all()
        for row in rows:
            note = Note(
                title=row.title,
                plaintext=row.plaintext,
                html=row.html,
                tags_json=row.tags_json,
            )
            self.add(session, row.note_rowid, note)
        logger.info(f"Rebuilt search index with {len(rows)} notes")
        return len(rows)
