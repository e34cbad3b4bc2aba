"""Note service: capture entry points and response-shaped reads."""

import logging

from levelnotes.models.note import Note
from levelnotes.repositories.note_repository import (
    RECENT_LIMIT,
    NoteRepository,
    decode_highlights,
    decode_tags,
)
from levelnotes.repositories.search_index import DEFAULT_SEARCH_LIMIT
from levelnotes.schemas.note import (
    ClipPayload,
    NoteDetail,
    NoteExport,
    NoteFields,
    NoteListItem,
    UpdatePayload,
)
from levelnotes.services.merge import make_snippet
from levelnotes.utils.data_url import decode_data_url
from levelnotes.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

NOT_FOUND_ID = "not-found"
NOT_FOUND_TITLE = "Not found"


def fields_from_payload(payload: ClipPayload) -> NoteFields:
    """Flatten a capture request into repository fields."""
    selection = payload.selection
    ops = payload.ops
    media = payload.media
    return NoteFields(
        text=selection.text if selection else None,
        html=selection.html if selection else None,
        source_url=payload.source.url if payload.source else None,
        tags=ops.tags if ops else None,
        page_number=ops.page if ops else None,
        highlights=ops.highlights if ops else None,
        preview_bytes=decode_data_url(media.screenshot_data_url) if media else None,
    )


def to_list_item(note: Note) -> NoteListItem:
    """Summary shape used by list and search."""
    return NoteListItem(
        id=note.id,
        title=note.title,
        created_at=note.created_at,
        source_url=note.source_url,
        tags=decode_tags(note.tags_json),
        snippet=make_snippet(note.plaintext),
        preview_path=note.preview_path,
    )


def to_detail(note: Note) -> NoteDetail:
    """Full record shape."""
    return NoteDetail(
        id=note.id,
        created_at=note.created_at,
        title=note.title,
        plaintext=note.plaintext,
        html=note.html,
        source_url=note.source_url,
        text_quote=note.text_quote,
        tags=decode_tags(note.tags_json),
        preview_path=note.preview_path,
        page_number=note.page_number,
        highlights=decode_highlights(note.highlights_json),
    )


class NoteService:
    """Service for capturing clips and reading notes back."""

    def __init__(self, repository: NoteRepository):
        """
        Initialize the note service.

        Args:
            repository: Note storage
        """
        self.repository = repository

    def capture(self, payload: ClipPayload) -> str:
        """Create a note from a clip. Returns the new note ID."""
        return self.repository.create(fields_from_payload(payload))

    def append(self, note_id: str, payload: ClipPayload) -> None:
        """
        Append a clip to an existing note.

        Raises:
            NotFoundError: If the note does not exist
        """
        self.repository.append(note_id, fields_from_payload(payload))

    def update(self, note_id: str, payload: UpdatePayload) -> None:
        """
        Change a note's title and/or add tags.

        Raises:
            NotFoundError: If the note does not exist
        """
        self.repository.update_metadata(note_id, title=payload.title, tags=payload.tags)

    def list_notes(self) -> list[NoteListItem]:
        return [to_list_item(n) for n in self.repository.list_recent(RECENT_LIMIT)]

    def search_notes(self, query: str | None) -> list[NoteListItem]:
        """Full-text search; blank queries list the most recent notes."""
        notes = self.repository.search(query or "", DEFAULT_SEARCH_LIMIT)
        logger.debug(f"Search '{query}' matched {len(notes)} notes")
        return [to_list_item(n) for n in notes]

    def get_detail(self, note_id: str) -> NoteDetail:
        """
        Get a full note.

        Returns:
            The note, or a placeholder record with id ``not-found``
        """
        try:
            return to_detail(self.repository.get(note_id))
        except NotFoundError:
            return NoteDetail(id=NOT_FOUND_ID, created_at="", title=NOT_FOUND_TITLE)

    def delete(self, note_id: str) -> int:
        return self.repository.delete(note_id)

    def export(self, note_id: str) -> NoteExport:
        """
        Collect the fields needed to export a note.

        Returns:
            Export data, or a placeholder titled ``Not found``
        """
        try:
            note = self.repository.get(note_id)
        except NotFoundError:
            return NoteExport(id=note_id, title=NOT_FOUND_TITLE, created_at="")
        return NoteExport(
            id=note.id,
            title=note.title,
            created_at=note.created_at,
            source_url=note.source_url,
            tags=decode_tags(note.tags_json),
            plaintext=note.plaintext,
            html=note.html,
        )
