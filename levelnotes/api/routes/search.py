"""Search endpoints."""

from fastapi import APIRouter

from levelnotes.api.deps import NoteServiceDep
from levelnotes.schemas.note import NoteListItem

router = APIRouter(tags=["search"])


@router.get("/search", response_model=list[NoteListItem])
def search_notes(note_service: NoteServiceDep, q: str | None = None) -> list[NoteListItem]:
    """
    Full-text search over titles, text, HTML and tags.

    An empty query returns the most recent notes.
    """
    return note_service.search_notes(q)
