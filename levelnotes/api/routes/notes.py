"""Note capture, editing and export endpoints."""

from fastapi import APIRouter, Response

from levelnotes.api.deps import NoteServiceDep
from levelnotes.schemas.note import (
    ClipPayload,
    ClipResponse,
    DeleteResponse,
    NoteDetail,
    NoteListItem,
    OkResponse,
    UpdatePayload,
)
from levelnotes.services.export import export_filename, render_markdown
from levelnotes.utils.exceptions import NotFoundError

router = APIRouter(tags=["notes"])


@router.post("/clip", response_model=ClipResponse)
def create_clip(payload: ClipPayload, note_service: NoteServiceDep) -> ClipResponse:
    """
    Save a new clip as a note.
    """
    note_id = note_service.capture(payload)
    return ClipResponse(ok=True, note_id=note_id)


@router.post("/append/{note_id}", response_model=OkResponse)
def append_clip(
    note_id: str, payload: ClipPayload, note_service: NoteServiceDep
) -> OkResponse:
    """
    Append a clip to an existing note.

    Text and HTML are added after the existing content, tags are merged, and
    the screenshot is kept only if the note has no preview yet.
    """
    try:
        note_service.append(note_id, payload)
    except NotFoundError as e:
        raise e.to_http_exception()
    return OkResponse(ok=True)


@router.post("/update/{note_id}", response_model=OkResponse)
def update_note(
    note_id: str, payload: UpdatePayload, note_service: NoteServiceDep
) -> OkResponse:
    """
    Rename a note and/or add tags.
    """
    try:
        note_service.update(note_id, payload)
    except NotFoundError as e:
        raise e.to_http_exception()
    return OkResponse(ok=True)


@router.get("/notes", response_model=list[NoteListItem])
def list_notes(note_service: NoteServiceDep) -> list[NoteListItem]:
    """
    List the most recent notes, newest first.
    """
    return note_service.list_notes()


@router.get("/note/{note_id}", response_model=NoteDetail)
def get_note(note_id: str, note_service: NoteServiceDep) -> NoteDetail:
    """
    Get a single note. Unknown IDs yield a record with id ``not-found``.
    """
    return note_service.get_detail(note_id)


@router.post("/delete/{note_id}", response_model=DeleteResponse)
def delete_note(note_id: str, note_service: NoteServiceDep) -> DeleteResponse:
    """
    Delete a note.
    """
    affected = note_service.delete(note_id)
    return DeleteResponse(ok=True, affected=affected)


@router.get("/export/{note_id}.md")
def export_note(note_id: str, note_service: NoteServiceDep) -> Response:
    """
    Download a note as Markdown.
    """
    export = note_service.export(note_id)
    filename = export_filename(export.title, note_id)
    return Response(
        content=render_markdown(export),
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
