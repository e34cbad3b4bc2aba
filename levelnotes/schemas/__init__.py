"""Pydantic schemas for request/response validation."""

from levelnotes.schemas.note import (
    ClipPayload,
    ClipResponse,
    DeleteResponse,
    Media,
    NoteDetail,
    NoteExport,
    NoteFields,
    NoteListItem,
    OkResponse,
    Ops,
    Rect,
    Selection,
    Source,
    UpdatePayload,
)

__all__ = [
    "ClipPayload",
    "ClipResponse",
    "DeleteResponse",
    "Media",
    "NoteDetail",
    "NoteExport",
    "NoteFields",
    "NoteListItem",
    "OkResponse",
    "Ops",
    "Rect",
    "Selection",
    "Source",
    "UpdatePayload",
]
