"""Note schemas."""

from pydantic import BaseModel, Field


class Rect(BaseModel):
    """Highlight rectangle on a captured page."""

    x: float
    y: float
    w: float
    h: float


class Source(BaseModel):
    """Where a clip came from."""

    kind: str = "web"  # web, pdf, image
    url: str | None = None
    doi: str | None = None


class Selection(BaseModel):
    """Selected content on the page."""

    text: str | None = None
    html: str | None = None


class Media(BaseModel):
    """Attached media, sent by the extension as a data URL."""

    screenshot_data_url: str | None = Field(default=None, alias="screenshotDataUrl")

    model_config = {"populate_by_name": True}


class Ops(BaseModel):
    """Capture options."""

    summarize: bool | None = None
    tags: list[str] | None = None
    page: int | None = None
    highlights: list[Rect] | None = None


class ClipPayload(BaseModel):
    """Schema for a capture or append request."""

    source: Source | None = None
    selection: Selection | None = None
    media: Media | None = None
    ops: Ops | None = None


class UpdatePayload(BaseModel):
    """Schema for metadata updates."""

    title: str | None = None
    tags: list[str] | None = None


class NoteFields(BaseModel):
    """Schema for note creation and appends (internal use)."""

    text: str | None = None
    html: str | None = None
    source_url: str | None = None
    tags: list[str] | None = None
    page_number: int | None = None
    highlights: list[Rect] | None = None
    preview_bytes: bytes | None = None


class NoteListItem(BaseModel):
    """Schema for a note in list and search results."""

    id: str
    title: str
    created_at: str
    source_url: str | None
    tags: list[str]
    snippet: str | None
    preview_path: str | None


class NoteDetail(BaseModel):
    """Schema for a full note."""

    id: str
    created_at: str
    title: str
    plaintext: str | None = None
    html: str | None = None
    source_url: str | None = None
    text_quote: str | None = None
    tags: list[str] = []
    preview_path: str | None = None
    page_number: int | None = None
    highlights: list[Rect] = []


class NoteExport(BaseModel):
    """Fields handed to the Markdown export."""

    id: str
    title: str
    created_at: str
    source_url: str | None = None
    tags: list[str] = []
    plaintext: str | None = None
    html: str | None = None


class ClipResponse(BaseModel):
    """Schema for capture acknowledgement."""

    ok: bool
    note_id: str


class OkResponse(BaseModel):
    """Generic acknowledgement."""

    ok: bool


class DeleteResponse(BaseModel):
    """Schema for delete acknowledgement."""

    ok: bool
    affected: int
