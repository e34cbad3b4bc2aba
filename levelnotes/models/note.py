"""Note model."""

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, SQLModel

from levelnotes.utils.datetime import new_note_id, utc_timestamp

UNTITLED = "Untitled clip"


class Note(SQLModel, table=True):  # type: ignore
    """A captured web clip and everything appended to it since."""

    __tablename__ = "notes"  # type: ignore

    id: str = Field(default_factory=new_note_id, primary_key=True)
    created_at: str = Field(default_factory=utc_timestamp)
    title: str = Field(default=UNTITLED)

    # Content
    plaintext: str | None = Field(default=None, sa_column=Column(Text))
    html: str | None = Field(default=None, sa_column=Column(Text))

    # Provenance, fixed at capture time
    source_url: str | None = Field(default=None)
    text_quote: str | None = Field(default=None, sa_column=Column(Text))
    page_number: int | None = Field(default=None)
    highlights_json: str = Field(default="[]")

    # Relative blob locator, first write wins
    preview_path: str | None = Field(default=None)

    # Sorted JSON array
    tags_json: str = Field(default="[]")

    __table_args__ = (Index("idx_notes_created_at", "created_at"),)
