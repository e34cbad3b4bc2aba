"""Markdown export of a single note."""

from levelnotes.schemas.note import NoteExport

FILENAME_MAX_CHARS = 60


def render_markdown(note: NoteExport) -> str:
    """Render a note as a standalone Markdown document."""
    lines = [f"# {note.title}", "", f"- **Created:** {note.created_at}"]
    if note.source_url:
        lines.append(f"- **Source:** {note.source_url}")
    if note.tags:
        lines.append("- **Tags:** " + " ".join(f"#{tag}" for tag in note.tags))
    md = "\n".join(lines) + "\n\n"

    if note.plaintext is not None:
        md += f"## Clip (plaintext)\n\n{note.plaintext}\n\n"
    if note.html is not None:
        md += f"## Clip (HTML)\n\n```html\n{note.html}\n```\n"
    return md


def safe_filename(title: str) -> str:
    """Filesystem- and header-safe stem derived from a title."""
    safe = "".join(
        ch if (ch.isascii() and ch.isalnum()) or ch in "-_ " else "-"
        for ch in title[:FILENAME_MAX_CHARS]
    ).strip()
    return safe or "note"


def export_filename(title: str, note_id: str) -> str:
    """Download name for an exported note."""
    return f"{safe_filename(title)}-{note_id}.md"
