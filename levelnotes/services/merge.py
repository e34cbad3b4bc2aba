"""
Merge rules for growing an existing note.

Everything here is pure: inputs in, merged values out. ``None`` always means
"nothing supplied" and leaves the existing value alone.
"""

from collections.abc import Iterable

from levelnotes.models.note import UNTITLED

TEXT_SEPARATOR = "\n\n"
TITLE_MAX_CHARS = 80
SNIPPET_MAX_CHARS = 160


def merge_text(existing: str | None, addition: str | None) -> str:
    """
    Append captured text to what a note already holds.

    Args:
        existing: Current field value (may be absent)
        addition: Newly captured text (may be absent or empty)

    Returns:
        ``existing`` and ``addition`` joined by a blank line. An empty addition
        leaves ``existing`` as is (or ``""`` when there was nothing); an empty
        ``existing`` is simply replaced. Repeated text is not deduplicated.
    """
    addition = addition or ""
    if existing is None or existing == "":
        return addition
    if not addition:
        return existing
    return f"{existing}{TEXT_SEPARATOR}{addition}"


def merge_tags(existing: Iterable[str] | None, additions: Iterable[str] | None) -> list[str]:
    """
    Union new tags into an existing tag set.

    Additions are trimmed and empty ones dropped. Nothing is ever removed.

    Returns:
        Sorted list of unique tags
    """
    tags = set(existing or ())
    for tag in additions or ():
        tag = tag.strip()
        if tag:
            tags.add(tag)
    return sorted(tags)


def first_write_preview(existing: str | None, candidate: str | None) -> str | None:
    """Keep an existing preview locator; only fill an empty slot."""
    return existing if existing is not None else candidate


def derive_title(text: str | None) -> str:
    """Title for a new note: leading characters of the selection, or a placeholder."""
    if text is not None:
        text = text.strip()
        if text:
            return text[:TITLE_MAX_CHARS]
    return UNTITLED


def make_snippet(text: str | None) -> str | None:
    """Short list preview of a note's plaintext, ellipsized when cut."""
    if text is None:
        return None
    text = text.strip()
    snippet = text[:SNIPPET_MAX_CHARS]
    if len(text) > len(snippet):
        snippet += "…"
    return snippet
