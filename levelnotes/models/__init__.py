"""Database models."""

from levelnotes.models.note import UNTITLED, Note

__all__ = ["Note", "UNTITLED"]
