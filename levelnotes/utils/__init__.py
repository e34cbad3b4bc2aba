"""Utility modules."""

from levelnotes.utils.data_url import decode_data_url
from levelnotes.utils.datetime import new_note_id, utc_now, utc_timestamp
from levelnotes.utils.exceptions import (
    BlobStoreError,
    InvalidPathError,
    LevelNotesException,
    NotFoundError,
    StorageError,
)

__all__ = [
    "decode_data_url",
    "new_note_id",
    "utc_now",
    "utc_timestamp",
    "BlobStoreError",
    "InvalidPathError",
    "LevelNotesException",
    "NotFoundError",
    "StorageError",
]
