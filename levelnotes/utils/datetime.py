"""Datetime and identifier helpers."""

import uuid
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def utc_timestamp() -> str:
    """Return current UTC time as a sortable RFC 3339 string."""
    return utc_now().isoformat()


def new_note_id() -> str:
    """Return a fresh random note identifier."""
    return str(uuid.uuid4())
