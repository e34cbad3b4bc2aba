"""LevelNotes - web clip capture and note storage."""

__version__ = "0.1.0"
