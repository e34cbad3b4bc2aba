"""Persistence layer: notes table and full-text index."""
