"""Service modules for business logic."""
