"""Custom exception classes."""

from fastapi import HTTPException, status


class LevelNotesException(Exception):
    """Base exception for LevelNotes."""

    pass


class NotFoundError(LevelNotesException):
    """Raised when a note or blob does not exist."""

    def __init__(self, resource: str = "Resource", detail: str | None = None):
        self.detail = detail or f"{resource} not found"
        super().__init__(self.detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=self.detail,
        )


class StorageError(LevelNotesException):
    """Raised when the note database fails; the operation did not apply."""

    def __init__(self, detail: str = "Storage failure"):
        self.detail = detail
        super().__init__(detail)


class BlobStoreError(LevelNotesException):
    """Raised when a preview blob cannot be written or read."""

    def __init__(self, detail: str = "Blob store error"):
        self.detail = detail
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=self.detail,
        )


class InvalidPathError(BlobStoreError):
    """Raised when a blob locator tries to escape the blob root."""

    def __init__(self, detail: str = "Invalid file path"):
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=self.detail,
        )
