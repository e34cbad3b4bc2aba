"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from levelnotes.repositories.note_repository import NoteRepository
from levelnotes.services.blob_store import BlobStore
from levelnotes.services.note_service import NoteService


def get_repository(request: Request) -> NoteRepository:
    """Get the process-wide note repository created at startup."""
    return request.app.state.repository


RepositoryDep = Annotated[NoteRepository, Depends(get_repository)]


def get_note_service(repository: RepositoryDep) -> NoteService:
    """Get a note service bound to the shared repository."""
    return NoteService(repository)


NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]


def get_blob_store(repository: RepositoryDep) -> BlobStore:
    """Get the preview blob store."""
    assert repository.blob_store is not None
    return repository.blob_store


BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]
