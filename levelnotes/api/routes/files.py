"""Preview file serving."""

from fastapi import APIRouter, Response

from levelnotes.api.deps import BlobStoreDep
from levelnotes.utils.exceptions import BlobStoreError, NotFoundError

router = APIRouter(tags=["files"])


@router.get("/file/{path:path}")
def get_file(path: str, blob_store: BlobStoreDep) -> Response:
    """
    Serve a stored preview by its relative path.
    """
    try:
        content = blob_store.read(path)
    except (NotFoundError, BlobStoreError) as e:
        raise e.to_http_exception()
    return Response(content=content, media_type=blob_store.content_type(path))
