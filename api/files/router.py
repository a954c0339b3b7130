"""
FastAPI router for file upload and serving.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import FileResponse
from starlette.datastructures import UploadFile

from core.dependencies import get_blob_store

from . import service
from .storage import BlobStore

router = APIRouter()


@router.post("/files", status_code=status.HTTP_201_CREATED)
async def upload_files(
    request: Request,
    store: BlobStore = Depends(get_blob_store),
) -> dict:
    """
    Upload one or more images/videos as multipart form parts (any field names).

    Images are re-encoded to JPEG under a generated name; the video replaces
    the single stored `video.mp4`.
    """
    form = await request.form()
    uploads = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]

    entries = await service.validate_uploads(uploads)
    prepared = await service.prepare_uploads(entries)
    stored = await service.store_uploads(prepared, store)
    return {
        "message": "Files uploaded and processed successfully",
        "files": [item.as_dict() for item in stored],
    }


@router.get("/files/{filename:path}")
async def serve_file(
    filename: str,
    store: BlobStore = Depends(get_blob_store),
) -> FileResponse:
    # `:path` so encoded separators reach the name guard instead of the router.
    path, content_type = service.resolve_file(filename, store)
    return FileResponse(path, media_type=content_type)
