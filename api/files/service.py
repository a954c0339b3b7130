"""
File "service layer".

This file contains logic that is independent of FastAPI's routing layer:
- Classify uploads by declared media type and enforce size ceilings
- Re-encode every image to JPEG before anything is written
- Store the single video
- Resolve a requested name to a file on disk
"""

from __future__ import annotations

import io
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from fastapi import HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from PIL import Image, UnidentifiedImageError

from .storage import VIDEO_FILENAME, BlobStore, content_type_for, is_safe_name

IMAGE = "image"
VIDEO = "video"

MAX_BYTES = {
    IMAGE: 50 * 1024 * 1024,  # 50 MiB
    VIDEO: 1024 * 1024 * 1024,  # 1 GiB
}
MAX_LABELS = {IMAGE: "50MB", VIDEO: "1GB"}

JPEG_QUALITY = 80
IMAGE_CONTENT_TYPE = "image/jpeg"
VIDEO_CONTENT_TYPE = "video/mp4"

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    pass


@dataclass(frozen=True)
class UploadEntry:
    upload: UploadFile
    filename: str
    media_kind: str
    size_bytes: int


@dataclass(frozen=True)
class PreparedUpload:
    entry: UploadEntry
    # Final bytes to store: re-encoded JPEG for images, raw for videos.
    data: bytes


@dataclass(frozen=True)
class StoredFile:
    name: str
    size: int
    type: str

    def as_dict(self) -> dict:
        return asdict(self)


def classify(content_type: str | None) -> str | None:
    media_type = (content_type or "").strip().lower()
    if media_type.startswith("image/"):
        return IMAGE
    if media_type.startswith("video/"):
        return VIDEO
    return None


async def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return int(upload.size)
    data = await upload.read()
    await upload.seek(0)
    return len(data)


async def validate_uploads(uploads: list[UploadFile]) -> list[UploadEntry]:
    """
    Check every upload before anything is written; the first bad entry aborts the request.
    """
    entries: list[UploadEntry] = []
    for upload in uploads:
        filename = upload.filename or ""
        media_kind = classify(upload.content_type)
        if media_kind is None:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid file type for {filename}. Only image and video files are allowed.",
            )

        size_bytes = await _upload_size(upload)
        if size_bytes > MAX_BYTES[media_kind]:
            raise HTTPException(
                status_code=400,
                detail=f"File {filename} exceeds the {MAX_LABELS[media_kind]} limit.",
            )

        entries.append(
            UploadEntry(upload=upload, filename=filename, media_kind=media_kind, size_bytes=size_bytes)
        )
    return entries


def reencode_image(data: bytes, *, quality: int = JPEG_QUALITY) -> bytes:
    """
    Decode any Pillow-readable image and return it as baseline JPEG bytes.

    JPEG has no alpha channel, so everything is flattened to RGB first.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgb = img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageDecodeError(str(exc)) from exc

    out = io.BytesIO()
    rgb.save(out, format="JPEG", quality=quality)
    return out.getvalue()


async def prepare_uploads(entries: list[UploadEntry]) -> list[PreparedUpload]:
    """
    Read every part and re-encode every image. Nothing touches the Blob Store
    here, so an unreadable image rejects the request before any write.
    """
    prepared: list[PreparedUpload] = []
    for entry in entries:
        data = await entry.upload.read()
        if entry.media_kind == IMAGE:
            try:
                data = await run_in_threadpool(reencode_image, data)
            except ImageDecodeError as exc:
                raise HTTPException(
                    status_code=400,
                    detail=f"File {entry.filename} is not a readable image.",
                ) from exc
        # Pass-through storage: videos are not transcoded.
        prepared.append(PreparedUpload(entry=entry, data=data))
    return prepared


async def _store_prepared(item: PreparedUpload, store: BlobStore) -> StoredFile:
    if item.entry.media_kind == IMAGE:
        name, size = await store.write_image(item.data)
        return StoredFile(name=name, size=size, type=IMAGE_CONTENT_TYPE)

    size = await store.replace_video(item.data)
    return StoredFile(name=VIDEO_FILENAME, size=size, type=VIDEO_CONTENT_TYPE)


async def store_uploads(prepared: list[PreparedUpload], store: BlobStore) -> list[StoredFile]:
    stored: list[StoredFile] = []
    for item in prepared:
        entry = item.entry
        try:
            stored_file = await _store_prepared(item, store)
        except OSError as exc:
            logger.exception("file_store_failed filename=%s kind=%s", entry.filename, entry.media_kind)
            raise HTTPException(
                status_code=500,
                detail=f"Failed to process file {entry.filename}",
            ) from exc

        logger.info(
            "file_stored original=%s name=%s size=%s",
            entry.filename,
            stored_file.name,
            stored_file.size,
        )
        stored.append(stored_file)
    return stored


def resolve_file(filename: str, store: BlobStore) -> tuple[Path, str]:
    """
    Return (path, content_type) for a servable file or raise 400/404.
    """
    if filename == VIDEO_FILENAME:
        path = store.video_path
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Video file not found")
        return path, VIDEO_CONTENT_TYPE

    if not is_safe_name(filename):
        raise HTTPException(status_code=400, detail="Invalid filename")

    path = store.path_for(filename)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return path, content_type_for(filename)
