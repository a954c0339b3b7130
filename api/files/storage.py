"""
Blob Store: the filesystem directory holding uploaded media.

Files are addressed by flat names only. Images get fresh generated names;
there is exactly one video, always stored as `video.mp4`.
"""

from __future__ import annotations

import asyncio
import os
import secrets
import tempfile
import time
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

VIDEO_FILENAME = "video.mp4"
IMAGE_EXTENSION = ".jpg"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogg": "video/ogg",
    ".avi": "video/x-msvideo",
    ".mov": "video/quicktime",
    ".wmv": "video/x-ms-wmv",
    ".flv": "video/x-flv",
    ".mkv": "video/x-matroska",
}


def content_type_for(filename: str) -> str:
    return CONTENT_TYPES.get(Path(filename).suffix.lower(), DEFAULT_CONTENT_TYPE)


def is_safe_name(name: str) -> bool:
    """
    True for a plain file name with no parent-directory or separator tokens.
    """
    if not name or name.strip() != name:
        return False
    return ".." not in name and "/" not in name and "\\" not in name


def generate_image_name() -> str:
    # <epoch millis>-<8 hex chars>.jpg
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{IMAGE_EXTENSION}"


def _atomic_write(path: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class BlobStore:
    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        # Serializes video replacement within this process.
        self._video_lock = asyncio.Lock()

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.directory / name

    @property
    def video_path(self) -> Path:
        return self.path_for(VIDEO_FILENAME)

    def exists(self, name: str) -> bool:
        if not is_safe_name(name):
            return False
        return self.path_for(name).is_file()

    async def write_image(self, data: bytes) -> tuple[str, int]:
        """
        Store already-encoded image bytes under a fresh name.

        Returns (name, size_bytes).
        """
        name = generate_image_name()
        path = self.path_for(name)
        await run_in_threadpool(path.write_bytes, data)
        return name, path.stat().st_size

    async def replace_video(self, data: bytes) -> int:
        """
        Overwrite the single video. Readers see either the old or the new file.
        """
        async with self._video_lock:
            await run_in_threadpool(_atomic_write, self.video_path, data)
            return self.video_path.stat().st_size
