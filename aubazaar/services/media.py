"""
Media intake - validates uploaded images and stores them under a public directory.
Both the file extension and the declared content type must be on the allow-list;
a batch is validated in full before any file is written.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from aubazaar.core.exceptions import InvalidInput, PayloadTooLarge

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}
READ_CHUNK = 64 * 1024


@dataclass
class _Accepted:
    data: bytes
    extension: str


class MediaStore:
    """Stores accepted images as <field>-<uuid><ext> and returns their public paths."""

    def __init__(self, upload_dir: str | Path, url_path: str = "/uploads", max_bytes: int = 5 * 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.url_path = url_path.rstrip("/")
        self.max_bytes = max_bytes

    def ensure_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def _read_checked(self, upload: UploadFile) -> _Accepted:
        filename = upload.filename or ""
        extension = Path(filename).suffix.lower()
        content_type = (upload.content_type or "").lower()
        if extension not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidInput("Only image files are allowed!")

        # Read at most max_bytes + 1 so oversized uploads are rejected without buffering them whole
        chunks: list[bytes] = []
        size = 0
        while True:
            chunk = await upload.read(READ_CHUNK)
            if not chunk:
                break
            size += len(chunk)
            if size > self.max_bytes:
                raise PayloadTooLarge(
                    f"File upload error: {filename} exceeds {self.max_bytes // (1024 * 1024)}MB limit"
                )
            chunks.append(chunk)
        return _Accepted(data=b"".join(chunks), extension=extension)

    def _write(self, name: str, data: bytes) -> None:
        self.ensure_dir()
        (self.upload_dir / name).write_bytes(data)

    async def save_many(self, uploads: list[UploadFile], field: str = "images") -> list[str]:
        """Validate every upload, then store them in order. Returns one public path per file."""
        accepted = [await self._read_checked(u) for u in uploads]
        paths = []
        for item in accepted:
            name = f"{field}-{uuid.uuid4().hex}{item.extension}"
            await run_in_threadpool(self._write, name, item.data)
            paths.append(f"{self.url_path}/{name}")
        if paths:
            logger.info("stored %d %s upload(s)", len(paths), field)
        return paths

    async def save(self, upload: UploadFile, field: str = "images") -> str:
        paths = await self.save_many([upload], field=field)
        return paths[0]
