"""Blob storage for product images uploaded through the API."""

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from src.exceptions import MediaError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"
CHUNK_SIZE = 64 * 1024


class ImageStorage:
    """Stores uploaded images under generated names in a local directory."""

    def __init__(self, directory: str | Path, max_bytes: int):
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    async def save(self, upload: UploadFile) -> str:
        """Validate and persist an uploaded image.

        Returns the relative reference ("/uploads/<filename>") to store on the
        product.
        """
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            logger.info(f"Rejected upload {upload.filename!r} with type {content_type!r}")
            raise MediaError.unsupported_type(content_type)

        data = await self._read_limited(upload)

        filename = self.generate_filename(upload.filename)
        self.directory.mkdir(parents=True, exist_ok=True)
        await run_in_threadpool((self.directory / filename).write_bytes, data)

        logger.info(f"Stored image {filename} ({len(data)} bytes)")
        return f"{UPLOAD_URL_PREFIX}{filename}"

    async def _read_limited(self, upload: UploadFile) -> bytes:
        """Read the upload, failing as soon as it exceeds the size ceiling."""
        chunks = []
        total = 0
        while chunk := await upload.read(CHUNK_SIZE):
            total += len(chunk)
            if total > self.max_bytes:
                logger.info(f"Rejected upload {upload.filename!r}: over {self.max_bytes} bytes")
                raise MediaError.too_large(self.max_bytes)
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def generate_filename(original_name: str | None) -> str:
        """Build a collision-resistant name: timestamp, random suffix, original extension."""
        extension = Path(original_name or "").suffix.lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"  # noqa: S311
        return f"product-{unique_suffix}{extension}"

    def delete(self, reference: str | None) -> None:
        """Remove a stored image. Missing files are ignored."""
        if not reference or not reference.startswith(UPLOAD_URL_PREFIX):
            return

        # Only the final path component is trusted
        path = self.directory / Path(reference).name
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete image {path}: {e}")
        else:
            logger.info(f"Deleted image {path.name}")
