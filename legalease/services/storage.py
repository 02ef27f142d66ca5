import logging
import mimetypes
import random
import time
from datetime import datetime, timezone
from pathlib import Path

from fastapi import UploadFile

from legalease.services.models import StoredFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
DEFAULT_MIME_TYPE = "application/octet-stream"


def generate_filename(field_name: str, original_name: str) -> str:
    """
    Build a collision-resistant name: ``<field>-<epoch ms>-<random>.<ext>``.

    The original extension is kept as sent. Concurrent uploads are kept
    apart only by the timestamp and the random suffix; there is no locking.
    """
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field_name}-{unique_suffix}{Path(original_name).suffix}"


class UploadStore:
    """Writes accepted uploads into the content directory."""

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def ensure_directory(self) -> Path:
        self.content_dir.mkdir(parents=True, exist_ok=True)
        return self.content_dir

    async def save(self, file: UploadFile, field_name: str = "file") -> StoredFile:
        """
        Persist an already validated upload under a generated name.

        Returns:
            StoredFile describing what was written

        Raises:
            OSError: If the directory or the file cannot be written
        """
        self.ensure_directory()
        generated_name = generate_filename(field_name, file.filename)
        destination = (self.content_dir / generated_name).resolve()

        size = 0
        await file.seek(0)
        try:
            with open(destination, "wb") as out:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    size += len(chunk)
        except OSError:
            # A truncated upload must not be left behind for /simplify to pick up.
            destination.unlink(missing_ok=True)
            raise

        mime_type = (
            file.content_type
            or mimetypes.guess_type(file.filename)[0]
            or DEFAULT_MIME_TYPE
        )

        logger.info(
            "Stored upload %s as %s",
            file.filename,
            generated_name,
            extra={"file_name": generated_name, "size_bytes": size},
        )

        return StoredFile(
            generated_name=generated_name,
            original_name=file.filename,
            absolute_path=str(destination),
            size_bytes=size,
            mime_type=mime_type,
            stored_at=datetime.now(timezone.utc),
        )
