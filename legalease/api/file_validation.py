"""File upload validation utilities.

Extension and size checks run before anything touches the content directory,
so a rejected upload never leaves a file behind.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from legalease.core.exceptions import (
    FileTooLargeError,
    NoFileUploadedError,
    UnexpectedFileFieldError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)


def _get_file_size(file: UploadFile) -> int:
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


def _get_extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_upload_file(
    file: Optional[UploadFile],
    allowed_extensions: list[str],
    max_size_bytes: int,
) -> int:
    """Validate an uploaded file's presence, extension and size.

    Args:
        file: FastAPI UploadFile object, or None if the form had no file part
        allowed_extensions: Lower-case extensions including the dot
        max_size_bytes: Inclusive size ceiling

    Returns:
        Size of the upload in bytes

    Raises:
        NoFileUploadedError: If no file (or a nameless part) was sent
        UnsupportedFileTypeError: If the extension is not allowed
        FileTooLargeError: If the file exceeds max_size_bytes
    """
    if file is None or not file.filename:
        raise NoFileUploadedError()

    extension = _get_extension(file.filename)
    if extension not in allowed_extensions:
        logger.warning("Rejected upload %s: extension %r", file.filename, extension)
        raise UnsupportedFileTypeError(extension, allowed_extensions)

    file_size = _get_file_size(file)
    if file_size > max_size_bytes:
        logger.warning("Rejected upload %s: %d bytes", file.filename, file_size)
        raise FileTooLargeError(
            max_size_mb=max_size_bytes // (1024 * 1024),
            actual_size_bytes=file_size,
        )

    logger.info(
        "File validated: ext=%s size=%d content_type=%s",
        extension,
        file_size,
        file.content_type,
    )
    return file_size


def ensure_single_file(parts: list, field_name: str = "file") -> None:
    """Reject forms that carry several parts under the upload field."""
    if len(parts) > 1:
        logger.warning("Rejected upload: %d parts under %r", len(parts), field_name)
        raise UnexpectedFileFieldError(field_name, len(parts))
