"""
Typed records passed between the upload store, the dispatcher and the API.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StoredFile(BaseModel):
    """
    A file accepted by the upload handler and written to the content directory.

    Immutable once created; removal is left to manual cleanup.
    """

    model_config = ConfigDict(frozen=True)

    generated_name: str
    original_name: str
    absolute_path: str
    size_bytes: int
    mime_type: str
    stored_at: datetime


class ProcessingResult(BaseModel):
    """
    Outcome of one run of the external simplifier that exited on its own.

    ``output`` is set only on success, ``error_detail`` only on failure.
    """

    success: bool
    processed_file_name: str
    output: str | None = None
    error_detail: str | None = None
    exit_code: int | None = None
