"""Response mapping utilities for API endpoints."""

import time

from legalease.api.schemas import SimplifyResponse, UploadData, UploadResponse
from legalease.core.utils import utc_now_iso
from legalease.services.models import ProcessingResult, StoredFile


def build_upload_response(stored: StoredFile) -> UploadResponse:
    """Map a StoredFile to the upload endpoint's response."""
    return UploadResponse(
        data=UploadData(
            upload_id=f"upload-{int(time.time() * 1000)}",
            filename=stored.generated_name,
            original_name=stored.original_name,
            file_path=stored.absolute_path,
            size=stored.size_bytes,
            mimetype=stored.mime_type,
            uploaded_at=utc_now_iso(),
        )
    )


def build_simplify_response(result: ProcessingResult) -> SimplifyResponse:
    """Map a successful ProcessingResult to the simplify endpoint's response."""
    return SimplifyResponse(
        output=result.output,
        processed_at=utc_now_iso(),
        file_processed=result.processed_file_name,
    )
