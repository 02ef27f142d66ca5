"""Document upload, demo listing and simplification endpoints."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from legalease.api.file_validation import ensure_single_file, validate_upload_file
from legalease.api.schemas import (
    ErrorResponse,
    SimplifyRequest,
    SimplifyResponse,
    UploadResponse,
)
from legalease.core.dependencies import get_app_settings, get_simplifier, get_upload_store
from legalease.core.exceptions import (
    BaseError,
    MissingFilePathError,
    ProcessingFailedError,
    UnexpectedProcessingError,
    UploadFailedError,
)
from legalease.core.settings import Settings
from legalease.core.utils import iso_timestamp, utc_now_iso
from legalease.services.mappers import build_simplify_response, build_upload_response
from legalease.services.simplifier import SimplificationDispatcher
from legalease.services.storage import UploadStore

router = APIRouter(prefix="/documents", tags=["documents"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"description": "Validation Error", "model": ErrorResponse},
    500: {"description": "Server Error", "model": ErrorResponse},
}


@router.get("")
async def documents_info(settings: Settings = Depends(get_app_settings)):
    return {
        "message": "Documents API is working perfectly!",
        "version": settings.APP_VERSION,
        "endpoints": [
            "GET /documents - This endpoint",
            "POST /documents/upload - Upload documents",
            "POST /documents/simplify - Simplify an uploaded document",
            "GET /documents/list - List documents",
            "GET /documents/health - Service health",
        ],
        "timestamp": utc_now_iso(),
    }


@router.get("/health")
async def documents_health():
    return {
        "service": "documents",
        "status": "healthy",
        "timestamp": utc_now_iso(),
        "features": ["upload", "list", "process"],
    }


@router.get("/list")
async def list_documents():
    """Fixed demo listing; not backed by the content directory."""
    now = datetime.now(timezone.utc)
    documents = [
        {
            "id": "doc-001",
            "name": "Sample Legal Document.pdf",
            "uploadedAt": iso_timestamp(now),
            "status": "processed",
            "type": "legal",
            "size": "2.3 MB",
        },
        {
            "id": "doc-002",
            "name": "Contract Agreement.pdf",
            "uploadedAt": iso_timestamp(now - timedelta(hours=1)),
            "status": "uploaded",
            "type": "contract",
            "size": "1.8 MB",
        },
        {
            "id": "doc-003",
            "name": "Terms of Service.docx",
            "uploadedAt": iso_timestamp(now - timedelta(hours=2)),
            "status": "processing",
            "type": "terms",
            "size": "950 KB",
        },
    ]
    return {
        "success": True,
        "documents": documents,
        "count": len(documents),
        "timestamp": utc_now_iso(),
    }


@router.post("/upload", response_model=UploadResponse, responses=ERROR_RESPONSES)
async def upload_document(
    request: Request,
    file: Optional[UploadFile] = File(None, description="PDF, DOC, DOCX or TXT file"),
    settings: Settings = Depends(get_app_settings),
    store: UploadStore = Depends(get_upload_store),
):
    trace_id = getattr(request.state, "trace_id", None)

    form = await request.form()
    ensure_single_file(form.getlist("file"))

    validate_upload_file(
        file,
        allowed_extensions=settings.ALLOWED_EXTENSIONS,
        max_size_bytes=settings.max_upload_size_bytes,
    )

    try:
        stored = await store.save(file)
    except OSError as e:
        logger.error(
            "Upload error: %s", e, exc_info=True, extra={"trace_id": trace_id}
        )
        message = "Unable to store the uploaded file" if settings.is_production else str(e)
        raise UploadFailedError(message) from e
    finally:
        await file.close()

    return build_upload_response(stored)


@router.post(
    "/simplify",
    response_model=SimplifyResponse,
    responses={
        **ERROR_RESPONSES,
        404: {"description": "File not found", "model": ErrorResponse},
        408: {"description": "Processing timeout", "model": ErrorResponse},
    },
)
async def simplify_document(
    request: Request,
    body: Optional[SimplifyRequest] = None,
    simplifier: SimplificationDispatcher = Depends(get_simplifier),
):
    trace_id = getattr(request.state, "trace_id", None)

    file_path = ((body.file_path if body else None) or "").strip()
    if not file_path:
        raise MissingFilePathError()

    try:
        result = await simplifier.simplify(file_path)
    except BaseError:
        raise
    except Exception as e:
        logger.error(
            "Simplification error: %s", e, exc_info=True, extra={"trace_id": trace_id}
        )
        raise UnexpectedProcessingError(str(e)) from e

    if not result.success:
        raise ProcessingFailedError(result.error_detail, exit_code=result.exit_code)

    return build_simplify_response(result)
