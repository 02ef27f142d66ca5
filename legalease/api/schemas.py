"""Pydantic request/response schemas for API endpoints.

Fields are snake_case in Python and camelCase on the wire, matching what the
web frontend already consumes.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error envelope returned for every handled failure."""

    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(..., description="Short stable error label")
    code: str = Field(..., description="Application-specific error code")
    message: str = Field(..., description="Human-readable explanation")
    details: Optional[str] = Field(
        None, description="Diagnostic text, e.g. captured stderr of the processor"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Processing failed",
                "code": "PROCESSING_FAILED",
                "message": "Unable to process the document. Please try again.",
                "details": "Traceback (most recent call last): ...",
            }
        }
    )


class UploadData(CamelModel):
    upload_id: str = Field(..., description="Synthetic time-based upload identifier")
    filename: str = Field(..., description="Generated name on disk")
    original_name: str = Field(..., description="Filename as sent by the client")
    file_path: str = Field(..., description="Absolute storage path; pass to /simplify")
    size: int = Field(..., description="Stored size in bytes")
    mimetype: str = Field(..., description="MIME type reported by the client")
    uploaded_at: str = Field(..., description="ISO-8601 UTC timestamp")


class UploadResponse(CamelModel):
    """Response from the upload endpoint."""

    success: bool = True
    message: str = "File uploaded successfully!"
    data: UploadData
    next_steps: List[str] = Field(
        default_factory=lambda: ["Text extraction", "Legal analysis", "Simplification"]
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "File uploaded successfully!",
                "data": {
                    "uploadId": "upload-1718000000000",
                    "filename": "file-1718000000000-123456789.pdf",
                    "originalName": "contract.pdf",
                    "filePath": "/srv/legalease/uploads/file-1718000000000-123456789.pdf",
                    "size": 48213,
                    "mimetype": "application/pdf",
                    "uploadedAt": "2024-06-10T06:13:20.000Z",
                },
                "nextSteps": ["Text extraction", "Legal analysis", "Simplification"],
            }
        }
    )


class SimplifyRequest(CamelModel):
    """Request naming a previously uploaded file.

    ``filePath`` is optional at the schema level so that a missing value
    yields the ``No file path provided`` error instead of a generic
    validation failure.
    """

    file_path: Optional[str] = Field(
        None, description="Path returned as data.filePath by /documents/upload"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "filePath": "/srv/legalease/uploads/file-1718000000000-123456789.txt"
            }
        }
    )


class SimplifyResponse(CamelModel):
    """Response from a successful simplification run."""

    success: bool = True
    message: str = "Document processed successfully!"
    output: str = Field(..., description="Trimmed stdout of the processor")
    processed_at: str = Field(..., description="ISO-8601 UTC timestamp")
    file_processed: str = Field(..., description="Base name of the processed file")
