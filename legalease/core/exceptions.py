"""Custom exception hierarchy for the LegalEase backend.

All exceptions inherit from BaseError and carry everything the API layer needs
to render the JSON error envelope: a stable machine-readable code, the short
``error`` label clients switch on, a human message and the HTTP status.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """Error categories for classification and monitoring."""

    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    EXTERNAL_PROCESS = "external_process"
    VALIDATION = "validation"


class BaseError(Exception):
    """Base exception for all LegalEase errors.

    Attributes:
        message: Human-readable error message
        error: Short stable label returned as the ``error`` field
        error_code: Application-specific error code
        category: Error category for classification
        http_status: HTTP status code to return
        details: Additional context (dict); ``details["detail"]`` is exposed
        retryable: Whether the client may retry the request
    """

    def __init__(
        self,
        message: str,
        error: str,
        error_code: str,
        category: ErrorCategory,
        http_status: int,
        details: Optional[dict[str, Any]] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error = error
        self.error_code = error_code
        self.category = category
        self.http_status = http_status
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API error envelope.

        Only ``details["detail"]`` leaves the process; the rest of ``details``
        is for logs.
        """
        return {
            "success": False,
            "error": self.error,
            "code": self.error_code,
            "message": self.message,
            "details": self.details.get("detail"),
        }


class ClientError(BaseError):
    """Base for client errors (4xx). Never retryable."""

    def __init__(self, message: str, error: str, error_code: str, **kwargs):
        super().__init__(
            message=message,
            error=error,
            error_code=error_code,
            category=kwargs.pop("category", ErrorCategory.CLIENT_ERROR),
            http_status=kwargs.pop("http_status", 400),
            retryable=False,
            **kwargs,
        )


class NoFileUploadedError(ClientError):
    """Upload request carried no ``file`` part."""

    def __init__(self):
        super().__init__(
            message="Please select a file to upload",
            error="No file uploaded",
            error_code="NO_FILE_UPLOADED",
        )


class UnsupportedFileTypeError(ClientError):
    """File extension is not on the allow-list.

    Args:
        extension: Lower-cased extension of the rejected file
        allowed: Extensions that would have been accepted
    """

    def __init__(self, extension: str, allowed: list[str]):
        super().__init__(
            message="Only PDF, DOC, DOCX, and TXT files are allowed!",
            error="Upload error",
            error_code="UNSUPPORTED_FILE_TYPE",
            category=ErrorCategory.VALIDATION,
            details={"extension": extension, "allowed_extensions": allowed},
        )


class FileTooLargeError(ClientError):
    """Uploaded file exceeds the size ceiling.

    Args:
        max_size_mb: Maximum allowed size in MB
        actual_size_bytes: Size of the rejected upload
    """

    def __init__(self, max_size_mb: int, actual_size_bytes: int):
        super().__init__(
            message=f"File size must be less than {max_size_mb}MB",
            error="File too large",
            error_code="FILE_TOO_LARGE",
            category=ErrorCategory.VALIDATION,
            details={
                "max_size_mb": max_size_mb,
                "actual_size_bytes": actual_size_bytes,
            },
        )


class UnexpectedFileFieldError(ClientError):
    """More than one file part was sent under the upload field."""

    def __init__(self, field_name: str, part_count: int):
        super().__init__(
            message="Only one file can be uploaded per request",
            error="Upload error",
            error_code="LIMIT_UNEXPECTED_FILE",
            category=ErrorCategory.VALIDATION,
            details={"field": field_name, "part_count": part_count},
        )


class MissingFilePathError(ClientError):
    """Simplify request did not name a file."""

    def __init__(self):
        super().__init__(
            message="Please provide a valid file path",
            error="No file path provided",
            error_code="FILE_PATH_REQUIRED",
            category=ErrorCategory.VALIDATION,
        )


class DocumentNotFoundError(ClientError):
    """Requested file path does not exist on disk (404)."""

    def __init__(self, file_path: str):
        super().__init__(
            message="The specified file does not exist",
            error="File not found",
            error_code="FILE_NOT_FOUND",
            http_status=404,
            details={"file_path": file_path},
        )


class RequestValidationFailed(ClientError):
    """Request body or form failed schema validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            error="Validation error",
            error_code="VALIDATION_ERROR",
            category=ErrorCategory.VALIDATION,
            details={"field": field},
        )


class ServerError(BaseError):
    """Base for server errors (5xx)."""

    def __init__(self, message: str, error: str, error_code: str, **kwargs):
        super().__init__(
            message=message,
            error=error,
            error_code=error_code,
            category=kwargs.pop("category", ErrorCategory.SERVER_ERROR),
            http_status=kwargs.pop("http_status", 500),
            retryable=kwargs.pop("retryable", False),
            **kwargs,
        )


class UploadFailedError(ServerError):
    """Persisting an accepted upload failed.

    Args:
        message: Cause text; callers pass a generic text in production
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error="Upload failed",
            error_code="UPLOAD_FAILED",
        )


class ScriptNotFoundError(ServerError):
    """The external processing program is not installed where expected."""

    def __init__(self, script_path: str):
        super().__init__(
            message="Document processing is temporarily unavailable",
            error="Processing script not found",
            error_code="PROCESSING_UNAVAILABLE",
            details={"script_path": script_path},
        )


class ProcessingFailedError(ServerError):
    """External program exited non-zero or printed nothing.

    Args:
        detail: Captured stderr text, exposed to the client as ``details``
        exit_code: Exit status of the child process
    """

    def __init__(self, detail: str, exit_code: Optional[int] = None):
        super().__init__(
            message="Unable to process the document. Please try again.",
            error="Processing failed",
            error_code="PROCESSING_FAILED",
            category=ErrorCategory.EXTERNAL_PROCESS,
            details={"detail": detail, "exit_code": exit_code},
        )


class ProcessingTimeoutError(ServerError):
    """External program did not exit before the deadline (408)."""

    def __init__(self, timeout_seconds: float):
        super().__init__(
            message="Document processing took too long. Please try again.",
            error="Processing timeout",
            error_code="PROCESSING_TIMEOUT",
            category=ErrorCategory.EXTERNAL_PROCESS,
            http_status=408,
            retryable=True,
            details={"timeout_seconds": timeout_seconds},
        )


class UnexpectedProcessingError(ServerError):
    """Dispatcher failed for a reason other than the external program's outcome."""

    def __init__(self, reason: str):
        super().__init__(
            message="An unexpected error occurred during processing",
            error="Processing failed",
            error_code="PROCESSING_ERROR",
            details={"reason": reason},
        )
