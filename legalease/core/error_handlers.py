import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from legalease.api.schemas import ErrorResponse
from legalease.core.exceptions import BaseError, RequestValidationFailed
from legalease.core.utils import ensure_trace_id, utc_now_iso

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "/",
    "/health",
    "/documents",
    "/documents/list",
    "/documents/upload",
    "/documents/simplify",
]


def _error_response(exc: BaseError, trace_id: str) -> JSONResponse:
    problem = ErrorResponse(**exc.to_dict())
    return JSONResponse(
        status_code=exc.http_status,
        content=problem.model_dump(exclude_none=True),
        headers={"X-Trace-ID": trace_id},
    )


async def handle_app_error(request: Request, exc: BaseError):
    """Handler for application-specific BaseErrors."""
    trace_id = ensure_trace_id(request)

    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        "Application error: %s",
        exc.error,
        extra={
            "trace_id": trace_id,
            "error_code": exc.error_code,
            "path": request.url.path,
            "http_status": exc.http_status,
            "category": exc.category.value,
            "retryable": exc.retryable,
        },
    )

    return _error_response(exc, trace_id)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handler for FastAPI/Pydantic request validation errors (malformed bodies)."""
    trace_id = ensure_trace_id(request)

    first_error = exc.errors()[0] if exc.errors() else {}
    loc = first_error.get("loc", [])
    field = ".".join(str(loc_part) for loc_part in loc if loc_part != "body")
    msg = first_error.get("msg", "Validation failed")
    detail = f"{field}: {msg}" if field else msg

    logger.warning(
        f"Validation error: {detail}",
        extra={"trace_id": trace_id, "path": request.url.path},
    )

    return _error_response(RequestValidationFailed(detail, field or None), trace_id)


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    """Handler for standard HTTP exceptions.

    Unmatched routes and unmatched methods both answer 404 with the list of
    known endpoints.
    """
    trace_id = ensure_trace_id(request)

    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        logger.warning(
            "Route not found",
            extra={"trace_id": trace_id, "path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Route not found",
                "path": str(request.url.path),
                "message": "The requested endpoint does not exist",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
                "timestamp": utc_now_iso(),
            },
            headers={"X-Trace-ID": trace_id},
        )

    logger.warning(
        "HTTP exception",
        extra={"trace_id": trace_id, "http_status": exc.status_code},
    )

    problem = ErrorResponse(
        error=str(exc.detail),
        code=f"HTTP_{exc.status_code}",
        message=str(exc.detail),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers={"X-Trace-ID": trace_id},
    )


async def handle_unknown_error(request: Request, exc: Exception):
    """Handler for unexpected 500 errors."""
    trace_id = ensure_trace_id(request)

    logger.exception(
        "Unexpected error occurred",
        extra={
            "trace_id": trace_id,
            "path": request.url.path,
            "error_code": type(exc).__name__,
        },
    )

    settings = request.app.state.settings
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "Something went wrong" if settings.is_production else str(exc),
            "timestamp": utc_now_iso(),
        },
        headers={"X-Trace-ID": trace_id},
    )
