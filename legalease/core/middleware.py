"""Request tracing middleware."""

import logging
import time

from fastapi import Request

from legalease.core.utils import ensure_trace_id

logger = logging.getLogger(__name__)


async def trace_id_middleware(request: Request, call_next):
    """Ensure every request has a trace ID in state and response headers."""
    trace_id = ensure_trace_id(request)
    start = time.perf_counter()

    response = await call_next(request)

    response.headers["X-Trace-ID"] = trace_id
    logger.info(
        "%s %s -> %d",
        request.method,
        request.url.path,
        response.status_code,
        extra={
            "trace_id": trace_id,
            "method": request.method,
            "path": request.url.path,
            "http_status": response.status_code,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        },
    )
    return response
