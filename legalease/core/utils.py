import time
import uuid
from datetime import datetime, timezone

from fastapi import Request

PROCESS_STARTED_AT = time.monotonic()


def ensure_trace_id(request: Request) -> str:
    """Ensure trace_id exists on request state."""
    trace_id = getattr(request.state, "trace_id", None)
    if not trace_id:
        trace_id = str(uuid.uuid4())
        request.state.trace_id = trace_id
    return trace_id


def iso_timestamp(moment: datetime) -> str:
    """Format a UTC datetime as ``2024-01-01T00:00:00.000Z``, the form clients expect."""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return iso_timestamp(datetime.now(timezone.utc))


def uptime_seconds() -> float:
    return time.monotonic() - PROCESS_STARTED_AT
