"""Liveness, process health and diagnostic endpoints."""

import os

import psutil
from fastapi import APIRouter, Depends

from legalease.core.dependencies import get_app_settings
from legalease.core.settings import Settings
from legalease.core.utils import uptime_seconds, utc_now_iso

router = APIRouter(tags=["health"])


def _memory_usage() -> dict:
    info = psutil.Process().memory_info()
    return {"rss": info.rss, "vms": info.vms}


@router.get("/")
async def root(settings: Settings = Depends(get_app_settings)):
    return {
        "message": f"{settings.APP_NAME} is running successfully!",
        "status": "healthy",
        "timestamp": utc_now_iso(),
        "version": settings.APP_VERSION,
        "endpoints": [
            "GET / - This health check",
            "GET /health - System health",
            "GET /documents - Documents API info",
            "GET /documents/list - List documents",
            "POST /documents/upload - Upload documents",
            "POST /documents/simplify - Simplify an uploaded document",
        ],
    }


@router.get("/health")
async def health(settings: Settings = Depends(get_app_settings)):
    return {
        "status": "healthy",
        "uptime": uptime_seconds(),
        "timestamp": utc_now_iso(),
        "memory": _memory_usage(),
        "pid": os.getpid(),
        "environment": settings.APP_ENV,
    }


@router.get("/api/test", tags=["diagnostics"])
async def api_test():
    return {
        "message": "API test successful!",
        "timestamp": utc_now_iso(),
        "status": "working",
    }
