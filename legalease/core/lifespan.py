from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks.

    uvicorn closes the listening socket on SIGINT/SIGTERM before the
    shutdown half runs.
    """
    settings = app.state.settings

    logger.info("Preparing uploads directory...")
    uploads_dir = app.state.upload_store.ensure_directory()
    logger.info(f"Uploads directory ready: {uploads_dir}")

    logger.info(
        f"🚀 {settings.APP_NAME} running on port {settings.PORT} "
        f"(environment: {settings.APP_ENV})"
    )

    yield

    logger.info("🛑 Shutting down server...")
    logger.info("✅ Server closed gracefully")
