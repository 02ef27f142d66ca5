"""FastAPI application entry point."""

from dotenv import load_dotenv

load_dotenv()

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from legalease.api.routes import documents, root
from legalease.core.error_handlers import (
    handle_app_error,
    handle_http_error,
    handle_unknown_error,
    handle_validation_error,
)
from legalease.core.exceptions import BaseError
from legalease.core.lifespan import lifespan
from legalease.core.logging_config import configure_structured_logging
from legalease.core.middleware import trace_id_middleware
from legalease.core.openapi import custom_openapi
from legalease.core.settings import Settings, get_settings
from legalease.core.validation import validate_all_settings
from legalease.services.simplifier import SimplificationDispatcher
from legalease.services.storage import UploadStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    configure_structured_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    # Validate environment before starting application
    validate_all_settings(settings)

    app = FastAPI(
        title="LegalEase AI Backend",
        version=settings.APP_VERSION,
        description="Uploads legal documents and hands them to the simplifier",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.upload_store = UploadStore(settings.uploads_dir)
    app.state.simplifier = SimplificationDispatcher(
        script_path=settings.SIMPLIFIER_SCRIPT,
        python_executable=settings.PYTHON_EXECUTABLE,
        timeout_seconds=settings.SIMPLIFY_TIMEOUT_SECONDS,
        kill_grace_seconds=settings.KILL_GRACE_SECONDS,
    )

    # Custom OpenAPI
    app.openapi = lambda: custom_openapi(app)

    # 1. Register Middleware
    app.middleware("http")(trace_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Trace-ID"],
    )

    # 2. Register Exception Handlers
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(BaseError, handle_app_error)
    app.add_exception_handler(Exception, handle_unknown_error)

    # Routes
    app.include_router(root.router)
    app.include_router(documents.router)

    return app


app = create_app()
