"""FastAPI dependency injection functions.

Routes receive their collaborators from app state, so tests can build an app
around a temporary content directory and stand-in scripts.
"""

from fastapi import HTTPException, Request, status

from legalease.core.settings import Settings
from legalease.services.simplifier import SimplificationDispatcher
from legalease.services.storage import UploadStore


async def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_upload_store(request: Request) -> UploadStore:
    """Get upload store from app state.

    Raises:
        HTTPException: 503 if the store is not configured
    """
    store = getattr(request.app.state, "upload_store", None)

    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Upload storage unavailable",
        )

    return store


async def get_simplifier(request: Request) -> SimplificationDispatcher:
    """Get simplification dispatcher from app state.

    Raises:
        HTTPException: 503 if the dispatcher is not configured
    """
    simplifier = getattr(request.app.state, "simplifier", None)

    if simplifier is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document processing unavailable",
        )

    return simplifier
