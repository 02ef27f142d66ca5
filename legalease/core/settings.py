"""
Centralized application settings using Pydantic.

All environment variables are read once at startup and validated.
Use get_settings() instead of scattered os.getenv() calls throughout the codebase.
"""

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

# Path defaults assume a source checkout. Installed deployments set
# UPLOADS_DIR and SIMPLIFIER_SCRIPT explicitly.
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "https://legaleaseai-genai.web.app",
    "https://legaleaseai-genai.firebaseapp.com",
]


class Settings(BaseSettings):
    """General application settings."""

    APP_NAME: str = "LegalEase AI Backend"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = Field("development", validation_alias=AliasChoices("APP_ENV", "NODE_ENV"))
    HOST: str = "0.0.0.0"
    PORT: int = 10000

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    UPLOADS_DIR: Path = PROJECT_ROOT / "uploads"
    MAX_UPLOAD_SIZE_MB: int = 10
    ALLOWED_EXTENSIONS: list[str] = [".pdf", ".doc", ".docx", ".txt"]

    SIMPLIFIER_SCRIPT: Path = PROJECT_ROOT / "scripts" / "simple_legal_simplifier.py"
    PYTHON_EXECUTABLE: str = Field(default_factory=lambda: sys.executable)
    SIMPLIFY_TIMEOUT_SECONDS: float = 30.0
    KILL_GRACE_SECONDS: float = 2.0

    CORS_ORIGINS: list[str] = DEFAULT_CORS_ORIGINS

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.strip().lower() == "production"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def uploads_dir(self) -> Path:
        """Resolve the content directory to an absolute path."""
        return Path(self.UPLOADS_DIR).resolve()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
