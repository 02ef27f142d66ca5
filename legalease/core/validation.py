"""Application startup validation checks.

Validates critical settings before the application starts serving requests.
Settings classes define data, this module validates behavior.
"""

import logging

from legalease.core.settings import Settings

logger = logging.getLogger(__name__)


def validate_all_settings(settings: Settings) -> None:
    """Validate all critical settings at application startup.

    The application fails fast if the environment is misconfigured,
    rather than on the first upload or simplify request.

    Raises:
        RuntimeError: If any critical setting is invalid
    """
    problems = []

    if not (1 <= settings.PORT <= 65535):
        problems.append(f"  - PORT must be 1-65535, got {settings.PORT}")

    if settings.SIMPLIFY_TIMEOUT_SECONDS <= 0:
        problems.append(
            f"  - SIMPLIFY_TIMEOUT_SECONDS must be positive, "
            f"got {settings.SIMPLIFY_TIMEOUT_SECONDS}"
        )

    if settings.KILL_GRACE_SECONDS < 0:
        problems.append(
            f"  - KILL_GRACE_SECONDS cannot be negative, got {settings.KILL_GRACE_SECONDS}"
        )

    if settings.MAX_UPLOAD_SIZE_MB <= 0:
        problems.append(
            f"  - MAX_UPLOAD_SIZE_MB must be positive, got {settings.MAX_UPLOAD_SIZE_MB}"
        )

    bad_extensions = [e for e in settings.ALLOWED_EXTENSIONS if not e.startswith(".")]
    if not settings.ALLOWED_EXTENSIONS or bad_extensions:
        problems.append(
            f"  - ALLOWED_EXTENSIONS must be a non-empty list of '.ext' values, "
            f"got {settings.ALLOWED_EXTENSIONS}"
        )

    if not settings.PYTHON_EXECUTABLE.strip():
        problems.append("  - PYTHON_EXECUTABLE (required to run the simplifier)")

    if problems:
        error_msg = "❌ Invalid settings:\n" + "\n".join(problems)
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if not settings.SIMPLIFIER_SCRIPT.exists():
        # Not fatal: /documents/simplify answers 500 until the script is installed.
        logger.warning(f"Simplifier script not found at {settings.SIMPLIFIER_SCRIPT}")

    logger.info("✅ All critical settings validated successfully")
    logger.info(f"  - Environment: {settings.APP_ENV}")
    logger.info(f"  - Uploads: {settings.uploads_dir}")
    logger.info(f"  - Simplifier: {settings.PYTHON_EXECUTABLE} {settings.SIMPLIFIER_SCRIPT}")
