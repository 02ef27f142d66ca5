"""Run the API with uvicorn: ``python -m legalease``."""

import uvicorn

from legalease.core.settings import get_settings


def main() -> None:
    settings = get_settings()
    # log_config=None keeps the structured handlers installed by create_app
    uvicorn.run(
        "legalease.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
