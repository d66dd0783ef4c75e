"""Process entry point for the registration payments service."""
import uvicorn
from loguru import logger
from pydantic import ValidationError

from config.logging_config import setup_logging
from config.settings import get_settings


def run() -> None:
    """Validate configuration and serve the application with uvicorn.

    Raises:
        SystemExit: If a required setting is missing or blank.
    """
    setup_logging()
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.critical(f"Invalid configuration, refusing to start: {e}")
        raise SystemExit(1) from e

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
