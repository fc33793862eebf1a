"""Process entry point for the task_web_svc API server."""

import logging

import uvicorn

from . import config
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Configure logging and serve the API with uvicorn."""
    setup_logging(config.LOG_LEVEL)
    logger.info(f"Server is running on http://{config.SERVICE_HOST}:{config.SERVICE_PORT}")
    uvicorn.run(
        "task_web_svc.api.app:app",
        host=config.SERVICE_HOST,
        port=config.SERVICE_PORT,
        log_config=None
    )


if __name__ == "__main__":
    main()
