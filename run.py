"""
Application Runner

This script is the entry point for running the application.
Use: python run.py
"""

import sys

import uvicorn

from reviewx.config import FatalConfigurationError, get_settings
from reviewx.logging_config import get_logger

logger = get_logger(__name__)


def main():
    """Run the application with uvicorn."""
    try:
        settings = get_settings()
    except FatalConfigurationError as e:
        logger.critical("Configuration validation failed", error=str(e))
        sys.exit(1)

    uvicorn.run(
        "reviewx.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,  # Disable for production
        log_level=settings.log_level.lower(),
        access_log=settings.log_requests
    )


if __name__ == "__main__":
    main()
