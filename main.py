"""
Audio Transcription Bot.

Entry point for the Slack audio transcription service.
"""

import asyncio
import sys

from ddtrace import patch_all

from dependencies import get_config, get_worker
from exceptions import ConfigurationError
from structured_logging import setup_logging

patch_all()

logger = setup_logging()


def main():
    """Validates configuration and starts the worker."""
    try:
        get_config()
    except ConfigurationError as e:
        logger.error(str(e), extra={"missing": e.missing})
        sys.exit(1)

    worker = get_worker()
    asyncio.run(worker.start())


if __name__ == "__main__":
    main()
