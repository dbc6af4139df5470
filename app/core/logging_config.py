# /app/core/logging_config.py

import logging

from .config import Settings


def setup_logging(settings: Settings) -> None:
    """
    Adds a stream handler to the root logger unless one is already configured.

    Handlers installed by the server or the test runner are left in place.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        root_logger.addHandler(handler)

    # SQL echo is far too chatty at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
