"""Package logger setup.

Every module logs under the ``stringsgen`` namespace, so the CLI's
``--log-level`` controls the whole package with one call.
"""

import logging
import os
from typing import Optional

LOGGER_NAME = "stringsgen"

LEVEL_ENV_VAR = "STRINGSGEN_LOG_LEVEL"


def setup_logging(level: Optional[str] = None) -> None:
    """Send stringsgen log records to stderr at the given level.

    Args:
        level: Level name such as ``DEBUG`` or ``INFO``. Falls back to
            ``STRINGSGEN_LOG_LEVEL``, then ``WARNING``.
    """
    level = level or os.environ.get(LEVEL_ENV_VAR, "WARNING")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, nested under the package namespace."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
