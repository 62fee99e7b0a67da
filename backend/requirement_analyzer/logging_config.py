import logging
from typing import Optional

from requirement_analyzer.config import LOG_LEVEL

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the package logger once (stream handler, level from LOG_LEVEL)."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (level or LOG_LEVEL).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("requirement_analyzer")
    logger.setLevel(resolved)
    logger.addHandler(handler)

    _CONFIGURED = True
