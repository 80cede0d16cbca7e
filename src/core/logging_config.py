"""Logging setup shared by the console and library entry points."""

import logging
from typing import Optional

from config import LOG_FORMAT, LOG_LEVEL

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once.

    Args:
        level: Optional level name overriding LOG_LEVEL.
    """
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    _configured = True
