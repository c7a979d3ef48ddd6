"""
Logging setup for the NPC memory backend.

Call setup_logging() once at startup; every module then logs through its own
named logger (logging.getLogger("PromptSync"), ...).
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries whose per-request chatter hides the record pipeline at DEBUG
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "sqlalchemy.engine")


class RulesFetchAccessFilter(logging.Filter):
    """Drops uvicorn access lines for the app fetching its own static rules document."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/static/" not in record.getMessage()


def setup_logging(debug_mode: bool = True, log_level: Optional[int] = None) -> None:
    """
    Configure the root logger.

    Args:
        debug_mode: Log at DEBUG instead of INFO (parse skips are only visible at DEBUG)
        log_level: Explicit level, overrides debug_mode
    """
    if log_level is None:
        log_level = logging.DEBUG if debug_mode else logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    logging.getLogger("uvicorn.access").addFilter(RulesFetchAccessFilter())

    logging.getLogger("Logging").info(f"Logging configured with level: {logging.getLevelName(log_level)}")
