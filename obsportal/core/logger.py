# obsportal/core/logger.py
import logging
import sys

from obsportal.core.config import CONFIG

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"

_logger = logging.getLogger("obsportal")
if not _logger.handlers:
    _logger.setLevel(CONFIG.LOG_LEVEL.upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    _logger.addHandler(handler)
    # uvicorn has its own handlers; keep portal lines from printing twice
    _logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """`get_logger("api")` -> the "obsportal.api" child logger."""
    if name:
        return _logger.getChild(name)
    return _logger
