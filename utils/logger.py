"""
utils/logger.py
---------------
Logging setup for the catalog store.
Modules call `get_logger(__name__)`; the first call installs a stdout
handler on the root logger at LOG_LEVEL and turns down passlib's chatter
about hash backends.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that only need to speak up on problems.
_QUIET_LOGGERS = ("passlib",)

_configured = False


def resolve_level(name: str) -> int:
    """
    Translate a level name such as ``"debug"`` into its logging constant.

    Unknown names fall back to INFO rather than failing at import time.
    """
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(resolve_level(LOG_LEVEL))
    root.addHandler(handler)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for `name` (usually ``__name__``), configuring logging on first use."""
    _configure_root()
    return logging.getLogger(name)
