"""Logging helpers shared across ZCF modules."""

import os
import sys
from typing import Optional

from loguru import logger as loguru_logger

_LOG_CONFIGURED = False
_LOG_LEVEL = "WARNING"
_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} [{extra[name]}] <level>{level}</level> {message}"


def _resolve_log_level(level: Optional[str]) -> str:
    candidate = level or os.environ.get("ZCF_LOG_LEVEL") or _LOG_LEVEL
    if isinstance(candidate, str) and candidate.strip():
        return candidate.strip().upper()
    return _LOG_LEVEL


def configure_logging(level: Optional[str] = None, force: bool = False) -> None:
    """Install the stderr sink once; pass force=True to change the level."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED and not force:
        return
    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level=_resolve_log_level(level),
        format=_LOG_FORMAT,
        colorize=sys.stderr.isatty(),
    )
    _LOG_CONFIGURED = True


def get_logger(name: Optional[str] = None):
    """Return a logger bound to a module name."""
    configure_logging()
    return loguru_logger.bind(name=name or "zcf")
