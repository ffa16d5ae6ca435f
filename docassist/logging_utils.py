from __future__ import annotations

import logging
import sys

LOG_LEVEL_OPTIONS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def normalize_log_level(level: str | None) -> str:
    value = str(level or DEFAULT_LOG_LEVEL).strip().upper()
    return value if value in LOG_LEVEL_OPTIONS else DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    A handler bound to an older sys.stderr (possibly closed) is replaced.
    """
    global _handler
    logger = logging.getLogger("docassist")
    logger.setLevel(getattr(logging, normalize_log_level(level)))
    if _handler is not None and _handler.stream is not sys.stderr:
        logger.removeHandler(_handler)
        _handler = None
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    return logger
