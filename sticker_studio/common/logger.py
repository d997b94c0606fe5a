"""
Logging for Sticker Studio

Every core and front-end module gets its logger from get_logger(). Loggers
write to stdout, do not propagate to the root logger, and follow a
process-wide level that the studio config can change at runtime.

Usage:
    from sticker_studio.common.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Loaded image (640x480)")
    logger.debug("Discarding stale segmentation result")
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LevelType = Union[int, str]

_loggers: Dict[str, logging.Logger] = {}
_studio_level: LevelType = logging.INFO


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def get_logger(name: str, level: Optional[LevelType] = None) -> logging.Logger:
    """
    Get the studio logger for a module.

    Args:
        name: Logger name, normally __name__
        level: Level for this logger; defaults to the current studio level

    Returns:
        Cached logging.Logger with a stdout handler
    """
    logger = _loggers.get(name)
    if logger is not None:
        return logger

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_formatter())
        logger.addHandler(handler)
        logger.propagate = False
    _apply_level(logger, _studio_level if level is None else level)

    _loggers[name] = logger
    return logger


def _apply_level(logger: logging.Logger, level: LevelType) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


def set_log_level(name: str, level: LevelType) -> None:
    """Change the level of one studio logger; unknown names are ignored."""
    if name in _loggers:
        _apply_level(_loggers[name], level)


def set_global_log_level(level: LevelType) -> None:
    """
    Change the studio-wide level.

    Applies to existing loggers and to those created afterwards.

    Args:
        level: Number or name such as "DEBUG"
    """
    global _studio_level
    _studio_level = level
    for logger in _loggers.values():
        _apply_level(logger, level)


def add_file_handler(log_file: Path, level: LevelType = logging.DEBUG) -> logging.FileHandler:
    """
    Mirror every studio logger created so far into a file.

    Returns:
        The attached handler
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    for logger in _loggers.values():
        logger.addHandler(handler)
    return handler
