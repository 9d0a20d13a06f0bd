"""
Logging Configuration
Attaches console (and optionally file) handlers to the 'snapsurf' logger.
Library modules only create child loggers; nothing is printed until an
application calls setup_logging().
"""
import logging
import sys
from typing import Optional, Union

from .config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL

ROOT_LOGGER = "snapsurf"


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return resolved
    return level


def setup_logging(level: Union[int, str, None] = None,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'snapsurf' logger and returns it.

    Args:
        level: A logging level or its name ("DEBUG", "info", ...).
            Defaults to SNAPSURF_LOG_LEVEL from the environment.
        log_file: Optional path; the file is truncated and receives the same
            records as the console.
    """
    level = _resolve_level(level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Re-running replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s.", logging.getLevelName(level))
    return logger
