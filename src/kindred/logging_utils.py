"""Logging utilities.

The library only emits records through module loggers; use
`configure_logging()` from entrypoints to get consistent console output.
"""

import logging
from typing import Optional

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def parse_level(level: str) -> int:
    name = (level or "").strip().upper()
    if name in _LEVELS:
        return _LEVELS[name]
    try:
        return int(name)
    except ValueError as e:
        raise ValueError(f"Unknown log level: {level!r}") from e


def configure_logging(level: str = "INFO", logger_name: Optional[str] = "kindred") -> logging.Logger:
    """Configure console logging for a logger.

    Safe to call repeatedly: an existing stream handler is reconfigured
    instead of adding a duplicate.

    Args:
        level: level name ("INFO", "DEBUG") or number ("20")
        logger_name: logger to configure; None configures the root logger

    Returns:
        The configured logger
    """
    target = logging.getLogger(logger_name)
    target.setLevel(parse_level(level))
    formatter = logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    for handler in target.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setFormatter(formatter)
            handler.setLevel(target.level)
            return target

    handler = logging.StreamHandler()
    handler.setLevel(target.level)
    handler.setFormatter(formatter)
    target.addHandler(handler)
    return target
